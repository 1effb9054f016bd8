"""
Secret schema loader.

Loads ``.jx/gitops/secret-schema.yaml``, which describes how to ask for (or
compute) each property of each secret:

    apiVersion: gitops.jenkins-x.io/v1alpha1
    kind: Schema
    spec:
      objects:
      - name: jenkins-x-bucketrepo
        properties:
        - name: password
          question: Bucket repository password
          help: Used by the chart repository
        - name: htpasswd
          template: '{{ htpasswdSecret("jenkins-x-bucketrepo", "username", "password") }}'
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from extsecret.secrets.domain.exceptions import SchemaLookupError
from extsecret.secrets.domain.models import PropertyKind, PropertySpec
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

LABEL_KIND = "kind"


class SchemaProperty(BaseModel):
    name: str
    question: str = ""
    help: str = ""
    template: str | None = None
    default: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)

    def to_spec(self) -> PropertySpec:
        return PropertySpec(
            name=self.name,
            question=self.question,
            help=self.help,
            kind=PropertyKind.parse(self.labels.get(LABEL_KIND)),
            template=self.template,
            default=self.default,
        )


class SchemaObject(BaseModel):
    name: str
    properties: list[SchemaProperty] = Field(default_factory=list)


class SchemaSpec(BaseModel):
    objects: list[SchemaObject] = Field(default_factory=list)


class Schema(BaseModel):
    spec: SchemaSpec = Field(default_factory=SchemaSpec)


class YamlSchemaProvider:
    """SchemaProvider backed by a schema YAML file."""

    def __init__(self, schema: Schema | None = None):
        self.schema = schema or Schema()

    @classmethod
    def load(cls, path: Path) -> "YamlSchemaProvider":
        """
        Load a schema file; a missing file yields an empty schema.

        Raises:
            SchemaLookupError: If the file is not valid YAML or not a schema
        """
        if not path.exists():
            logger.debug("schema_file_not_found", path=str(path))
            return cls()
        try:
            data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SchemaLookupError(f"invalid YAML in schema {path}: {e}") from e
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise SchemaLookupError(f"schema {path} must be a YAML mapping")
        try:
            return cls(Schema.model_validate(data))
        except ValidationError as e:
            raise SchemaLookupError(f"invalid schema {path}: {e}") from e

    def find_property(self, object_name: str, property_name: str) -> PropertySpec | None:
        for obj in self.schema.spec.objects:
            if obj.name != object_name:
                continue
            for prop in obj.properties:
                if prop.name == property_name:
                    return prop.to_spec()
        return None
