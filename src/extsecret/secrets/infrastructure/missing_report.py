"""
Missing-property report.

The verify pass that compares ExternalSecrets with the store lives outside
this tool; it hands over its findings as a YAML (or JSON) report:

    secrets:
    - name: jenkins-x-bucketrepo
      namespace: jx
      backendType: local
      entries:
      - key: jenkins-x-bucketrepo
        properties: [username, password]
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from extsecret.secrets.domain.exceptions import ConfigLoadError
from extsecret.secrets.domain.models import BackendType, ExternalSecretRef, MissingEntry, SecretGaps


class ReportEntry(BaseModel):
    key: str
    properties: list[str] = Field(default_factory=list)


class ReportSecret(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    namespace: str = "default"
    backend_type: str = Field(default="local", alias="backendType")
    project_id: str | None = Field(default=None, alias="projectID")
    entries: list[ReportEntry] = Field(default_factory=list)

    def to_gaps(self) -> SecretGaps:
        secret = ExternalSecretRef(
            name=self.name,
            namespace=self.namespace,
            backend_type=BackendType.parse(self.backend_type),
            project_id=self.project_id,
        )
        entries = tuple(
            MissingEntry(key=e.key, properties=tuple(e.properties)) for e in self.entries if e.properties
        )
        return SecretGaps(secret=secret, entries=entries)


class MissingReport(BaseModel):
    secrets: list[ReportSecret] = Field(default_factory=list)


class MissingReportVerifier:
    """Verifier that replays a report produced by an external verify pass."""

    def __init__(self, report: MissingReport):
        self.report = report

    @classmethod
    def load(cls, path: Path) -> "MissingReportVerifier":
        """
        Raises:
            ConfigLoadError: If the report is missing or malformed
        """
        try:
            data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"failed to read missing-property report {path}: {e}") from e
        if data is None:
            return cls(MissingReport())
        try:
            return cls(MissingReport.model_validate(data))
        except ValidationError as e:
            raise ConfigLoadError(f"invalid missing-property report {path}: {e}") from e

    def verify(self, namespace: str | None = None) -> list[SecretGaps]:
        """
        Gaps of every ExternalSecret in the report with at least one missing property.

        Raises:
            UnknownBackendTypeError: If a secret names an unknown backend
        """
        gaps = []
        for secret in self.report.secrets:
            if namespace and secret.namespace != namespace:
                continue
            item = secret.to_gaps()
            if item.entries:
                gaps.append(item)
        return gaps
