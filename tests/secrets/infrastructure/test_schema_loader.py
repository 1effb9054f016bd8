"""Tests for the secret schema loader."""

import pytest

from extsecret.secrets.domain.exceptions import SchemaLookupError
from extsecret.secrets.domain.models import PropertyKind
from extsecret.secrets.infrastructure import YamlSchemaProvider

SCHEMA = """\
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
    - name: enabled
      labels:
        kind: confirm
"""


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "secret-schema.yaml"
    path.write_text(SCHEMA)
    return path


def test_finds_property(schema_file):
    provider = YamlSchemaProvider.load(schema_file)

    spec = provider.find_property("jenkins-x-bucketrepo", "password")

    assert spec.question == "Bucket repository password"
    assert spec.help == "Used by the chart repository"
    assert spec.template is None
    assert spec.kind == PropertyKind.TEXT


def test_template_property(schema_file):
    spec = YamlSchemaProvider.load(schema_file).find_property("jenkins-x-bucketrepo", "htpasswd")

    assert spec.template.startswith("{{ htpasswdSecret(")


def test_confirm_label(schema_file):
    spec = YamlSchemaProvider.load(schema_file).find_property("jenkins-x-bucketrepo", "enabled")

    assert spec.kind == PropertyKind.CONFIRM


def test_unknown_object_or_property(schema_file):
    provider = YamlSchemaProvider.load(schema_file)

    assert provider.find_property("other", "password") is None
    assert provider.find_property("jenkins-x-bucketrepo", "email") is None


def test_missing_file_is_empty_schema(tmp_path):
    provider = YamlSchemaProvider.load(tmp_path / "absent.yaml")

    assert provider.find_property("jenkins-x-bucketrepo", "password") is None


def test_invalid_yaml(tmp_path):
    path = tmp_path / "secret-schema.yaml"
    path.write_text("spec: [unclosed")

    with pytest.raises(SchemaLookupError):
        YamlSchemaProvider.load(path)


def test_invalid_structure(tmp_path):
    path = tmp_path / "secret-schema.yaml"
    path.write_text("spec:\n  objects:\n  - properties: []\n")

    with pytest.raises(SchemaLookupError, match="invalid schema"):
        YamlSchemaProvider.load(path)
