"""Tests for the Google Secret Manager editor."""

import json
from unittest.mock import MagicMock

import pytest

from extsecret.secrets.domain.exceptions import BackendWriteError
from extsecret.secrets.domain.models import BackendType, ExternalSecretRef, KeyPropertyBatch
from extsecret.secrets.editors import GoogleSecretManagerEditor
from extsecret.shared.infrastructure.execution import CommandResult

SECRET = ExternalSecretRef("bucketrepo", "jx", BackendType.GCP_SECRETS_MANAGER, project_id="my-project")


def result(exit_code=0, stdout="", stderr=""):
    return CommandResult(command="gcloud", exit_code=exit_code, stdout=stdout, stderr=stderr, duration=0.01)


def batch_of(**values):
    batch = KeyPropertyBatch(secret=SECRET, key="bucketrepo")
    for k, v in values.items():
        batch.add(k, v)
    return batch


def test_creates_secret_and_adds_json_version():
    executor = MagicMock()
    executor.run.side_effect = [result(1, stderr="NOT_FOUND"), result(0), result(0)]

    GoogleSecretManagerEditor(executor).write(batch_of(username="admin", password="hunter2"))

    commands = [c.args[0] for c in executor.run.call_args_list]
    assert commands[0] == ["gcloud", "secrets", "describe", "bucketrepo", "--project=my-project"]
    assert commands[1] == [
        "gcloud", "secrets", "create", "bucketrepo", "--replication-policy=automatic", "--project=my-project",
    ]
    assert commands[2] == ["gcloud", "secrets", "versions", "add", "bucketrepo", "--data-file=-", "--project=my-project"]
    payload = executor.run.call_args_list[2].kwargs["input_text"]
    assert json.loads(payload) == {"username": "admin", "password": "hunter2"}


def test_merges_latest_version():
    executor = MagicMock()
    executor.run.side_effect = [
        result(0),
        result(0, stdout=json.dumps({"password": "old", "email": "ops@example.com"})),
        result(0),
    ]

    GoogleSecretManagerEditor(executor).write(batch_of(password="hunter2"))

    payload = json.loads(executor.run.call_args_list[2].kwargs["input_text"])
    assert payload == {"password": "hunter2", "email": "ops@example.com"}


def test_single_unnamed_property_is_stored_raw():
    executor = MagicMock()
    executor.run.side_effect = [result(0), result(0)]
    batch = KeyPropertyBatch(secret=SECRET, key="bucketrepo")
    batch.add("", "plain-token")

    GoogleSecretManagerEditor(executor).write(batch)

    assert executor.run.call_count == 2
    assert executor.run.call_args_list[1].kwargs["input_text"] == "plain-token"


def test_without_project():
    executor = MagicMock()
    executor.run.side_effect = [result(0), result(0, stdout="{}"), result(0)]
    secret = ExternalSecretRef("bucketrepo", "jx", BackendType.GCP_SECRETS_MANAGER)
    batch = KeyPropertyBatch(secret=secret, key="bucketrepo")
    batch.add("password", "hunter2")

    GoogleSecretManagerEditor(executor).write(batch)

    for call in executor.run.call_args_list:
        assert not any(arg.startswith("--project") for arg in call.args[0])


def test_create_failure():
    executor = MagicMock()
    executor.run.side_effect = [result(1), result(1, stderr="PERMISSION_DENIED")]

    with pytest.raises(BackendWriteError, match="PERMISSION_DENIED"):
        GoogleSecretManagerEditor(executor).write(batch_of(password="hunter2"))


def test_add_version_failure():
    executor = MagicMock()
    executor.run.side_effect = [result(0), result(0, stdout="{}"), result(1, stderr="quota exceeded")]

    with pytest.raises(BackendWriteError) as exc_info:
        GoogleSecretManagerEditor(executor).write(batch_of(password="hunter2"))

    assert "quota exceeded" in str(exc_info.value)
    assert "hunter2" not in str(exc_info.value)
