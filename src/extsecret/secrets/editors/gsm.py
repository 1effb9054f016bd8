"""
Google Secret Manager Editor

Drives the ``gcloud`` CLI. A key holding a single unnamed property stores the
raw value; otherwise the secret version is a JSON document of properties and
new values are merged into the latest version.
"""

import json

from extsecret.secrets.domain.exceptions import BackendWriteError
from extsecret.secrets.domain.models import BackendType, KeyPropertyBatch
from extsecret.shared.infrastructure.execution import CommandExecutor
from extsecret.shared.infrastructure.logging import get_logger

from .base import EditorContext, SecretEditor
from .registry import EditorRegistry

logger = get_logger(__name__)

GCLOUD_BINARY = "gcloud"


class GoogleSecretManagerEditor(SecretEditor):
    def __init__(self, executor: CommandExecutor, binary: str = GCLOUD_BINARY):
        self._executor = executor
        self._binary = binary

    @classmethod
    def from_context(cls, context: EditorContext) -> "GoogleSecretManagerEditor":
        return cls(context.executor)

    @property
    def backend_type(self) -> BackendType:
        return BackendType.GCP_SECRETS_MANAGER

    def _gcloud(self, args: list[str], project_id: str | None, input_text: str | None = None):
        command = [self._binary, "secrets", *args]
        if project_id:
            command.append(f"--project={project_id}")
        return self._executor.run(command, input_text=input_text)

    def _ensure_secret(self, key: str, project_id: str | None) -> bool:
        """Create the secret if needed; returns True if it already existed."""
        if self._gcloud(["describe", key], project_id).is_success:
            return True
        result = self._gcloud(["create", key, "--replication-policy=automatic"], project_id)
        if not result.is_success:
            raise BackendWriteError(f"failed to create secret {key}: {result.stderr.strip()}")
        return False

    def _latest_properties(self, key: str, project_id: str | None) -> dict[str, str]:
        result = self._gcloud(["versions", "access", "latest", f"--secret={key}"], project_id)
        if not result.is_success or not result.stdout.strip():
            return {}
        try:
            document = json.loads(result.stdout)
        except json.JSONDecodeError:
            logger.warning("secret_version_not_json", key=key)
            return {}
        return document if isinstance(document, dict) else {}

    @staticmethod
    def is_raw(batch: KeyPropertyBatch) -> bool:
        return len(batch.properties) == 1 and not batch.properties[0].property

    def write(self, batch: KeyPropertyBatch) -> None:
        project_id = batch.secret.project_id
        existed = self._ensure_secret(batch.key, project_id)

        if self.is_raw(batch):
            payload = batch.properties[0].value
        else:
            data = self._latest_properties(batch.key, project_id) if existed else {}
            data.update(batch.as_dict())
            payload = json.dumps(data, sort_keys=True)

        result = self._gcloud(["versions", "add", batch.key, "--data-file=-"], project_id, input_text=payload)
        if not result.is_success:
            raise BackendWriteError(f"failed to save {batch} to secret manager: {result.stderr.strip()}")
        logger.info("secret_updated", backend=self.backend_type.value, key=batch.key, project=project_id,
                    properties=batch.property_names())


EditorRegistry.register(BackendType.GCP_SECRETS_MANAGER, GoogleSecretManagerEditor.from_context)
