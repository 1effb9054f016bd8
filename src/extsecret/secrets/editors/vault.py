"""
Vault Secret Editor

Drives the ``vault`` CLI, so VAULT_ADDR/VAULT_TOKEN and friends come from
the environment exactly as for an operator session. The existing properties
of the key are read first and the merged document is put back in one write,
passed on stdin so values never appear in the process arguments.
"""

import json
from typing import Any

from extsecret.secrets.domain.exceptions import BackendWriteError
from extsecret.secrets.domain.models import BackendType, KeyPropertyBatch
from extsecret.shared.infrastructure.execution import CommandExecutor
from extsecret.shared.infrastructure.logging import get_logger

from .base import EditorContext, SecretEditor
from .registry import EditorRegistry

logger = get_logger(__name__)

VAULT_BINARY = "vault"
NO_VALUE_MARKER = "No value found"


class VaultSecretEditor(SecretEditor):
    def __init__(self, executor: CommandExecutor, binary: str = VAULT_BINARY):
        self._executor = executor
        self._binary = binary

    @classmethod
    def from_context(cls, context: EditorContext) -> "VaultSecretEditor":
        return cls(context.executor)

    @property
    def backend_type(self) -> BackendType:
        return BackendType.VAULT

    def read(self, key: str) -> dict[str, Any]:
        """Current properties of a key; empty if vault has no value at that path."""
        result = self._executor.run([self._binary, "kv", "get", "-format=json", key])
        if not result.is_success:
            if NO_VALUE_MARKER in result.stderr or NO_VALUE_MARKER in result.stdout:
                return {}
            raise BackendWriteError(f"failed to read vault key {key}: {result.stderr.strip()}")

        try:
            document = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise BackendWriteError(f"failed to parse vault output for key {key}: {e}") from e

        if not isinstance(document, dict):
            raise BackendWriteError(f"unexpected vault output for key {key}: not a JSON object")
        data = document.get("data") or {}
        if not isinstance(data, dict):
            raise BackendWriteError(f"unexpected vault output for key {key}: data is not a JSON object")
        # kv v2 nests the payload next to its metadata
        if isinstance(data.get("data"), dict) and "metadata" in data:
            data = data["data"]
        return dict(data)

    def write(self, batch: KeyPropertyBatch) -> None:
        data = self.read(batch.key)
        data.update(batch.as_dict())

        result = self._executor.run(
            [self._binary, "kv", "put", batch.key, "-"],
            input_text=json.dumps(data),
        )
        if not result.is_success:
            raise BackendWriteError(f"failed to save {batch} to vault: {result.stderr.strip()}")
        logger.info("secret_updated", backend=self.backend_type.value, key=batch.key,
                    properties=batch.property_names())


EditorRegistry.register(BackendType.VAULT, VaultSecretEditor.from_context)
