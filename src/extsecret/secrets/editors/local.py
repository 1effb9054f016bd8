"""
Local Secret Editor

Writes properties into a Kubernetes Secret named after the key, in the
namespace of the ExternalSecret.
"""

from extsecret.secrets.domain.exceptions import BackendWriteError, SecretNotFoundError, SecretStoreError
from extsecret.secrets.domain.models import BackendType, KeyPropertyBatch
from extsecret.secrets.domain.ports import SecretStore
from extsecret.shared.infrastructure.logging import get_logger

from .base import EditorContext, SecretEditor
from .registry import EditorRegistry

logger = get_logger(__name__)


class LocalSecretEditor(SecretEditor):
    def __init__(self, store: SecretStore):
        self._store = store

    @classmethod
    def from_context(cls, context: EditorContext) -> "LocalSecretEditor":
        store = context.store
        if store is None:
            from extsecret.secrets.infrastructure.kube_store import KubernetesSecretStore

            store = KubernetesSecretStore()
            context.store = store
        return cls(store)

    @property
    def backend_type(self) -> BackendType:
        return BackendType.LOCAL

    def write(self, batch: KeyPropertyBatch) -> None:
        namespace = batch.secret.namespace
        try:
            data = dict(self._store.get(batch.key, namespace))
        except SecretNotFoundError:
            data = {}
        except SecretStoreError as e:
            raise BackendWriteError(
                f"failed to read secret {namespace}/{batch.key} before saving {batch}: {e}"
            ) from e

        for p in batch.properties:
            data[p.property] = p.value.encode("utf-8")

        try:
            self._store.put(batch.key, namespace, data)
        except SecretStoreError as e:
            raise BackendWriteError(f"failed to save {batch} to secret {namespace}/{batch.key}: {e}") from e
        logger.info("secret_updated", backend=self.backend_type.value, namespace=namespace, key=batch.key,
                    properties=batch.property_names())


EditorRegistry.register(BackendType.LOCAL, LocalSecretEditor.from_context)
