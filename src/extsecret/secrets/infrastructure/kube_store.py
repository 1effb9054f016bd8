"""
Kubernetes Secret store adapter.

Uses the official ``kubernetes`` client. Secret data travels base64 encoded
over the API; this adapter exposes raw bytes.
"""

import base64
from collections.abc import Mapping
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from extsecret.secrets.domain.exceptions import SecretNotFoundError, SecretStoreError
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def load_core_api() -> client.CoreV1Api:
    """CoreV1Api from the local kubeconfig, falling back to the in-cluster service account."""
    try:
        config.load_kube_config()
    except ConfigException:
        logger.debug("kubeconfig_unavailable_trying_incluster")
        try:
            config.load_incluster_config()
        except ConfigException as e:
            raise SecretStoreError(f"failed to configure kubernetes client: {e}") from e
    return client.CoreV1Api()


class KubernetesSecretStore:
    def __init__(self, core_api: Any = None):
        self._api = core_api if core_api is not None else load_core_api()

    def get(self, name: str, namespace: str) -> dict[str, bytes]:
        try:
            secret = self._api.read_namespaced_secret(name, namespace)
        except ApiException as e:
            if e.status == 404:
                raise SecretNotFoundError(name, namespace) from e
            raise SecretStoreError(f"failed to get secret {namespace}/{name}: {e.reason}") from e
        except (HTTPError, OSError) as e:
            raise SecretStoreError(f"failed to get secret {namespace}/{name}: {e}") from e
        return {k: base64.b64decode(v) for k, v in (secret.data or {}).items()}

    def put(self, name: str, namespace: str, data: Mapping[str, bytes]) -> None:
        encoded = {k: base64.b64encode(v).decode("ascii") for k, v in data.items()}
        try:
            try:
                self._api.read_namespaced_secret(name, namespace)
            except ApiException as e:
                if e.status != 404:
                    raise
                body = client.V1Secret(
                    metadata=client.V1ObjectMeta(name=name, namespace=namespace),
                    data=encoded,
                    type="Opaque",
                )
                self._api.create_namespaced_secret(namespace, body)
                logger.debug("secret_created", secret=name, namespace=namespace)
                return
            self._api.patch_namespaced_secret(name, namespace, {"data": encoded})
            logger.debug("secret_patched", secret=name, namespace=namespace)
        except ApiException as e:
            raise SecretStoreError(f"failed to save secret {namespace}/{name}: {e.reason}") from e
        except (HTTPError, OSError) as e:
            raise SecretStoreError(f"failed to save secret {namespace}/{name}: {e}") from e
