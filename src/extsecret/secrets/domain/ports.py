"""
Collaborator interfaces the resolution engine consumes.

Concrete adapters live in extsecret.secrets.infrastructure; tests plug in
in-memory versions.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from extsecret.secrets.domain.models import PropertySpec, SecretGaps


class SecretStore(Protocol):
    """Reads and writes secret payloads (for example Kubernetes Secrets)."""

    def get(self, name: str, namespace: str) -> dict[str, bytes]:
        """
        Return the secret payload.

        Raises:
            SecretNotFoundError: If there is no such secret
            SecretStoreError: On any other failure
        """
        ...

    def put(self, name: str, namespace: str, data: Mapping[str, bytes]) -> None:
        """Create the secret or replace its payload."""
        ...


class SchemaProvider(Protocol):
    def find_property(self, object_name: str, property_name: str) -> PropertySpec | None:
        ...


class InputSurface(Protocol):
    """Interactive operator input."""

    def pick_password(self, message: str, help: str) -> str:
        """Ask for a masked value. Raises PromptError if the operator aborts."""
        ...

    def confirm(self, message: str, help: str) -> bool:
        ...


class RequirementsLoader(Protocol):
    def load(self) -> Mapping[str, Any]:
        """Raises ConfigLoadError if the requirements cannot be read."""
        ...


class Verifier(Protocol):
    def verify(self, namespace: str | None = None) -> list[SecretGaps]:
        ...
