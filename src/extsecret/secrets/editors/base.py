"""
Base Secret Editor Interface

Every backend integration (local Kubernetes secrets, Vault, Google Secret
Manager, ...) implements this interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from extsecret.secrets.domain.models import BackendType, KeyPropertyBatch
from extsecret.secrets.domain.ports import SecretStore
from extsecret.shared.infrastructure.execution import CommandExecutor


@dataclass
class EditorContext:
    """Collaborators shared by the editors of a run."""
    store: SecretStore | None = None
    executor: CommandExecutor = field(default_factory=CommandExecutor)


class SecretEditor(ABC):
    """
    Writes resolved properties back to a secret store.
    """

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """
        The backend type

        Returns:
            BackendType enum value
        """
        pass

    @abstractmethod
    def write(self, batch: KeyPropertyBatch) -> None:
        """
        Persist every property of one key in a single write.

        Properties of the key that are not in the batch are preserved.

        Args:
            batch: The key and its resolved properties

        Raises:
            BackendWriteError: If the store rejects the write
        """
        pass
