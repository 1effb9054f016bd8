"""
Editor Registry for secret backends.

Registry-based factory keyed by BackendType. Editors self-register on module
import; a registry instance memoizes one editor per backend type for a run.
"""

import threading
from collections.abc import Callable

from extsecret.secrets.domain.exceptions import UnsupportedBackendError
from extsecret.secrets.domain.models import BackendType, ExternalSecretRef
from extsecret.shared.infrastructure.logging import get_logger

from .base import EditorContext, SecretEditor

logger = get_logger(__name__)

EditorFactory = Callable[[EditorContext], SecretEditor]


class EditorRegistry:
    """Registry of editor factories plus the per-run editor cache."""

    _factories: dict[BackendType, EditorFactory] = {}

    def __init__(self, context: EditorContext | None = None):
        self._context = context or EditorContext()
        self._editors: dict[BackendType, SecretEditor] = {}
        self._locks: dict[BackendType, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @classmethod
    def register(cls, backend_type: BackendType, factory: EditorFactory) -> None:
        """
        Register an editor factory.

        Args:
            backend_type: The backend the editor handles
            factory: Callable taking the EditorContext and returning a SecretEditor

        Example:
            EditorRegistry.register(BackendType.VAULT, VaultSecretEditor)
        """
        cls._factories[backend_type] = factory

    @classmethod
    def available(cls) -> list[BackendType]:
        return list(cls._factories.keys())

    @classmethod
    def is_registered(cls, backend_type: BackendType) -> bool:
        return backend_type in cls._factories

    @classmethod
    def clear(cls) -> None:
        """Clear all registered editors (mainly for testing)."""
        cls._factories.clear()

    def _lock_for(self, backend_type: BackendType) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(backend_type, threading.Lock())

    def get_editor(self, secret: ExternalSecretRef) -> SecretEditor:
        """
        Return the editor for the secret's backend, creating it on first use.

        Raises:
            UnsupportedBackendError: If no editor is registered for the backend
        """
        backend_type = secret.backend_type
        editor = self._editors.get(backend_type)
        if editor is not None:
            return editor

        with self._lock_for(backend_type):
            editor = self._editors.get(backend_type)
            if editor is None:
                factory = self._factories.get(backend_type)
                if factory is None:
                    raise UnsupportedBackendError(backend_type, [b.value for b in self.available()])
                logger.info("creating_secret_editor", backend=backend_type.value, secret=secret.name)
                editor = factory(self._context)
                self._editors[backend_type] = editor
        return editor
