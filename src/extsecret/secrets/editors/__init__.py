"""
Secret editors, one per backend type.

Importing this package registers the built-in editors.
"""

from .base import EditorContext, SecretEditor
from .registry import EditorFactory, EditorRegistry
from .gsm import GoogleSecretManagerEditor
from .local import LocalSecretEditor
from .vault import VaultSecretEditor

__all__ = [
    "EditorContext",
    "EditorFactory",
    "EditorRegistry",
    "GoogleSecretManagerEditor",
    "LocalSecretEditor",
    "SecretEditor",
    "VaultSecretEditor",
]
