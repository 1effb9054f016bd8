"""Secret resolution domain: models, errors and collaborator interfaces."""

from .exceptions import (
    BackendWriteError,
    ConfigLoadError,
    ExtSecretError,
    PromptError,
    PropertyResolutionError,
    ResolutionFailedError,
    SchemaLookupError,
    SecretNotFoundError,
    SecretStoreError,
    TemplateCompileError,
    TemplateError,
    TemplateExecError,
    UnknownBackendTypeError,
    UnsupportedBackendError,
)
from .models import (
    BackendType,
    ExternalSecretRef,
    KeyPropertyBatch,
    MissingEntry,
    PropertyKind,
    PropertySpec,
    PropertyValue,
    SecretGaps,
)
from .names import resolve_resource_names

__all__ = [
    "BackendType",
    "BackendWriteError",
    "ConfigLoadError",
    "ExtSecretError",
    "ExternalSecretRef",
    "KeyPropertyBatch",
    "MissingEntry",
    "PromptError",
    "PropertyKind",
    "PropertyResolutionError",
    "PropertySpec",
    "PropertyValue",
    "ResolutionFailedError",
    "SchemaLookupError",
    "SecretGaps",
    "SecretNotFoundError",
    "SecretStoreError",
    "TemplateCompileError",
    "TemplateError",
    "TemplateExecError",
    "UnknownBackendTypeError",
    "UnsupportedBackendError",
    "resolve_resource_names",
]
