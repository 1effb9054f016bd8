"""
Secret resolution errors.

Not-found conditions inside template functions are not errors: they degrade to
an empty string. Everything here is fatal for the property, key or run that
raised it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from extsecret.secrets.domain.models import ExternalSecretRef


class ExtSecretError(Exception):
    """Base class for all extsecret errors."""


class SecretNotFoundError(ExtSecretError):
    """The secret store has no secret with this name."""

    def __init__(self, name: str, namespace: str):
        self.name = name
        self.namespace = namespace
        super().__init__(f"secret {name} not found in namespace {namespace}")


class SecretStoreError(ExtSecretError):
    """The secret store failed for a reason other than not-found."""


class TemplateError(ExtSecretError):
    """Base for template failures, carries the secret and property being computed."""

    def __init__(self, message: str, secret_name: str, property: str):
        self.secret_name = secret_name
        self.property = property
        super().__init__(message)


class TemplateCompileError(TemplateError):
    pass


class TemplateExecError(TemplateError):
    pass


class SchemaLookupError(ExtSecretError):
    pass


class PromptError(ExtSecretError):
    """The operator aborted or the input surface failed."""


class BackendWriteError(ExtSecretError):
    pass


class ConfigLoadError(ExtSecretError):
    pass


class UnknownBackendTypeError(ExtSecretError):
    def __init__(self, backend_type: str):
        self.backend_type = backend_type
        super().__init__(f"unknown backend type: {backend_type}")


class UnsupportedBackendError(ExtSecretError):
    """No editor is registered for a known backend type."""

    def __init__(self, backend_type: Any, available: list[str]):
        self.backend_type = backend_type
        self.available = available
        value = getattr(backend_type, "value", backend_type)
        super().__init__(f"no secret editor registered for backend {value}. Available: {available}")


class PropertyResolutionError(ExtSecretError):
    """
    A key of an ExternalSecret could not be resolved or written.

    ``property`` is None when the failure happened while writing the whole
    batch or while creating the editor.
    """

    def __init__(
        self,
        secret: ExternalSecretRef,
        key: str,
        property: str | None,
        cause: Exception,
    ):
        self.secret = secret
        self.key = key
        self.property = property
        self.cause = cause
        backend = secret.backend_type.value
        if property is None:
            what = f"key {key}"
        else:
            what = f"property {property} for key {key}"
        super().__init__(f"failed to resolve {what} on ExternalSecret {secret} (backend {backend}): {cause}")


class ResolutionFailedError(ExtSecretError):
    """Aggregated failures of a run that kept going after per-key errors."""

    def __init__(self, failures: list[PropertyResolutionError], report: Any = None):
        self.failures = failures
        # ResolutionReport of the run, including the keys that were written
        self.report = report
        lines = "\n".join(f"  - {f}" for f in failures)
        super().__init__(f"{len(failures)} key(s) could not be populated:\n{lines}")
