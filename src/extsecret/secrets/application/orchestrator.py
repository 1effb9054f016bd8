"""
Resolution orchestrator.

Walks the reported gaps secret by secret and key by key. All properties of a
key are resolved before anything is written, then the key is written once
through the editor of its backend.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from extsecret.secrets.application.property_resolver import PropertyResolver
from extsecret.secrets.domain.exceptions import (
    ExtSecretError,
    PropertyResolutionError,
    ResolutionFailedError,
)
from extsecret.secrets.domain.models import ExternalSecretRef, KeyPropertyBatch, MissingEntry, SecretGaps
from extsecret.secrets.editors.base import SecretEditor
from extsecret.secrets.editors.registry import EditorRegistry
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ErrorPolicy(str, Enum):
    """What a failing key does to the rest of the run."""
    PER_KEY = "per_key"
    FAIL_FAST = "fail_fast"


@dataclass
class ResolutionReport:
    """Outcome of a run."""
    written: list[KeyPropertyBatch] = field(default_factory=list)
    failures: list[PropertyResolutionError] = field(default_factory=list)
    prompted: int = 0
    templated: int = 0

    @property
    def success(self) -> bool:
        return not self.failures


class ResolutionOrchestrator:
    def __init__(
        self,
        resolver: PropertyResolver,
        editors: EditorRegistry,
        error_policy: ErrorPolicy = ErrorPolicy.PER_KEY,
    ):
        self._resolver = resolver
        self._editors = editors
        self._error_policy = error_policy

    def run(self, gaps: Sequence[SecretGaps]) -> ResolutionReport:
        """
        Resolve and write every missing property.

        Args:
            gaps: Missing keys/properties per ExternalSecret

        Returns:
            ResolutionReport of what was written

        Raises:
            PropertyResolutionError: On the first failure with ErrorPolicy.FAIL_FAST
            ResolutionFailedError: After the run with ErrorPolicy.PER_KEY, if any key failed
        """
        report = ResolutionReport()
        if not gaps:
            logger.info("all_secrets_populated")
            return report

        for secret_gaps in gaps:
            self._run_secret(secret_gaps, report)

        report.prompted = self._resolver.prompted
        report.templated = self._resolver.templated
        if report.failures:
            raise ResolutionFailedError(report.failures, report)
        return report

    def _run_secret(self, secret_gaps: SecretGaps, report: ResolutionReport) -> None:
        secret = secret_gaps.secret
        logger.info("using_secret_store", backend=secret.backend_type.value, secret=secret.name)
        try:
            editor = self._editors.get_editor(secret)
        except ExtSecretError as e:
            for entry in secret_gaps.entries:
                self._fail(report, PropertyResolutionError(secret, entry.key, None, e))
            return

        for entry in secret_gaps.entries:
            try:
                batch = self.resolve_entry(secret, entry)
                self._write(editor, batch)
            except PropertyResolutionError as e:
                self._fail(report, e)
                continue
            report.written.append(batch)

    def resolve_entry(self, secret: ExternalSecretRef, entry: MissingEntry) -> KeyPropertyBatch:
        """Resolve every property of a key, in declaration order."""
        batch = KeyPropertyBatch(secret=secret, key=entry.key)
        for property in entry.properties:
            try:
                value = self._resolver.resolve(secret, entry, property)
            except ExtSecretError as e:
                raise PropertyResolutionError(secret, entry.key, property, e) from e
            batch.add(property, value)
        return batch

    def _write(self, editor: SecretEditor, batch: KeyPropertyBatch) -> None:
        try:
            editor.write(batch)
        except ExtSecretError as e:
            raise PropertyResolutionError(batch.secret, batch.key, None, e) from e

    def _fail(self, report: ResolutionReport, error: PropertyResolutionError) -> None:
        logger.error(
            "key_resolution_failed",
            secret=error.secret.name,
            namespace=error.secret.namespace,
            backend=error.secret.backend_type.value,
            key=error.key,
            property=error.property,
            error=str(error.cause),
        )
        if self._error_policy == ErrorPolicy.FAIL_FAST:
            raise error
        report.failures.append(error)
