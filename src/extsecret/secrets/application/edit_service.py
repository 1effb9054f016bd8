"""
Secret edit service.

Entry point used by the CLI: wires the reader, template library, evaluator,
resolver and editors of one run from the settings.
"""

import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from extsecret.secrets.application.orchestrator import ErrorPolicy, ResolutionOrchestrator, ResolutionReport
from extsecret.secrets.application.property_resolver import PropertyResolver
from extsecret.secrets.application.secret_reader import SecretReader
from extsecret.secrets.application.template_evaluator import RequirementsCache, TemplateEvaluator
from extsecret.secrets.application.template_functions import TemplateFunctionLibrary
from extsecret.secrets.domain.models import SecretGaps
from extsecret.secrets.domain.ports import InputSurface, RequirementsLoader, SchemaProvider, SecretStore
from extsecret.secrets.editors import EditorContext, EditorRegistry
from extsecret.secrets.infrastructure.requirements_loader import YamlRequirementsLoader
from extsecret.shared.infrastructure.config import Settings, settings as default_settings
from extsecret.shared.infrastructure.execution import CommandExecutor


class SecretEditService:
    """Resolves missing ExternalSecret properties and evaluates value templates."""

    def __init__(
        self,
        store: SecretStore,
        requirements_loader: RequirementsLoader,
        settings: Settings | None = None,
        executor: CommandExecutor | None = None,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        self.settings = settings or default_settings
        self.reader = SecretReader(store, self.settings.retry_config(), sleep=sleep)
        self.library = TemplateFunctionLibrary(self.reader, htpasswd_rounds=self.settings.htpasswd_rounds)
        self.requirements = RequirementsCache(requirements_loader)
        self.evaluator = TemplateEvaluator(self.library, self.requirements)
        self.editor_context = EditorContext(
            store=store,
            executor=executor or CommandExecutor(default_timeout=self.settings.command_timeout),
        )

    @classmethod
    def for_directory(
        cls,
        directory: Path,
        store: SecretStore | None = None,
        settings: Settings | None = None,
    ) -> "SecretEditService":
        """Service reading requirements from ``directory`` and secrets from the current cluster."""
        settings = settings or default_settings
        if store is None:
            from extsecret.secrets.infrastructure.kube_store import KubernetesSecretStore

            store = KubernetesSecretStore()
        loader = YamlRequirementsLoader(directory, settings.requirements_file)
        return cls(store, loader, settings=settings)

    def evaluate_template(self, namespace: str, secret_name: str, property: str, template_text: str) -> str:
        """Evaluate a value template outside of a resolution run."""
        return self.evaluator.evaluate(namespace, secret_name, property, template_text)

    def run(
        self,
        gaps: Sequence[SecretGaps],
        schema: SchemaProvider | None,
        input_surface: InputSurface,
        error_policy: ErrorPolicy | None = None,
    ) -> ResolutionReport:
        """
        Resolve and write back every missing property.

        Raises:
            PropertyResolutionError: First failure when the policy is fail_fast
            ResolutionFailedError: All failures when the policy is per_key
        """
        policy = error_policy or ErrorPolicy(self.settings.error_policy)
        resolver = PropertyResolver(input_surface, self.evaluator, schema)
        orchestrator = ResolutionOrchestrator(resolver, EditorRegistry(self.editor_context), policy)
        return orchestrator.run(gaps)
