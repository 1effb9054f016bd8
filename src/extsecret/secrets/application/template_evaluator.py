"""
Value template evaluation.

Templates are Jinja2 with StrictUndefined: a reference to an undefined
variable is a structural mistake and fails the evaluation, unlike the secret
lookup functions which deliberately degrade to "".
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError

from extsecret.secrets.application.template_functions import (
    SCOPE_VARIABLE,
    EvaluationScope,
    TemplateFunctionLibrary,
)
from extsecret.secrets.domain.exceptions import (
    ConfigLoadError,
    TemplateCompileError,
    TemplateExecError,
)
from extsecret.secrets.domain.ports import RequirementsLoader
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class RequirementsCache:
    """
    Requirements loaded once per run.

    A successful load is kept for the rest of the run; a failed load is not
    cached, so the next caller tries again.
    """

    def __init__(self, loader: RequirementsLoader):
        self._loader = loader
        self._requirements: dict[str, Any] | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._requirements is not None

    def get(self) -> dict[str, Any]:
        """
        Return the requirements map, loading it on first use.

        Raises:
            ConfigLoadError: If loading fails
        """
        with self._lock:
            if self._requirements is None:
                try:
                    loaded = self._loader.load()
                except ConfigLoadError:
                    raise
                except Exception as e:
                    raise ConfigLoadError(f"failed to load requirements: {e}") from e
                self._requirements = dict(loaded or {})
                logger.debug("requirements_loaded", keys=sorted(self._requirements))
            return self._requirements


class TemplateEvaluator:
    """Evaluates value templates against the requirements and the function library."""

    def __init__(self, library: TemplateFunctionLibrary, requirements: RequirementsCache):
        self._requirements = requirements
        self._context: dict[str, Any] | None = None
        self._environment = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._environment.globals.update(library.template_globals())
        self._environment.filters.update(library.template_filters())

    @property
    def environment(self) -> Environment:
        return self._environment

    def template_context(self) -> Mapping[str, Any]:
        """
        Data every template sees, built once.

        ``Requirements.storage`` always exists so templates can probe storage
        settings on clusters that have none configured.
        """
        if self._context is None:
            requirements = copy.deepcopy(self._requirements.get())
            if requirements.get("storage") is None:
                requirements["storage"] = {}
            self._context = {"Requirements": requirements}
        return self._context

    def evaluate(self, namespace: str, secret_name: str, property: str, template_text: str) -> str:
        """
        Evaluate a template to create the value of a secret property.

        Args:
            namespace: Namespace used for unqualified secret lookups
            secret_name: Name of the secret the value is for
            property: Property the value is for

        Returns:
            The rendered value

        Raises:
            TemplateCompileError: If the template does not parse
            TemplateExecError: If rendering fails, e.g. an undefined variable
            ConfigLoadError: If the requirements cannot be loaded
        """
        try:
            template = self._environment.from_string(template_text)
        except TemplateSyntaxError as e:
            raise TemplateCompileError(
                f"failed to parse Secret {secret_name} property {property} with template: {template_text}: {e}",
                secret_name,
                property,
            ) from e

        data = dict(self.template_context())
        data[SCOPE_VARIABLE] = EvaluationScope(namespace=namespace, secret_name=secret_name, property=property)

        try:
            return template.render(data)
        except Exception as e:
            raise TemplateExecError(
                f"failed to evaluate template to create value of Secret {secret_name} property {property}: {e}",
                secret_name,
                property,
            ) from e
