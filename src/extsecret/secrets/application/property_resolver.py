"""
Property resolution.

Decides for each missing property whether its value is computed from a
template or asked from the operator, based on the optional schema entry.
"""

from extsecret.secrets.application.template_evaluator import TemplateEvaluator
from extsecret.secrets.domain.exceptions import ExtSecretError, PromptError, SchemaLookupError
from extsecret.secrets.domain.models import ExternalSecretRef, MissingEntry, PropertyKind, PropertySpec
from extsecret.secrets.domain.ports import InputSurface, SchemaProvider
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PropertyResolver:
    """Produces the value of a single missing property."""

    def __init__(
        self,
        input_surface: InputSurface,
        evaluator: TemplateEvaluator,
        schema: SchemaProvider | None = None,
    ):
        self._input = input_surface
        self._evaluator = evaluator
        self._schema = schema
        self.prompted = 0
        self.templated = 0

    def find_spec(self, secret: ExternalSecretRef, property: str) -> PropertySpec | None:
        if self._schema is None:
            return None
        try:
            return self._schema.find_property(secret.name, property)
        except ExtSecretError:
            raise
        except Exception as e:
            raise SchemaLookupError(
                f"failed to find schema property for object {secret.name} property {property}: {e}"
            ) from e

    def resolve(self, secret: ExternalSecretRef, entry: MissingEntry, property: str) -> str:
        """
        Resolve one property of a key.

        Args:
            secret: The ExternalSecret the key belongs to
            entry: The key with its missing properties
            property: The property to resolve

        Returns:
            The value to store

        Raises:
            SchemaLookupError, PromptError, TemplateError, ConfigLoadError
        """
        spec = self.find_spec(secret, property)
        if spec is None:
            message, help = self.property_message(entry, property)
            return self._pick_password(secret, entry, property, message, help)

        if spec.template:
            logger.debug("evaluating_template", secret=secret.name, key=entry.key, property=property)
            value = self._evaluator.evaluate(secret.namespace, secret.name, property, spec.template)
            self.templated += 1
            return value

        message = spec.question or self.property_message(entry, property)[0]
        if spec.kind == PropertyKind.CONFIRM:
            return self._confirm(secret, entry, property, message, spec.help)

        value = self._pick_password(secret, entry, property, message, spec.help)
        if not value and spec.default is not None:
            logger.info("using_default_value", secret=secret.name, key=entry.key, property=property)
            return spec.default
        return value

    @staticmethod
    def property_message(entry: MissingEntry, property: str) -> tuple[str, str]:
        return f"{entry.key}.{property}", ""

    def _pick_password(
        self, secret: ExternalSecretRef, entry: MissingEntry, property: str, message: str, help: str
    ) -> str:
        try:
            value = self._input.pick_password(message, help)
        except PromptError as e:
            raise PromptError(
                f"failed to enter property {property} for key {entry.key} on ExternalSecret {secret.name}: {e}"
            ) from e
        self.prompted += 1
        return value

    def _confirm(
        self, secret: ExternalSecretRef, entry: MissingEntry, property: str, message: str, help: str
    ) -> str:
        try:
            answer = self._input.confirm(message, help)
        except PromptError as e:
            raise PromptError(
                f"failed to confirm property {property} for key {entry.key} on ExternalSecret {secret.name}: {e}"
            ) from e
        self.prompted += 1
        return "true" if answer else "false"
