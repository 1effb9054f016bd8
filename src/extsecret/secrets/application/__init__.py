"""Secret application layer - reader, templating, resolution and orchestration."""

from .edit_service import SecretEditService
from .orchestrator import ErrorPolicy, ResolutionOrchestrator, ResolutionReport
from .property_resolver import PropertyResolver
from .secret_reader import SecretReader
from .template_evaluator import RequirementsCache, TemplateEvaluator
from .template_functions import EvaluationScope, TemplateFunctionLibrary

__all__ = [
    "ErrorPolicy",
    "EvaluationScope",
    "PropertyResolver",
    "RequirementsCache",
    "ResolutionOrchestrator",
    "ResolutionReport",
    "SecretEditService",
    "SecretReader",
    "TemplateEvaluator",
    "TemplateFunctionLibrary",
]
