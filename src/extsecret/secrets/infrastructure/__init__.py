"""Adapters for the collaborators the resolution engine consumes."""

from .missing_report import MissingReportVerifier
from .prompt import RichInput
from .requirements_loader import YamlRequirementsLoader
from .schema_loader import YamlSchemaProvider

__all__ = [
    "MissingReportVerifier",
    "RichInput",
    "YamlRequirementsLoader",
    "YamlSchemaProvider",
]
