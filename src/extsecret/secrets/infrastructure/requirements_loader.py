"""
Requirements loader.

Reads ``jx-requirements.yml`` from the project directory; templates see its
``spec`` as ``Requirements``.
"""

from pathlib import Path
from typing import Any

import yaml

from extsecret.secrets.domain.exceptions import ConfigLoadError
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_REQUIREMENTS_FILE = "jx-requirements.yml"


class YamlRequirementsLoader:
    def __init__(self, directory: Path, file_name: str = DEFAULT_REQUIREMENTS_FILE):
        self.path = Path(directory) / file_name

    def load(self) -> dict[str, Any]:
        """
        Load the requirements spec.

        Returns:
            The ``spec`` mapping, the whole document if it has no ``spec``, or
            an empty mapping if the file does not exist

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.debug("requirements_file_not_found", path=str(self.path))
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"failed to load {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"{self.path} must be a YAML mapping")
        spec = data.get("spec")
        if isinstance(spec, dict):
            return spec
        return data
