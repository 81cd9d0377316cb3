"""
Credential Store Service

Merges collected credentials into the DDEV global configuration
(read-modify-write), leaving every unrelated key in place.
"""

import copy
from pathlib import Path
from typing import Any, Dict

import yaml

from sfsetup.constants import WEB_ENVIRONMENT_KEY
from sfsetup.exceptions import ConfigurationError, ConfigWriteError
from sfsetup.models.credentials import CredentialSet


class CredentialStore:
    """Owns the DDEV global_config.yaml file."""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)

    def load(self) -> Dict[str, Any]:
        """
        Load the existing configuration document.

        Returns:
            The parsed mapping, or an empty dict if the file is absent or empty

        Raises:
            ConfigurationError: If the file is not a YAML mapping
        """
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Could not read {self.config_path}", context=str(e)
            )

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigurationError(
                f"{self.config_path} is not a YAML mapping",
                context="Fix or remove the file and run setup again",
            )
        return document

    @staticmethod
    def merge(document: Dict[str, Any], credentials: CredentialSet) -> Dict[str, Any]:
        """Return a copy of document with web_environment replaced by credentials."""
        merged = copy.deepcopy(document)
        merged[WEB_ENVIRONMENT_KEY] = credentials.to_web_environment()
        return merged

    @staticmethod
    def render(document: Dict[str, Any]) -> str:
        """Render a document as YAML text."""
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)

    def save(self, document: Dict[str, Any]) -> Path:
        """
        Write the document, creating the parent directory if needed.

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.render(document))
        except OSError as e:
            raise ConfigWriteError(f"Could not write {self.config_path}", context=str(e))

        return self.config_path

    def store(self, credentials: CredentialSet) -> Dict[str, Any]:
        """
        Load, merge and write back in one step.

        Raises:
            ConfigurationError: If the existing file cannot be parsed
            ConfigWriteError: If the file cannot be written
        """
        document = self.merge(self.load(), credentials)
        self.save(document)
        return document
