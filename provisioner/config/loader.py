"""
Configuration loader for YAML files.

Handles loading and validation of client settings, project records
and form seed files, with environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml
from pydantic import ValidationError

from ..errors import ProvisionerError
from .models import ClientSettings, FormSeed, ProjectRecord


class ConfigError(ProvisionerError):
    """Configuration loading or validation error."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Settings are read from a single YAML file. Any setting can be
    overridden with a PROVISIONER_<NAME> environment variable, and
    explicit overrides (e.g. from CLI options) win over both.
    """

    ENV_PREFIX = "PROVISIONER_"

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the settings file
        """
        self.config_path = Path(config_path) if config_path else None
        self._settings: Optional[ClientSettings] = None

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> "ConfigLoader":
        """
        Load settings from the config file, environment and overrides.

        A missing config file is only an error when a path was given
        explicitly.

        Args:
            overrides: Values that take precedence over file and environment

        Returns:
            Self for method chaining
        """
        data: Dict[str, Any] = {}

        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(f"Configuration file does not exist: {self.config_path}")
            data.update(self._read_yaml(self.config_path))

        data.update(self._read_env())
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})

        self._settings = self._parse_settings(data)
        return self

    def _read_env(self) -> Dict[str, str]:
        """Collect PROVISIONER_* environment overrides."""
        values = {}
        for field_name in ClientSettings.model_fields:
            env_value = os.environ.get(f"{self.ENV_PREFIX}{field_name.upper()}")
            if env_value is not None:
                values[field_name] = env_value
        return values

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {file_path}")
        return data

    def _parse_settings(self, data: Dict[str, Any]) -> ClientSettings:
        """Parse client settings."""
        try:
            return ClientSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}")

    def load_seed(self, file_path: Union[str, Path]) -> FormSeed:
        """
        Load a wizard form seed from YAML.

        Args:
            file_path: Path to the seed file

        Returns:
            Parsed FormSeed
        """
        data = self._read_yaml(Path(file_path))
        try:
            return FormSeed(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid form seed {file_path}: {e}")

    def load_project(self, file_path: Union[str, Path]) -> ProjectRecord:
        """
        Load a project record from YAML.

        Args:
            file_path: Path to the project file

        Returns:
            Parsed ProjectRecord
        """
        data = self._read_yaml(Path(file_path))
        try:
            return ProjectRecord(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid project record {file_path}: {e}")

    @property
    def settings(self) -> ClientSettings:
        """Get loaded settings, loading defaults on first access."""
        if self._settings is None:
            self.load()
        return self._settings
