"""Configuration handling for the tenant provisioner."""

from .models import (
    ClientSettings,
    ContactRecord,
    ProjectRecord,
    ThemeSeed,
    FormSeed,
)
from .loader import ConfigLoader, ConfigError

__all__ = [
    "ClientSettings",
    "ContactRecord",
    "ProjectRecord",
    "ThemeSeed",
    "FormSeed",
    "ConfigLoader",
    "ConfigError",
]
