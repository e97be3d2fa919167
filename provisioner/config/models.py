"""
Pydantic models for configuration validation.

These models define the schema for client settings, project records
used in "convert project to tenant" mode, and form seed files used
for non-interactive provisioning.
"""

from typing import Optional, Dict
from pydantic import BaseModel, Field, field_validator

from .defaults import DEFAULT_API_URL, DEFAULT_PORTAL_URL, get_default_modules


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# ============================================================
# Client Settings
# ============================================================

class ClientSettings(BaseModel):
    """Settings for talking to the portal API."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the portal functions")
    api_token: Optional[str] = Field(None, description="Bearer token for admin endpoints")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    debounce_seconds: float = Field(
        default=0.5, ge=0, description="Quiet period before a slug availability lookup"
    )
    portal_url: str = Field(default=DEFAULT_PORTAL_URL, description="Public portal URL for snippets")
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[str] = Field(None, description="Rotating log file path")

    @field_validator("api_url", "portal_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store base URLs without a trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the logging level name."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LOG_LEVELS}")
        return v.upper()


# ============================================================
# Project Records
# ============================================================

class ContactRecord(BaseModel):
    """Client contact attached to a project."""

    name: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class ProjectRecord(BaseModel):
    """An existing client project that can be converted into a tenant."""

    id: str = Field(..., description="Project identifier")
    title: str = Field(default="", description="Project title, used as tenant name")
    contact: Optional[ContactRecord] = None
    tenant_domain: Optional[str] = None
    tenant_modules: Optional[Dict[str, bool]] = None
    tenant_theme_color: Optional[str] = None


# ============================================================
# Form Seeds
# ============================================================

class ThemeSeed(BaseModel):
    """Branding values for a form seed."""

    primary_color: Optional[str] = None
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None


class FormSeed(BaseModel):
    """
    Pre-filled wizard values loaded from YAML.

    Module toggles are applied on top of the default selection, and a
    slug, when given, replaces the one derived from the name.
    """

    name: str = ""
    slug: Optional[str] = None
    domain: str = ""
    admin_email: str = ""
    admin_name: str = ""
    modules: Dict[str, bool] = Field(default_factory=dict)
    theme: ThemeSeed = Field(default_factory=ThemeSeed)
    secrets: Dict[str, str] = Field(default_factory=dict)
    project: Optional[ProjectRecord] = None

    @field_validator("modules")
    @classmethod
    def validate_module_keys(cls, v: Dict[str, bool]) -> Dict[str, bool]:
        """Only selectable modules can be toggled."""
        selectable = get_default_modules()
        unknown = sorted(key for key in v if key not in selectable)
        if unknown:
            raise ValueError(
                f"Unknown module(s): {', '.join(unknown)}. "
                f"Selectable modules are: {', '.join(selectable)}"
            )
        return v
