"""
Wizard State

The form aggregate the wizard edits, the per-step result and status
types, and the context the wizard is opened with. Nothing here is
persisted: closing the wizard discards the form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..config.defaults import (
    DEFAULT_PRIMARY_COLOR,
    get_default_modules,
    get_default_secrets,
)
from ..config.models import ClientSettings, ProjectRecord
from .validators import slugify


class StepId(str, Enum):
    """The fixed wizard step sequence."""
    INFO = "info"
    MODULES = "modules"
    BRANDING = "branding"
    SECRETS = "secrets"
    REVIEW = "review"


STEP_ORDER = [StepId.INFO, StepId.MODULES, StepId.BRANDING, StepId.SECRETS, StepId.REVIEW]


class StepStatus(str, Enum):
    """Display status of a wizard step."""
    PENDING = "pending"
    CURRENT = "current"
    COMPLETE = "complete"


@dataclass
class StepResult:
    """Result of running a wizard step's prompts."""
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    message: str = ""


@dataclass
class Theme:
    """Tenant branding."""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    logo_url: str = ""
    favicon_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "primaryColor": self.primary_color,
            "logoUrl": self.logo_url,
            "faviconUrl": self.favicon_url,
        }


@dataclass
class WizardForm:
    """Everything the wizard collects, owned by one controller."""
    name: str = ""
    slug: str = ""
    domain: str = ""
    admin_email: str = ""
    admin_name: str = ""
    modules: Dict[str, bool] = field(default_factory=get_default_modules)
    theme: Theme = field(default_factory=Theme)
    secrets: Dict[str, str] = field(default_factory=get_default_secrets)

    @classmethod
    def from_project(cls, project: ProjectRecord) -> "WizardForm":
        """
        Pre-populate a form for converting a project into a tenant.

        Args:
            project: The project being converted

        Returns:
            A form seeded from the project and its contact
        """
        contact = project.contact
        title = project.title or ""
        return cls(
            name=title,
            slug=slugify(title),
            domain=project.tenant_domain or (contact.website if contact else None) or "",
            admin_email=(contact.email if contact else None) or "",
            admin_name=(contact.name if contact else None) or "",
            modules=dict(project.tenant_modules) if project.tenant_modules else get_default_modules(),
            theme=Theme(primary_color=project.tenant_theme_color or DEFAULT_PRIMARY_COLOR),
        )


@dataclass
class WizardContext:
    """
    What the wizard is opened with.

    The project is read once, when the form is initialized.
    """
    settings: ClientSettings = field(default_factory=ClientSettings)
    project: Optional[ProjectRecord] = None

    @property
    def is_conversion(self) -> bool:
        return self.project is not None
