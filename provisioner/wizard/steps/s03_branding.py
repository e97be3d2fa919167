"""
Step 3: Branding

Configure the portal color, logo and favicon.
"""

from typing import Dict, Optional

from rich.console import Console

from .base import WizardStep
from ..state import StepId, StepResult, WizardForm
from ..validators import validate_color
from ...config.defaults import PRESET_COLORS


class BrandingStep(WizardStep):
    """Branding step - primary color and logo URLs."""

    step_id = StepId.BRANDING
    name = "Branding"
    icon = "🎨"
    description = "Used for buttons, links, and accents throughout the portal"
    fields = ("primaryColor", "logoUrl", "faviconUrl")

    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """Only the color is checked; logo and favicon URLs are free text."""
        color = form.theme.primary_color
        if color:
            error = validate_color(color)
            if error:
                return {"primaryColor": error}
        return {}

    def execute(self, controller, console: Console) -> StepResult:
        """Execute the branding step."""
        theme = controller.form.theme

        swatches = "  ".join(f"[on {c}]   [/on {c}] {c}" for c in PRESET_COLORS)
        console.print(f"[dim]Presets:[/dim] {swatches}")
        console.print()

        color = self.prompt_text(
            console,
            "Primary color (hex)",
            default=theme.primary_color,
            required=False,
            validator=validate_color,
        )
        controller.set_field("theme.primary_color", color)

        logo_url = self.prompt_text(
            console,
            "Logo URL (square, at least 200x200px)",
            default=theme.logo_url,
            required=False,
        )
        controller.set_field("theme.logo_url", logo_url)

        favicon_url = self.prompt_text(
            console,
            "Favicon URL",
            default=theme.favicon_url,
            required=False,
        )
        controller.set_field("theme.favicon_url", favicon_url)

        return self.success(data=controller.form.theme.to_dict())
