"""
Step 4: API Keys

Collect the external credentials the enabled modules need.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel

from .base import WizardStep
from ..catalog import SECRET_FIELDS, required_secrets, secret_field
from ..state import StepId, StepResult, WizardForm
from ..validators import validate_email


class SecretsStep(WizardStep):
    """Secrets step - API keys for modules that integrate with other services."""

    step_id = StepId.SECRETS
    name = "API Keys"
    icon = "🔑"
    description = "Credentials for the services behind the selected modules"

    def owns(self, field_name: str) -> bool:
        return field_name in SECRET_FIELDS

    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """Every required credential must be filled in."""
        errors = {}
        for key in required_secrets(form.modules):
            if not form.secrets.get(key):
                errors[key] = f"{key.replace('_', ' ')} is required for selected modules"
        return errors

    def execute(self, controller, console: Console) -> StepResult:
        """Execute the secrets step."""
        required = controller.required_secrets()

        if not required:
            console.print(Panel.fit(
                "The modules you've selected don't require any external API keys.\n"
                "You can proceed to the review step.",
                title="No Keys Needed",
                border_style="green"
            ))
            return self.success()

        console.print("[dim]API keys are sent once with the provisioning request and never shown again.[/dim]")
        console.print()

        collected = []
        for key in required:
            spec = secret_field(key)
            console.print(f"[bold]{spec.label}[/bold] [dim]({spec.module}) {spec.help}[/dim]")
            value = self.prompt_text(
                console,
                f"Enter {spec.label.lower()}",
                default=controller.form.secrets.get(key, ""),
                required=False,
                validator=validate_email if spec.kind == "email" else None,
                password=spec.is_password,
            )
            controller.set_field(f"secrets.{key}", value)
            if value:
                collected.append(key)

        # Only key names go into the result
        return self.success(data={"provided": collected})
