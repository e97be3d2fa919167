"""
Step 2: Modules

Choose which business modules the tenant gets.
"""

from typing import Dict, Optional

from rich.console import Console

from .base import WizardStep
from ..catalog import INCLUDED_MODULES, TENANT_MODULES, enabled_modules
from ..state import StepId, StepResult, WizardForm


class ModulesStep(WizardStep):
    """Modules step - toggle selectable feature modules."""

    step_id = StepId.MODULES
    name = "Modules"
    icon = "⚙"
    description = "Select which features this tenant can use for their business"
    fields = ("modules",)

    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """At least one selectable module must be on."""
        if not enabled_modules(form.modules):
            return {"modules": "Select at least one module"}
        return {}

    def execute(self, controller, console: Console) -> StepResult:
        """Execute the modules step."""
        console.print("[bold]Always Included[/bold]")
        console.print(
            "[dim]" + ", ".join(m.label for m in INCLUDED_MODULES.values()) + "[/dim]"
        )
        console.print()

        keys = list(TENANT_MODULES)

        while True:
            self._show_modules(controller.form, keys, console)

            choice = self.prompt_text(
                console,
                "Toggle a module by number (Enter when done)",
                required=False,
            )
            if not choice:
                break

            try:
                idx = int(choice) - 1
            except ValueError:
                console.print("[red]Please enter a number from the list.[/red]")
                continue

            if not 0 <= idx < len(keys):
                console.print("[red]Invalid selection. Please choose a number from the list.[/red]")
                continue

            controller.toggle_module(keys[idx])

        enabled = [m.key for m in enabled_modules(controller.form.modules)]
        message = "" if enabled else "No modules selected."
        return self.success(data={"modules": enabled}, message=message)

    def _show_modules(self, form: WizardForm, keys: list, console: Console) -> None:
        rows = []
        for i, key in enumerate(keys, 1):
            module = TENANT_MODULES[key]
            label = f"{module.icon} {module.label}"
            if module.recommended:
                label += " [green](recommended)[/green]"
            enabled = "[green]✓[/green]" if form.modules.get(key) else "[dim]–[/dim]"
            rows.append([str(i), label, enabled, ", ".join(module.requires_setup)])

        self.show_table(console, "Tenant Modules", ["#", "Module", "Enabled", "Needs"], rows)
