"""
Step 5: Review

Summarize everything before the tenant is created.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .base import WizardStep
from ..catalog import INCLUDED_MODULES
from ..state import StepId, StepResult, WizardForm
from ..submission import render_tracking_script
from ..validators import validate_color


class ReviewStep(WizardStep):
    """Review step - summary, tracking snippet and conversion note."""

    step_id = StepId.REVIEW
    name = "Review"
    icon = "✔"
    description = "Check the configuration before creating the tenant"

    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """Nothing to validate; the review step only aggregates."""
        return {}

    def execute(self, controller, console: Console) -> StepResult:
        """Execute the review step."""
        form = controller.form

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="dim")
        table.add_column("Value")
        table.add_row("Name", escape(form.name))
        table.add_row("Slug", form.slug)
        table.add_row("Domain", escape(form.domain))
        if form.admin_email:
            table.add_row("Admin", escape(f"{form.admin_name} <{form.admin_email}>".strip()))
        table.add_row("Modules", ", ".join(m.label for m in controller.enabled_modules()) or "[red]none[/red]")
        table.add_row("Included", ", ".join(m.label for m in INCLUDED_MODULES.values()))
        color = form.theme.primary_color
        swatch = f"[on {color}]   [/] " if color and validate_color(color) is None else ""
        table.add_row("Color", f"{swatch}{escape(color)}")
        if form.theme.logo_url:
            table.add_row("Logo", escape(form.theme.logo_url))
        console.print(Panel(table, title="Summary", border_style="cyan"))

        console.print()
        console.print("[bold]Tracking Script[/bold]")
        script = render_tracking_script(form.slug, form.domain, controller.context.settings.portal_url)
        console.print(Syntax(script, "html", theme="ansi_dark"))
        console.print("[dim]Add this script to the client's website to enable analytics tracking.[/dim]")

        project = controller.context.project
        if project is not None:
            console.print()
            console.print(Panel.fit(
                f"Project [bold]\"{escape(project.title)}\"[/bold] will be converted to a tenant.\n"
                "The project will be marked as a web app and the client will receive portal access.",
                border_style="yellow"
            ))

        return self.success()
