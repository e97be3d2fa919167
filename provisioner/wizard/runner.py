"""
Wizard Runner

Drives the wizard controller from the terminal: runs each step's prompts,
shows progress and errors, and turns navigation choices into controller
calls.
"""

import asyncio
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..api.client import PortalClient
from ..api.errors import PortalAPIError, ProvisioningError
from ..config.models import ClientSettings, ProjectRecord
from ..errors import WizardValidationError
from .controller import WizardController
from .navigator import Navigator, NavigationAction
from .state import WizardContext
from .steps.base import WizardStep


class WizardRunner:
    """
    Orchestrates the tenant setup wizard in a terminal.

    The runner owns the event loop for the session. Step prompts block,
    and pending slug lookups are settled after each step returns.
    """

    BANNER = """
╔═══════════════════════════════════════════════════════════╗
║             TENANT SETUP WIZARD                           ║
║    Create a new organization with its own portal          ║
╚═══════════════════════════════════════════════════════════╝
"""

    def __init__(
        self,
        console: Optional[Console] = None,
        settings: Optional[ClientSettings] = None,
        project: Optional[ProjectRecord] = None,
        client: Optional[PortalClient] = None,
    ):
        """
        Initialize the wizard runner.

        Args:
            console: Rich console for output
            settings: Portal client settings
            project: Project to convert into a tenant, if any
            client: Portal client; one is created from settings if omitted
        """
        self.console = console or Console()
        self.settings = settings or ClientSettings()
        self.project = project
        self.client = client
        self.navigator = Navigator(self.console)

    def run(self) -> Optional[Dict[str, Any]]:
        """
        Run the wizard.

        Returns:
            The provisioning response, or None if the user quit
        """
        return asyncio.run(self.run_async())

    async def run_async(self) -> Optional[Dict[str, Any]]:
        owns_client = self.client is None
        client = self.client or PortalClient(self.settings)
        try:
            controller = WizardController(
                WizardContext(settings=self.settings, project=self.project),
                client=client,
            )
            return await self._loop(controller)
        finally:
            if owns_client:
                await client.aclose()

    async def _loop(self, controller: WizardController) -> Optional[Dict[str, Any]]:
        self.console.print(self.BANNER, style="bold blue")
        if self.project is not None:
            self.console.print(
                f"Converting project [bold]{escape(self.project.title)}[/bold] into a tenant.\n"
            )

        while True:
            step = controller.current_step
            index = controller.current_step_index

            self._show_step_header(controller, step)
            result = step.execute(controller, self.console)
            if result.message:
                self.console.print(f"[dim]{result.message}[/dim]")
            await controller.settle()
            self._show_slug_status(controller, step)

            errors = controller.validate_step(index)
            if errors:
                step.show_errors(errors, self.console)

            action, target = self.navigator.show_navigation_prompt(
                step_number=index,
                total_steps=len(controller.steps),
                can_submit=controller.is_last_step,
            )

            if action == NavigationAction.QUIT:
                if self.navigator.confirm_quit():
                    self.console.print("\n[yellow]Wizard cancelled. No tenant was created.[/yellow]")
                    return None
            elif action == NavigationAction.BACK:
                controller.prev_step()
            elif action == NavigationAction.NEXT:
                if not controller.next_step():
                    self._show_blocked(controller)
            elif action == NavigationAction.JUMP:
                if target != index and not controller.go_to_step(target):
                    self._show_blocked(controller)
            elif action == NavigationAction.SUBMIT:
                response = await self._submit(controller)
                if response is not None:
                    self._show_completion(response)
                    return response

    async def _submit(self, controller: WizardController) -> Optional[Dict[str, Any]]:
        """Submit, reporting failures without losing the form."""
        with self.console.status("[bold]Creating tenant...[/bold]"):
            try:
                return await controller.submit()
            except WizardValidationError as e:
                self.console.print(f"\n[red]{e.args[0]}[/red]")
                for field_name, error in e.errors.items():
                    self.console.print(f"  [red]• {field_name}: {escape(error)}[/red]")
                self._return_to_error(controller, e.errors)
            except ProvisioningError as e:
                self.console.print(f"\n[red]✗ {escape(e.message)}[/red]")
                for item in e.validation_errors:
                    self.console.print(
                        f"  [red]• {escape(str(item.get('field', '')))}: "
                        f"{escape(str(item.get('error', '')))}[/red]"
                    )
            except PortalAPIError as e:
                self.console.print(f"\n[red]✗ {escape(e.message)}[/red]")
        return None

    def _show_step_header(self, controller: WizardController, step: WizardStep) -> None:
        """Show header for a wizard step."""
        self.console.print()
        self.console.rule(
            f"[bold]Step {controller.current_step_index + 1} of {len(controller.steps)}: "
            f"{step.icon} {step.name}[/bold]",
            style="cyan"
        )
        self.navigator.show_progress(controller.compute_progress())
        self.console.print(self.navigator.get_step_summary(controller))
        self.console.print()

        if step.description:
            self.console.print(f"[dim]{step.description}[/dim]")
            self.console.print()

    def _show_slug_status(self, controller: WizardController, step: WizardStep) -> None:
        if step is not controller.steps[0] or not controller.form.slug:
            return
        if controller.slug_available is True:
            self.console.print("[green]✓ Slug is available[/green]")
        elif controller.slug_available is False:
            self.console.print("[red]✗ Slug is already taken[/red]")

    def _show_blocked(self, controller: WizardController) -> None:
        self.console.print("\n[red]Please fix the errors on this step before continuing.[/red]")
        controller.current_step.show_errors(controller.validation_errors, self.console)

    def _return_to_error(self, controller: WizardController, errors: Dict[str, str]) -> None:
        """Go back to the earliest step that owns one of the errors."""
        owners = [controller.step_for_field(name) for name in errors]
        owners = [index for index in owners if index is not None]
        if owners:
            controller.go_to_step(min(owners))

    def _show_completion(self, result: Dict[str, Any]) -> None:
        """Show the provisioning result."""
        organization = result.get("organization") or {}
        message = result.get("message") or "Tenant created successfully!"

        details = f"[bold green]{escape(message)}[/bold green]\n"
        if organization:
            details += (
                f"\nOrganization: [cyan]{escape(str(organization.get('name', '')))}[/cyan]"
                f" ([dim]{escape(str(organization.get('slug', '')))}[/dim])"
            )
        if result.get("trackingId"):
            details += f"\nTracking ID: [cyan]{escape(str(result['trackingId']))}[/cyan]"

        self.console.print()
        self.console.print(Panel.fit(details, title="✓ Tenant Created", border_style="green"))

        checklist = result.get("setupChecklist") or {}
        if checklist:
            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("Setup", style="dim")
            table.add_column("Status")
            table.add_column("Details")
            colors = {"complete": "green", "warning": "yellow", "pending": "cyan"}
            for item, entry in checklist.items():
                status = str(entry.get("status", ""))
                color = colors.get(status, "white")
                table.add_row(item, f"[{color}]{status}[/{color}]", escape(str(entry.get("message", ""))))
            self.console.print(table)

        missing = result.get("missingSecrets") or []
        if missing:
            self.console.print("\n[yellow]API keys still needed:[/yellow]")
            for item in missing:
                self.console.print(f"  • {escape(str(item.get('secret')))} [dim]({escape(str(item.get('module')))})[/dim]")

        if result.get("trackingScript"):
            self.console.print("\n[bold]Tracking Script[/bold]")
            self.console.print(Syntax(result["trackingScript"], "html", theme="ansi_dark"))
