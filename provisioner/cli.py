"""
Command-line interface for the Tenant Provisioner.

Provides the interactive setup wizard plus non-interactive commands for
validating and submitting form seed files.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .api import PortalAPIError, PortalClient, ProvisioningError
from .config import ConfigError, ConfigLoader
from .config.defaults import DEFAULT_CONFIG_FILE, get_default_modules
from .errors import WizardValidationError
from .logging import configure_logging
from .wizard.catalog import INCLUDED_MODULES, TENANT_MODULES
from .wizard.controller import WizardController
from .wizard.state import WizardContext
from .wizard.validators import sanitize_slug, validate_slug

console = Console()

# check-slug exit codes
EXIT_AVAILABLE = 0
EXIT_TAKEN = 1
EXIT_INCONCLUSIVE = 2


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="tenant-provisioner")
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False),
    envvar="PROVISIONER_CONFIG",
    help=f"Settings file (default: ./{DEFAULT_CONFIG_FILE} if present)",
)
@click.option("--api-url", type=str, help="Portal functions base URL")
@click.option("--token", type=str, help="Admin API token (or set PROVISIONER_API_TOKEN)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level",
)
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write logs to a rotating file")
@click.pass_context
def cli(ctx, config: Optional[str], api_url: Optional[str], token: Optional[str],
        log_level: Optional[str], log_file: Optional[str]):
    """
    Tenant Provisioner

    Create portal tenants with a guided five-step wizard, or provision
    them from YAML seed files.
    """
    ctx.ensure_object(dict)

    if config is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config = DEFAULT_CONFIG_FILE

    loader = ConfigLoader(config)
    try:
        loader.load({
            "api_url": api_url,
            "api_token": token,
            "log_level": log_level,
            "log_file": log_file,
        })
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    settings = loader.settings
    configure_logging(settings.log_level, settings.log_file)

    ctx.obj["loader"] = loader
    ctx.obj["settings"] = settings


# ============================================================
# WIZARD Command
# ============================================================

@cli.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, dir_okay=False),
    help="Project record (YAML) to convert into a tenant",
)
@click.pass_context
def wizard(ctx, project: Optional[str]):
    """Run the interactive tenant setup wizard."""
    from .wizard import WizardRunner

    loader: ConfigLoader = ctx.obj["loader"]
    record = None
    if project:
        try:
            record = loader.load_project(project)
        except ConfigError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            sys.exit(1)

    runner = WizardRunner(console=console, settings=ctx.obj["settings"], project=record)
    try:
        result = runner.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard cancelled.[/yellow]")
        sys.exit(1)

    sys.exit(0 if result is not None else 1)


# ============================================================
# VALIDATE Command
# ============================================================

@cli.command()
@click.argument("seed_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate(ctx, seed_file: str):
    """Validate a form seed file without contacting the portal."""
    loader: ConfigLoader = ctx.obj["loader"]

    try:
        seed = loader.load_seed(seed_file)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    controller = WizardController(WizardContext(settings=ctx.obj["settings"], project=seed.project))
    controller.apply_seed(seed)

    table = Table(title=f"Validation: {seed_file}", show_header=True, header_style="bold cyan")
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Errors")

    has_errors = False
    for index, step in enumerate(controller.steps):
        errors = controller.validate_step(index)
        if errors:
            has_errors = True
            status = "[red]✗[/red]"
        else:
            status = "[green]✓[/green]"
        details = "\n".join(f"{k}: {escape(v)}" for k, v in errors.items())
        table.add_row(f"{step.icon} {step.name}", status, details)

    console.print(table)
    console.print(f"Progress: {controller.compute_progress()}%")
    console.print(f"Slug: [cyan]{controller.form.slug or '-'}[/cyan]")

    required = controller.required_secrets()
    if required:
        console.print(f"Required API keys: {', '.join(required)}")

    if has_errors:
        console.print(f"\n[red]{WizardValidationError.SUMMARY}[/red]")
        sys.exit(1)

    console.print("\n[green]✓ Seed is valid.[/green]")


# ============================================================
# SUBMIT Command
# ============================================================

@cli.command()
@click.argument("seed_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def submit(ctx, seed_file: str):
    """Provision a tenant from a form seed file."""
    loader: ConfigLoader = ctx.obj["loader"]
    settings = ctx.obj["settings"]

    try:
        seed = loader.load_seed(seed_file)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    async def _submit():
        async with PortalClient(settings) as client:
            controller = WizardController(
                WizardContext(settings=settings, project=seed.project),
                client=client,
            )
            controller.apply_seed(seed)
            return await controller.submit()

    console.print(f"\n[bold blue]Provisioning tenant from {seed_file}...[/bold blue]\n")

    try:
        result = asyncio.run(_submit())
    except WizardValidationError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        for field_name, error in e.errors.items():
            console.print(f"  [red]• {field_name}: {escape(error)}[/red]")
        sys.exit(1)
    except ProvisioningError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        for item in e.validation_errors:
            console.print(f"  [red]• {escape(str(item.get('field', '')))}: {escape(str(item.get('error', '')))}[/red]")
        sys.exit(1)
    except PortalAPIError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ {escape(result.get('message') or 'Tenant created successfully!')}[/green]")
    if result.get("trackingId"):
        console.print(f"Tracking ID: [cyan]{escape(str(result['trackingId']))}[/cyan]")
    for item in result.get("missingSecrets") or []:
        console.print(f"[yellow]Missing API key:[/yellow] {escape(str(item.get('secret')))} ({escape(str(item.get('module')))})")


# ============================================================
# CHECK-SLUG Command
# ============================================================

@cli.command("check-slug")
@click.argument("slug")
@click.pass_context
def check_slug(ctx, slug: str):
    """Check whether a tenant slug is still available."""
    settings = ctx.obj["settings"]
    slug = sanitize_slug(slug)

    error = validate_slug(slug)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(EXIT_INCONCLUSIVE)

    async def _check():
        async with PortalClient(settings) as client:
            return await client.check_slug(slug)

    try:
        available = asyncio.run(_check())
    except PortalAPIError as e:
        console.print(f"[yellow]Could not check slug:[/yellow] {escape(e.message)}")
        sys.exit(EXIT_INCONCLUSIVE)

    if available:
        console.print(f"[green]✓ '{slug}' is available[/green]")
        sys.exit(EXIT_AVAILABLE)

    console.print(f"[red]✗ '{slug}' is already taken[/red]")
    sys.exit(EXIT_TAKEN)


# ============================================================
# MODULES Command
# ============================================================

@cli.command()
def modules():
    """List the tenant modules and the API keys they need."""
    table = Table(title="Tenant Modules", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan")
    table.add_column("Module")
    table.add_column("Default")
    table.add_column("Requires")
    table.add_column("Description", style="dim")

    defaults = get_default_modules()

    for key, module in TENANT_MODULES.items():
        label = module.label + (" [green](recommended)[/green]" if module.recommended else "")
        default = "[green]on[/green]" if defaults.get(key) else "[dim]off[/dim]"
        table.add_row(key, label, default, ", ".join(module.requires_setup), module.description)

    console.print(table)
    console.print()
    console.print(
        "[bold]Always included:[/bold] "
        + ", ".join(m.label for m in INCLUDED_MODULES.values())
    )


if __name__ == "__main__":
    cli()
