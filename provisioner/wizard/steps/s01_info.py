"""
Step 1: Basic Info

Collect the tenant name, slug, website domain and optional admin user.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel

from .base import WizardStep
from ..state import StepId, StepResult, WizardForm
from .. import validators


class InfoStep(WizardStep):
    """Basic info step - name, slug, domain and admin contact."""

    step_id = StepId.INFO
    name = "Basic Info"
    icon = "🏢"
    description = "Name the tenant and point it at the client's website"
    fields = ("name", "slug", "domain", "adminEmail", "adminName")

    def validate(self, form: WizardForm, slug_available: Optional[bool] = None) -> Dict[str, str]:
        """Validate name, slug, domain and admin email."""
        errors = {}

        name_error = validators.validate_name(form.name)
        if name_error:
            errors["name"] = name_error

        slug_error = validators.validate_slug(form.slug)
        if slug_error:
            errors["slug"] = slug_error
        if slug_available is False:
            errors["slug"] = "This slug is already taken"

        domain_error = validators.validate_domain(form.domain)
        if domain_error:
            errors["domain"] = domain_error

        if form.admin_email:
            email_error = validators.validate_email(form.admin_email)
            if email_error:
                errors["adminEmail"] = email_error

        return errors

    def execute(self, controller, console: Console) -> StepResult:
        """Execute the basic info step."""
        form = controller.form

        console.print(Panel.fit(
            "The slug is used in portal URLs and must be unique.\n"
            "It is generated from the name; edit it if you need something shorter.",
            title="Tenant Details",
            border_style="blue"
        ))
        console.print()

        name = self.prompt_text(
            console,
            "Organization name",
            default=form.name,
            validator=validators.validate_name,
        )
        if name != form.name:
            controller.set_field("name", name)

        slug = self.prompt_text(
            console,
            "Slug",
            default=form.slug,
            validator=lambda v: validators.validate_slug(validators.sanitize_slug(v)),
        )
        if validators.sanitize_slug(slug) != form.slug:
            controller.set_field("slug", slug)
        console.print(f"[dim]Used in URLs: portal/{form.slug or 'slug'}[/dim]")

        domain = self.prompt_text(
            console,
            "Client website domain (e.g., example.com)",
            default=form.domain,
            validator=validators.validate_domain,
        )
        controller.set_field("domain", domain)

        # Optional admin user
        console.print()
        console.print("[bold]Admin User[/bold] [dim](optional)[/dim]")
        admin_name = self.prompt_text(console, "Admin name", default=form.admin_name, required=False)
        admin_email = self.prompt_text(
            console,
            "Admin email",
            default=form.admin_email,
            required=False,
            validator=validators.validate_email,
        )
        controller.set_field("admin_name", admin_name)
        controller.set_field("admin_email", admin_email)

        return self.success(data={
            "name": form.name,
            "slug": form.slug,
            "domain": form.domain,
            "adminEmail": form.admin_email,
            "adminName": form.admin_name,
        })
