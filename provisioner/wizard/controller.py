"""
Wizard Controller

The UI-independent state machine behind the tenant setup wizard. It owns
the form, the current step, the last set of validation errors and the
submission flag, and is the only thing that mutates the form.
"""

from typing import Any, Dict, List, Optional, Union

import structlog

from ..api.client import PortalClient
from ..api.errors import PortalAPIError
from ..config.defaults import DEFAULT_PLAN
from ..config.models import FormSeed
from ..errors import WizardError, WizardValidationError
from ..logging import log_wizard_event
from .availability import SlugAvailabilityChecker
from .catalog import INCLUDED_MODULES, TENANT_MODULES, ModuleSpec
from .catalog import enabled_modules as catalog_enabled_modules
from .catalog import required_secrets as catalog_required_secrets
from .state import StepId, StepStatus, WizardContext, WizardForm
from .steps import WizardStep, default_steps
from .submission import build_payload
from .validators import sanitize_slug, slugify

logger = structlog.get_logger(__name__)


# camelCase names accepted by set_field, mapped to form attributes
FIELD_ALIASES = {
    "adminEmail": "admin_email",
    "adminName": "admin_name",
    "theme.primaryColor": "theme.primary_color",
    "theme.logoUrl": "theme.logo_url",
    "theme.faviconUrl": "theme.favicon_url",
}

_TEXT_FIELDS = ("domain", "admin_email", "admin_name")
_THEME_FIELDS = ("primary_color", "logo_url", "favicon_url")

# Personal data: field_changed events carry only the path
_UNLOGGED_FIELDS = ("admin_email", "admin_name")

StepRef = Union[int, StepId, str]


class WizardController:
    """
    Drives the five-step tenant setup wizard.

    Validation never raises during navigation: a blocked move leaves the
    step unchanged and records the field errors in validation_errors.
    Only submit() raises, and only after the endpoint has been spared a
    request that could not succeed.
    """

    def __init__(
        self,
        context: Optional[WizardContext] = None,
        client: Optional[PortalClient] = None,
        steps: Optional[List[WizardStep]] = None,
    ):
        """
        Initialize the controller.

        Args:
            context: Settings and the project being converted, if any
            client: Portal API client; without one no slug lookups run
                and submit() is unavailable
            steps: Step objects in order, defaults to the standard five
        """
        self.context = context or WizardContext()
        self.client = client
        self.steps: List[WizardStep] = steps or default_steps()

        self.availability: Optional[SlugAvailabilityChecker] = None
        if client is not None:
            self.availability = SlugAvailabilityChecker(
                client.check_slug,
                debounce_seconds=self.context.settings.debounce_seconds,
            )

        self.reset()

    def reset(self) -> None:
        """Re-initialize the form from the project or from defaults."""
        project = self.context.project
        self._form = WizardForm.from_project(project) if project is not None else WizardForm()
        self.current_step_index = 0
        self.validation_errors: Dict[str, str] = {}
        self.is_submitting = False
        self.closed = False
        if self.availability is not None:
            self.availability.reset()

    # ------------------------------------------------------------------
    # State views
    # ------------------------------------------------------------------

    @property
    def form(self) -> WizardForm:
        return self._form

    @property
    def current_step(self) -> WizardStep:
        return self.steps[self.current_step_index]

    @property
    def slug_available(self) -> Optional[bool]:
        """Latest availability result for the current slug (tri-state)."""
        if self.availability is None:
            return None
        return self.availability.available

    @property
    def is_last_step(self) -> bool:
        return self.current_step_index == len(self.steps) - 1

    def enabled_modules(self) -> List[ModuleSpec]:
        return catalog_enabled_modules(self._form.modules)

    def required_secrets(self) -> List[str]:
        return catalog_required_secrets(self._form.modules)

    # ------------------------------------------------------------------
    # Form mutation
    # ------------------------------------------------------------------

    def set_field(self, path: str, value: Any) -> None:
        """
        Set one form field by dotted path.

        Accepted paths are name, slug, domain, admin_email, admin_name,
        theme.<field>, modules.<key> and secrets.<key>, plus the camelCase
        names used in error maps (adminEmail, theme.primaryColor, ...).

        Setting the name regenerates the slug. Setting either the name or
        the slug restarts the debounced availability check, so with a
        client attached this must run inside the event loop.

        Args:
            path: Dotted field path
            value: New value

        Raises:
            WizardError: If the path does not name a form field
        """
        path = FIELD_ALIASES.get(path, path)
        form = self._form

        if path == "name":
            form.name = value
            form.slug = slugify(value)
            self._request_availability()
        elif path == "slug":
            form.slug = sanitize_slug(value)
            self._request_availability()
        elif path in _TEXT_FIELDS:
            setattr(form, path, value)
        else:
            section, _, key = path.partition(".")
            if section == "theme" and key in _THEME_FIELDS:
                setattr(form.theme, key, value)
            elif section == "modules" and key in TENANT_MODULES:
                form.modules[key] = bool(value)
            elif section == "secrets" and key:
                form.secrets[key] = value
            else:
                raise WizardError(f"Unknown form field: {path}")

        if path.startswith("secrets.") or path in _UNLOGGED_FIELDS:
            log_wizard_event("field_changed", field=path)
        else:
            log_wizard_event("field_changed", field=path, value=value)

    def toggle_module(self, key: str) -> bool:
        """
        Flip one selectable module.

        Args:
            key: Module key from the catalog

        Returns:
            The module's new enabled state

        Raises:
            WizardError: For always-included or unknown modules
        """
        if key in INCLUDED_MODULES:
            raise WizardError(f"Module '{key}' is always included and cannot be toggled")
        if key not in TENANT_MODULES:
            raise WizardError(f"Unknown module: {key}")

        enabled = not self._form.modules.get(key, False)
        self._form.modules[key] = enabled
        log_wizard_event("module_toggled", module=key, enabled=enabled)
        return enabled

    def apply_seed(self, seed: FormSeed) -> None:
        """
        Apply pre-filled values loaded from a seed file.

        Fields go through set_field, so the slug is derived from the name
        unless the seed carries one explicitly.

        Args:
            seed: Parsed form seed
        """
        if seed.name:
            self.set_field("name", seed.name)
        if seed.slug:
            self.set_field("slug", seed.slug)
        if seed.domain:
            self.set_field("domain", seed.domain)
        if seed.admin_email:
            self.set_field("admin_email", seed.admin_email)
        if seed.admin_name:
            self.set_field("admin_name", seed.admin_name)

        for key, enabled in seed.modules.items():
            self.set_field(f"modules.{key}", enabled)

        for field_name in _THEME_FIELDS:
            value = getattr(seed.theme, field_name)
            if value is not None:
                self.set_field(f"theme.{field_name}", value)

        for key, value in seed.secrets.items():
            self.set_field(f"secrets.{key}", value)

    def _request_availability(self) -> None:
        if self.availability is not None:
            self.availability.request(self._form.slug)

    async def settle(self) -> None:
        """
        Wait for any pending availability lookup to finish.

        A slug that was never looked up, such as one derived from a
        project title, gets its lookup started here first.
        """
        if self.availability is None:
            return
        if not self.availability.checking and self.availability.checked_slug != self._form.slug:
            self._request_availability()
        await self.availability.wait()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _resolve_step(self, step: StepRef) -> WizardStep:
        if isinstance(step, int):
            if not 0 <= step < len(self.steps):
                raise WizardError(f"Step index out of range: {step}")
            return self.steps[step]

        for candidate in self.steps:
            if candidate.step_id == step:
                return candidate
        raise WizardError(f"Unknown step: {step}")

    def validate_step(self, step: StepRef) -> Dict[str, str]:
        """
        Run one step's validator against the current form.

        Args:
            step: Step index or StepId

        Returns:
            Map of field name to error message (empty if valid)
        """
        return self._resolve_step(step).validate(self._form, self.slug_available)

    def is_step_complete(self, step: StepRef) -> bool:
        return not self.validate_step(step)

    def validate_all(self) -> Dict[str, str]:
        """Merge the errors of every step except the review step."""
        errors: Dict[str, str] = {}
        for step in self.steps:
            if step.step_id != StepId.REVIEW:
                errors.update(step.validate(self._form, self.slug_available))
        return errors

    def step_for_field(self, field_name: str) -> Optional[int]:
        """Index of the step that owns an error map key, if any."""
        for index, step in enumerate(self.steps):
            if step.owns(field_name):
                return index
        return None

    def compute_progress(self) -> int:
        """
        Percentage of steps whose validator passes, rounded half up.

        The review step always passes, so a fresh form starts above zero.
        """
        total = len(self.steps)
        completed = sum(1 for index in range(total) if self.is_step_complete(index))
        return int(completed * 100 / total + 0.5)

    def step_statuses(self) -> List[StepStatus]:
        """Display status for each step, for step indicators."""
        statuses = []
        for index in range(len(self.steps)):
            if index == self.current_step_index:
                statuses.append(StepStatus.CURRENT)
            elif index < self.current_step_index or self.is_step_complete(index):
                statuses.append(StepStatus.COMPLETE)
            else:
                statuses.append(StepStatus.PENDING)
        return statuses

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_to_step(self, index: int) -> bool:
        """
        Jump to a step.

        Moving back is always allowed. Moving forward, by any distance,
        requires the current step to validate clean.

        Args:
            index: Target step index

        Returns:
            True if the current step changed
        """
        if not 0 <= index < len(self.steps):
            raise WizardError(f"Step index out of range: {index}")

        if index < self.current_step_index:
            self._move_to(index)
            return True
        if index == self.current_step_index:
            return False

        errors = self.validate_step(self.current_step_index)
        if errors:
            self._block(errors)
            return False

        self._move_to(index)
        return True

    def next_step(self) -> bool:
        """
        Advance one step if the current step validates clean.

        Returns:
            True if the wizard advanced
        """
        if self.is_last_step:
            return False

        errors = self.validate_step(self.current_step_index)
        if errors:
            self._block(errors)
            return False

        self._move_to(self.current_step_index + 1)
        return True

    def prev_step(self) -> bool:
        """Go back one step; a no-op on the first step."""
        if self.current_step_index == 0:
            return False
        self._move_to(self.current_step_index - 1)
        return True

    def _move_to(self, index: int) -> None:
        log_wizard_event(
            "step_changed",
            from_step=self.current_step.step_id.value,
            to_step=self.steps[index].step_id.value,
        )
        self.current_step_index = index
        self.validation_errors = {}

    def _block(self, errors: Dict[str, str]) -> None:
        self.validation_errors = errors
        log_wizard_event(
            "step_blocked",
            step=self.current_step.step_id.value,
            fields=sorted(errors),
        )

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self, plan: str = DEFAULT_PLAN) -> Dict[str, Any]:
        """
        Validate the whole form and provision the tenant.

        A pending availability lookup is awaited first so a taken slug is
        caught before the request is sent.

        Args:
            plan: Billing plan for the new tenant

        Returns:
            The provisioning endpoint's response

        Raises:
            WizardError: If a submission is already running, the wizard is
                closed, or there is no API client
            WizardValidationError: If any step has errors; no request is made
            ProvisioningError: If the endpoint rejects or fails the request
        """
        if self.is_submitting:
            raise WizardError("A submission is already in progress")
        if self.closed:
            raise WizardError("The wizard has already completed")
        if self.client is None:
            raise WizardError("No portal client configured")

        self.is_submitting = True
        try:
            await self.settle()

            errors = self.validate_all()
            if errors:
                self.validation_errors = errors
                log_wizard_event("submit_rejected", fields=sorted(errors))
                raise WizardValidationError(errors)

            payload = build_payload(self._form, self.context.project, plan=plan)
            log_wizard_event(
                "submit_started",
                slug=self._form.slug,
                modules=[m.key for m in self.enabled_modules()],
            )
            try:
                result = await self.client.provision_tenant(payload)
            except PortalAPIError as e:
                logger.error("submit_failed", slug=self._form.slug, error=e.message)
                raise
        finally:
            self.is_submitting = False

        self.validation_errors = {}
        self.closed = True
        log_wizard_event("submit_succeeded", slug=self._form.slug)
        return result
