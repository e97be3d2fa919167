"""
Provisioner Errors

Exception types shared across the wizard, configuration and API layers.
"""

from typing import Dict, Optional


class ProvisionerError(Exception):
    """Base class for all tenant provisioner errors."""
    pass


class WizardError(ProvisionerError):
    """Invalid use of the wizard controller (unknown field, re-entrant submit)."""
    pass


class WizardValidationError(ProvisionerError):
    """Raised by submit() when one or more steps fail validation."""

    SUMMARY = "Please fix all errors before submitting"

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        super().__init__(message or self.SUMMARY)
        self.errors = dict(errors)

    def __str__(self) -> str:
        details = "; ".join(f"{field}: {error}" for field, error in self.errors.items())
        return f"{self.args[0]} ({details})" if details else self.args[0]
