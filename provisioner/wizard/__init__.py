"""
Tenant Setup Wizard

A five-step guided setup for creating a tenant, built around a
UI-independent controller that the terminal runner drives.
"""

from .controller import WizardController
from .runner import WizardRunner
from .state import WizardContext, WizardForm, StepResult
from .navigator import Navigator

__all__ = [
    "WizardController",
    "WizardRunner",
    "WizardContext",
    "WizardForm",
    "StepResult",
    "Navigator",
]
