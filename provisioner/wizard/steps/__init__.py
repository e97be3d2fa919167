"""
Wizard Steps

Each step handles a specific part of the tenant configuration.
"""

from .base import WizardStep
from .s01_info import InfoStep
from .s02_modules import ModulesStep
from .s03_branding import BrandingStep
from .s04_secrets import SecretsStep
from .s05_review import ReviewStep

__all__ = [
    "WizardStep",
    "InfoStep",
    "ModulesStep",
    "BrandingStep",
    "SecretsStep",
    "ReviewStep",
    "default_steps",
]


def default_steps():
    """Instantiate the fixed step sequence in order."""
    return [InfoStep(), ModulesStep(), BrandingStep(), SecretsStep(), ReviewStep()]
