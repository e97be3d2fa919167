"""
Tenant Provisioner

Guided setup wizard that provisions a new tenant organization on the
portal: basic info, modules, branding, API keys and a final review.
"""

from . import logging  # noqa: F401  configures structlog

__version__ = "1.0.0"
