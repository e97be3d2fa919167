"""
Default configuration values.

Provides the initial wizard form values and endpoint defaults.
"""

from typing import Dict, List


DEFAULT_API_URL = "http://localhost:8888/.netlify/functions"
DEFAULT_PORTAL_URL = "https://portal.uptrademedia.com"
DEFAULT_CONFIG_FILE = "provisioner.yaml"
DEFAULT_PLAN = "starter"
DEFAULT_PRIMARY_COLOR = "#4bbf39"

PRESET_COLORS: List[str] = [
    "#4bbf39",
    "#3b82f6",
    "#8b5cf6",
    "#ec4899",
    "#f97316",
    "#eab308",
    "#14b8a6",
    "#64748b",
]


def get_default_modules() -> Dict[str, bool]:
    """Get the default selectable module toggles."""
    return {
        "analytics": True,
        "clients": True,
        "seo": True,
        "ecommerce": False,
        "forms": False,
        "blog": False,
        "email_manager": False,
    }


def get_default_secrets() -> Dict[str, str]:
    """Get the default credential slots."""
    return {
        "resend_api_key": "",
        "resend_from_email": "",
        "shopify_store_domain": "",
        "shopify_access_token": "",
        "square_access_token": "",
        "square_location_id": "",
        "square_environment": "sandbox",
    }
