"""
Module Catalog

The fixed set of feature modules a tenant can be given, the modules
every tenant always gets, and the credential fields some modules need.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple


# Collected on the basic info step, never as a secret
DOMAIN_REQUIREMENT = "domain"


@dataclass(frozen=True)
class ModuleSpec:
    """A selectable or always-included tenant module."""
    key: str
    label: str
    description: str
    icon: str = "•"
    recommended: bool = False
    requires_setup: Tuple[str, ...] = ()
    tables: Tuple[str, ...] = ()
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SecretField:
    """How to prompt for one external credential."""
    key: str
    label: str
    kind: str = "text"  # text, password, email
    help: str = ""
    module: str = ""

    @property
    def is_password(self) -> bool:
        return self.kind == "password"


INCLUDED_MODULES: Dict[str, ModuleSpec] = {
    "billing": ModuleSpec(
        key="billing",
        label="Billing",
        description="Invoices and payment management from Uptrade",
        icon="💳",
    ),
    "messages": ModuleSpec(
        key="messages",
        label="Messages",
        description="Direct messaging with Uptrade team",
        icon="✉",
    ),
    "files": ModuleSpec(
        key="files",
        label="Files",
        description="Shared file storage and document management",
        icon="📄",
    ),
    "proposals": ModuleSpec(
        key="proposals",
        label="Proposals",
        description="View and sign proposals from Uptrade",
        icon="📋",
    ),
}


TENANT_MODULES: Dict[str, ModuleSpec] = {
    "analytics": ModuleSpec(
        key="analytics",
        label="Website Analytics",
        description="Track visitors, sessions, page views, scroll depth, and user behavior",
        icon="📊",
        recommended=True,
        requires_setup=("domain",),
        tables=("sessions", "page_views", "scroll_depth"),
        features=("Real-time tracking", "Scroll heatmaps", "Conversion funnels", "Traffic sources"),
    ),
    "clients": ModuleSpec(
        key="clients",
        label="Clients CRM",
        description="Track leads, contacts, and customer interactions for their business",
        icon="👥",
        recommended=True,
        tables=("contacts", "activities", "notes"),
        features=("Contact management", "Lead scoring", "Activity timeline", "Custom fields"),
    ),
    "seo": ModuleSpec(
        key="seo",
        label="SEO Manager",
        description="Search rankings, technical audits, keyword tracking, and optimization",
        icon="📈",
        recommended=True,
        requires_setup=("domain",),
        tables=("seo_sites", "seo_pages", "seo_queries", "seo_rankings"),
        features=("Keyword tracking", "Technical audits", "GSC integration", "AI recommendations"),
    ),
    "ecommerce": ModuleSpec(
        key="ecommerce",
        label="E-commerce",
        description="Product management, orders, and Shopify integration",
        icon="🛍",
        requires_setup=("shopify_store_domain", "shopify_access_token"),
        tables=("products", "orders", "order_items"),
        features=("Product sync", "Order tracking", "Inventory management", "Sales analytics"),
    ),
    "forms": ModuleSpec(
        key="forms",
        label="Forms",
        description="Create contact forms and collect submissions from their website",
        icon="📋",
        tables=("forms", "form_submissions"),
        features=("Form builder", "Submission tracking", "Email notifications", "Spam protection"),
    ),
    "blog": ModuleSpec(
        key="blog",
        label="Blog Manager",
        description="Create and manage blog posts with AI-assisted SEO optimization",
        icon="📝",
        tables=("blog_posts",),
        features=("AI content generation", "SEO optimization", "Category management", "Featured images"),
    ),
    "email_manager": ModuleSpec(
        key="email_manager",
        label="Outreach",
        description="Send email campaigns and SMS messages with automation",
        icon="✉",
        requires_setup=("resend_api_key", "resend_from_email"),
        tables=("email_campaigns", "email_templates", "email_tracking", "sms_campaigns"),
        features=("Email campaigns", "SMS messaging", "Email templates", "Subscriber lists", "Analytics"),
    ),
}


SECRET_FIELDS: Dict[str, SecretField] = {
    "resend_api_key": SecretField(
        key="resend_api_key",
        label="Resend API Key",
        kind="password",
        help="Get from resend.com/api-keys",
        module="Outreach",
    ),
    "resend_from_email": SecretField(
        key="resend_from_email",
        label="From Email",
        kind="email",
        help="Verified sender email in Resend",
        module="Outreach",
    ),
    "shopify_store_domain": SecretField(
        key="shopify_store_domain",
        label="Shopify Store Domain",
        help="yourstore.myshopify.com",
        module="E-commerce",
    ),
    "shopify_access_token": SecretField(
        key="shopify_access_token",
        label="Shopify Access Token",
        kind="password",
        help="From Shopify Admin > Apps",
        module="E-commerce",
    ),
    "square_access_token": SecretField(
        key="square_access_token",
        label="Square Access Token",
        kind="password",
        help="From Square Developer Dashboard",
        module="Billing",
    ),
    "square_location_id": SecretField(
        key="square_location_id",
        label="Square Location ID",
        help="Your Square location ID",
        module="Billing",
    ),
}


def enabled_modules(modules: Mapping[str, bool]) -> List[ModuleSpec]:
    """
    Get catalog entries for the enabled toggles.

    Keys that are not in the selectable catalog are ignored.

    Args:
        modules: Module toggle map

    Returns:
        Enabled modules in toggle-map order
    """
    return [
        TENANT_MODULES[key]
        for key, enabled in modules.items()
        if enabled and key in TENANT_MODULES
    ]


def required_secrets(modules: Mapping[str, bool]) -> List[str]:
    """
    Get the credential keys the enabled modules need.

    This is the union of requires_setup over enabled modules, without
    duplicates and without the domain, which is collected on the
    basic info step.

    Args:
        modules: Module toggle map

    Returns:
        Ordered list of required secret keys
    """
    keys: List[str] = []
    for module in enabled_modules(modules):
        for key in module.requires_setup:
            if key != DOMAIN_REQUIREMENT and key not in keys:
                keys.append(key)
    return keys


def secret_field(key: str) -> SecretField:
    """Get the prompt definition for a credential, with a generic fallback."""
    return SECRET_FIELDS.get(key) or SecretField(key=key, label=key.replace("_", " ").title())
