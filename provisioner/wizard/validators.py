"""
Field Validators

Pure checks for individual wizard fields. Each check returns an error
message, or None when the value is acceptable.
"""

import re
from typing import Optional


SLUG_MAX_LENGTH = 50
MIN_NAME_LENGTH = 2
MIN_SLUG_LENGTH = 2

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
DOMAIN_PATTERN = re.compile(r"^([a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

_PROTOCOL_PREFIX = re.compile(r"^https?://")
_NON_ALPHANUMERIC_RUN = re.compile(r"[^a-z0-9]+")
_SLUG_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(name: str) -> str:
    """
    Derive the default slug from a display name.

    Lowercases, collapses every run of non-alphanumerics to one hyphen,
    trims hyphens from both ends and caps the result at 50 characters.
    The cap can expose a hyphen at the cut, so the result is trimmed again.
    """
    slug = _NON_ALPHANUMERIC_RUN.sub("-", name.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].strip("-")


def sanitize_slug(value: str) -> str:
    """Clean a hand-typed slug: lowercase, drop characters outside [a-z0-9-]."""
    return _SLUG_DISALLOWED.sub("", value.lower())


def normalize_domain(domain: str) -> str:
    """Strip a leading http(s):// and one trailing slash."""
    cleaned = _PROTOCOL_PREFIX.sub("", domain)
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned


def validate_name(name: str) -> Optional[str]:
    if len(name) < MIN_NAME_LENGTH:
        return "Name must be at least 2 characters"
    return None


def validate_slug(slug: str) -> Optional[str]:
    if not slug:
        return "Slug is required"
    if len(slug) < MIN_SLUG_LENGTH:
        return "Slug must be at least 2 characters"
    if not SLUG_PATTERN.fullmatch(slug):
        return "Slug must be lowercase letters, numbers, and hyphens only"
    return None


def validate_domain(domain: str) -> Optional[str]:
    if not domain:
        return "Domain is required"
    if not DOMAIN_PATTERN.fullmatch(normalize_domain(domain)):
        return "Invalid domain format (e.g., example.com)"
    return None


def validate_email(email: str) -> Optional[str]:
    if not email:
        return "Email is required"
    if not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"
    return None


def validate_color(color: str) -> Optional[str]:
    if not HEX_COLOR_PATTERN.fullmatch(color):
        return "Invalid color format (use hex like #4bbf39)"
    return None
