"""Tests for field validators and slug helpers."""

import pytest

from provisioner.wizard.validators import (
    SLUG_MAX_LENGTH,
    normalize_domain,
    sanitize_slug,
    slugify,
    validate_color,
    validate_domain,
    validate_email,
    validate_name,
    validate_slug,
)


class TestSlugify:
    """Tests for deriving slugs from names."""

    @pytest.mark.parametrize("name,expected", [
        ("Acme Corp!", "acme-corp"),
        ("  Hello   World  ", "hello-world"),
        ("Café & Co.", "caf-co"),
        ("---", ""),
        ("ABC123", "abc123"),
    ])
    def test_slugify(self, name, expected):
        assert slugify(name) == expected

    def test_caps_length(self):
        assert len(slugify("a" * 80)) == SLUG_MAX_LENGTH

    def test_no_trailing_hyphen_after_cap(self):
        name = "a" * 49 + " bcd"
        slug = slugify(name)
        assert slug == "a" * 49
        assert not slug.endswith("-")

    def test_result_is_valid_slug(self):
        assert validate_slug(slugify("Uptrade Media Group")) is None


class TestSanitizeSlug:
    """Tests for cleaning hand-typed slugs."""

    def test_lowercases_and_drops_invalid(self):
        assert sanitize_slug("My_Slug!") == "myslug"

    def test_keeps_hyphens(self):
        assert sanitize_slug("my-slug-2") == "my-slug-2"


class TestNormalizeDomain:
    """Tests for domain normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("https://example.com/", "example.com"),
        ("http://example.com", "example.com"),
        ("example.com", "example.com"),
        ("www.example.co.uk/", "www.example.co.uk"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_domain(raw) == expected


class TestFieldValidators:
    """Tests for per-field error messages."""

    def test_name(self):
        assert validate_name("A") == "Name must be at least 2 characters"
        assert validate_name("Ab") is None

    def test_slug_messages(self):
        assert validate_slug("") == "Slug is required"
        assert validate_slug("a") == "Slug must be at least 2 characters"
        assert validate_slug("Bad_Slug") == "Slug must be lowercase letters, numbers, and hyphens only"
        assert validate_slug("good-slug") is None

    def test_slug_rejects_trailing_newline(self):
        assert validate_slug("slug\n") is not None

    def test_domain(self):
        assert validate_domain("") == "Domain is required"
        assert validate_domain("not a domain") == "Invalid domain format (e.g., example.com)"
        assert validate_domain("localhost") == "Invalid domain format (e.g., example.com)"
        assert validate_domain("https://example.com/") is None
        assert validate_domain("sub.example.io") is None

    def test_email(self):
        assert validate_email("") == "Email is required"
        assert validate_email("nope") == "Invalid email format"
        assert validate_email("a b@c.de") == "Invalid email format"
        assert validate_email("admin@example.com") is None

    def test_color(self):
        assert validate_color("4bbf39") == "Invalid color format (use hex like #4bbf39)"
        assert validate_color("#4bbf3") is not None
        assert validate_color("#4BBF39") is None
        assert validate_color("#4bbf39") is None
