"""Shared fixtures for provisioner tests."""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
import pytest

from provisioner.api.client import PortalClient
from provisioner.config.models import ClientSettings, ContactRecord, ProjectRecord


class FakePortal:
    """In-memory stand-in for the portal functions, served via MockTransport."""

    def __init__(self) -> None:
        self.taken_slugs = {"taken-co"}
        self.slug_checks: List[str] = []
        self.submissions: List[Dict[str, Any]] = []
        self.provision_status = 200
        self.provision_body: Optional[Dict[str, Any]] = None
        self.fail_slug_checks = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path

        if path.endswith("/admin-tenants-check-slug"):
            slug = request.url.params.get("slug")
            self.slug_checks.append(slug)
            if self.fail_slug_checks:
                return httpx.Response(500, json={"error": "Internal server error"})
            return httpx.Response(200, json={"available": slug not in self.taken_slugs})

        if path.endswith("/tenant-setup-wizard"):
            payload = json.loads(request.content)
            self.submissions.append(payload)
            body = self.provision_body
            if body is None:
                body = {
                    "success": True,
                    "organization": {"id": "org-1", "name": payload["name"], "slug": payload["slug"]},
                    "trackingId": "trk-123",
                    "missingSecrets": [],
                    "message": f"Tenant \"{payload['name']}\" created successfully with 3 module(s)",
                }
            return httpx.Response(self.provision_status, json=body)

        return httpx.Response(404, json={"error": "Not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> ClientSettings:
    """Settings pointing at a fake portal with no debounce delay."""
    return ClientSettings(
        api_url="https://portal.test/.netlify/functions",
        api_token="test-token",
        debounce_seconds=0,
    )


@pytest.fixture
def fake_portal() -> FakePortal:
    return FakePortal()


@pytest.fixture
def make_client(settings, fake_portal):
    """Factory for PortalClients wired to the fake portal."""
    def _make() -> PortalClient:
        return PortalClient(settings, transport=fake_portal.transport())
    return _make


@pytest.fixture
def project() -> ProjectRecord:
    """A completed project ready for conversion."""
    return ProjectRecord(
        id="proj-42",
        title="Heinrich's Bakery",
        contact=ContactRecord(
            name="Ada Heinrich",
            email="ada@bakery.example",
            website="https://bakery.example",
        ),
        tenant_modules={"analytics": True, "clients": False, "seo": False, "forms": True},
        tenant_theme_color="#3b82f6",
    )


@pytest.fixture(autouse=True)
def reset_provisioner_logger():
    """Drop handlers the CLI attaches so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("provisioner")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
