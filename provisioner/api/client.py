"""
Portal API Client

Async HTTP client for the two portal endpoints the wizard talks to:
the slug availability lookup and the tenant provisioning call.
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from ..config.models import ClientSettings
from .errors import PortalAPIError, ProvisioningError

logger = structlog.get_logger(__name__)


class PortalClient:
    """
    Thin wrapper around httpx.AsyncClient for the portal functions.

    Each call is tried once. Timeouts and transport errors are turned
    into PortalAPIError so callers only handle one exception family.
    """

    CHECK_SLUG_PATH = "admin-tenants-check-slug"
    PROVISION_PATH = "tenant-setup-wizard"
    DEFAULT_FAILURE = "Failed to create tenant"

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Client settings (base URL, token, timeout)
            transport: Optional httpx transport, used to fake the API in tests
        """
        self.settings = settings or ClientSettings()

        headers = {"Accept": "application/json"}
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"

        self._http = httpx.AsyncClient(
            base_url=self.settings.api_url + "/",
            headers=headers,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            transport=transport,
        )

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def check_slug(self, slug: str) -> bool:
        """
        Ask the portal whether a slug is free.

        Args:
            slug: Candidate tenant slug

        Returns:
            True if available, False if taken

        Raises:
            PortalAPIError: On timeout, transport error, HTTP error or a
                response without a boolean "available" field
        """
        try:
            response = await self._http.get(self.CHECK_SLUG_PATH, params={"slug": slug})
        except httpx.TimeoutException:
            raise PortalAPIError(f"Slug check timed out after {self.settings.timeout:g}s")
        except httpx.HTTPError as e:
            raise PortalAPIError(f"Slug check failed: {e}")

        if response.is_error:
            raise PortalAPIError(
                self._error_message(response, f"Slug check failed with HTTP {response.status_code}"),
                status_code=response.status_code,
            )

        data = self._json(response)
        available = data.get("available") if isinstance(data, dict) else None
        if not isinstance(available, bool):
            raise PortalAPIError("Slug check returned no availability flag", response.status_code)
        return available

    async def provision_tenant(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a tenant from a wizard submission payload.

        Args:
            payload: Flattened submission payload

        Returns:
            The endpoint's JSON response (organization, trackingId, ...)

        Raises:
            ProvisioningError: With the endpoint's error message verbatim
        """
        logger.info("provision_request", slug=payload.get("slug"), project_id=payload.get("projectId"))

        try:
            response = await self._http.post(self.PROVISION_PATH, json=payload)
        except httpx.TimeoutException:
            raise ProvisioningError(f"Request timed out after {self.settings.timeout:g}s")
        except httpx.HTTPError as e:
            raise ProvisioningError(str(e) or self.DEFAULT_FAILURE)

        data = self._json(response)
        body = data if isinstance(data, dict) else {}

        if response.is_error or not body.get("success"):
            default = self.DEFAULT_FAILURE
            if response.is_error:
                default = f"Request failed with status code {response.status_code}"
            raise ProvisioningError(
                self._error_message(response, default),
                status_code=response.status_code,
                validation_errors=body.get("validationErrors"),
            )

        return body

    def _json(self, response: httpx.Response) -> Any:
        """Decode a JSON body, or None if the body is not JSON."""
        try:
            return response.json()
        except ValueError:
            return None

    def _error_message(self, response: httpx.Response, default: str) -> str:
        """Pick the endpoint's "error" field, falling back to a default."""
        data = self._json(response)
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return default
