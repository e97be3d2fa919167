"""Portal API exceptions."""

from typing import Any, Dict, List, Optional

from ..errors import ProvisionerError


class PortalAPIError(ProvisionerError):
    """Transport failure or error response from the portal API."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProvisioningError(PortalAPIError):
    """The tenant provisioning endpoint rejected or failed the request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.validation_errors = validation_errors or []
