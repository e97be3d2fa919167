"""Portal API access."""

from .client import PortalClient
from .errors import PortalAPIError, ProvisioningError

__all__ = [
    "PortalClient",
    "PortalAPIError",
    "ProvisioningError",
]
