"""NS API — upstream HTTP client for the NS travel information gateway."""

from ns_mcp.ns_api.client import NSApiClient
from ns_mcp.ns_api.errors import NSApiError

__all__ = [
    "NSApiClient",
    "NSApiError",
]
