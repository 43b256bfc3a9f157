"""Geocoding ports - Abstractions for the provider and the offline table.

These protocols define the contracts the lookup orchestrator depends on,
allowing different providers (ip-api, Nominatim, anything reachable
through a URL template) and fallbacks to be used.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoFix, LookupKind, ProviderResponse


class GeoProviderPort(Protocol):
    """Port for the HTTP geolocation/geocoding provider.

    Implementation: adapters/geocoding/provider_gateway.py
    """

    @property
    def is_available(self) -> bool:
        """Whether an HTTP capability is wired at all."""
        ...

    def build_ip_lookup_url(self, address: str) -> str:
        """Build the provider URL for an IP lookup."""
        ...

    def build_geocode_url(self, place_name: str) -> str:
        """Build the provider URL for a place-name lookup."""
        ...

    def fetch(
        self,
        url: str,
        kind: LookupKind,
        timeout_seconds: Optional[float] = None,
    ) -> Future[ProviderResponse]:
        """Fetch and parse a provider response without blocking.

        Args:
            url: Request URL built by one of the builders.
            kind: Which response shape to expect.
            timeout_seconds: Override for the configured timeout.

        Returns:
            A future completed with the ProviderResponse.

        Raises:
            ProviderUnavailableError: If no HTTP client is configured.
        """
        ...

    def parse(self, kind: LookupKind, payload: object) -> ProviderResponse:
        """Extract a fix from an already-parsed JSON payload."""
        ...


class PlaceTablePort(Protocol):
    """Port for the offline place-name table."""

    def lookup(self, name: str) -> Optional[GeoFix]:
        """Look up a place by name.

        Returns:
            The fix, or None if the place is unknown.
        """
        ...
