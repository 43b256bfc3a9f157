"""Provider gateway for HTTP geolocation and geocoding services.

This adapter builds request URLs from configurable templates, sends them
through the injected HTTP client and turns the JSON answers into
GeoFix values:
- IP lookups expect a single JSON object (ip-api.com shape by default)
- Place lookups expect a JSON array; only the first element is used
  (Nominatim shape by default)

Templates carry one ``%s`` slot for the address or encoded place name.
IP templates may also carry ``%k`` tokens for the API key.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote

from ...config import ProviderConfig, get_config
from ...domain.errors import ProviderUnavailableError
from ...domain.models import (
    GeoFix,
    HttpRequest,
    HttpResult,
    LookupKind,
    ProviderResponse,
)
from ...ports.http import HttpClientPort

ADDRESS_SLOT = "%s"
KEY_TOKEN = "%k"

_LATITUDE_FIELDS = ("lat", "latitude")
_LONGITUDE_FIELDS = ("lon", "lng", "longitude")
_METADATA_FIELDS = ("isp", "org", "as", "timezone", "query", "type", "importance")


def percent_encode(text: str) -> str:
    """Percent-encode text for use in a query string.

    Newlines become CRLF first, then every UTF-8 byte outside
    ``[A-Za-z0-9-_.~]`` is written as ``%XX``.
    """
    return quote(text.replace("\n", "\r\n"), safe="")


def _first_present(record: Mapping[str, Any], names: Iterable[str]) -> Any:
    for name in names:
        value = record.get(name)
        if value is not None and value != "":
            return value
    return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class ProviderGateway:
    """Gateway to the configured geolocation and geocoding providers.

    This adapter implements GeoProviderPort.

    Attributes:
        config: Provider URL templates and API key
        http: HTTP client, or None when the host has no HTTP capability
        timeout_seconds: Default timeout for provider requests
    """

    config: ProviderConfig = field(default_factory=lambda: get_config().provider)
    http: Optional[HttpClientPort] = None
    timeout_seconds: float = 8.0

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def is_available(self) -> bool:
        """Whether an HTTP client is wired."""
        return self.http is not None

    def build_ip_lookup_url(self, address: str) -> str:
        """Build the provider URL for an IP lookup.

        The percent-encoded API key replaces every ``%k`` token; if the
        template has none, it is appended as a ``key`` query parameter.
        Without a key, ``%k`` tokens are emptied. The address then fills
        the first ``%s`` slot.
        """
        url = self.config.api_ip_url
        key = percent_encode(self.config.api_key or "")
        if KEY_TOKEN in url:
            url = url.replace(KEY_TOKEN, key)
        elif key:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}key={key}"
        return url.replace(ADDRESS_SLOT, address, 1)

    def build_geocode_url(self, place_name: str) -> str:
        """Build the provider URL for a place-name lookup."""
        return self.config.api_geocode_url.replace(
            ADDRESS_SLOT, percent_encode(place_name), 1
        )

    def fetch(
        self,
        url: str,
        kind: LookupKind,
        timeout_seconds: Optional[float] = None,
    ) -> Future[ProviderResponse]:
        """Fetch and parse a provider response without blocking.

        The returned future always completes with a ProviderResponse;
        network and parse problems are reported through its ``error``.

        Args:
            url: Request URL built by one of the builders.
            kind: Which response shape to expect.
            timeout_seconds: Override for the default timeout.

        Returns:
            A future completed with the ProviderResponse.

        Raises:
            ProviderUnavailableError: If no HTTP client is configured.
        """
        if self.http is None:
            raise ProviderUnavailableError("HTTP API not available")

        request = HttpRequest(
            url=url,
            timeout_seconds=timeout_seconds or self.timeout_seconds,
        )
        response_future: Future[ProviderResponse] = Future()

        def _complete(http_future: Future[HttpResult]) -> None:
            try:
                response = self._handle_result(kind, url, http_future.result())
            except Exception as e:
                self._logger.error(
                    "Provider request crashed",
                    extra={"url": url, "error": str(e)},
                )
                response = ProviderResponse(
                    kind=kind, error=str(e), network_failed=True
                )
            response_future.set_result(response)

        self._logger.debug(
            "Issuing provider request",
            extra={"url": url, "kind": kind.name, "timeout": request.timeout_seconds},
        )
        self.http.fetch(request).add_done_callback(_complete)
        return response_future

    def _handle_result(
        self, kind: LookupKind, url: str, result: HttpResult
    ) -> ProviderResponse:
        if not result.succeeded:
            error = result.error or "unknown error"
            self._logger.warning(
                "Provider request failed",
                extra={"url": url, "error": error, "status": result.status_code},
            )
            return ProviderResponse(kind=kind, error=error, network_failed=True)

        try:
            payload = json.loads(result.data)
        except ValueError as e:
            self._logger.warning(
                "Provider response is not JSON",
                extra={"url": url, "error": str(e)},
            )
            return ProviderResponse(kind=kind, error=f"invalid JSON response: {e}")

        response = self.parse(kind, payload)
        if response.is_usable:
            self._logger.debug(
                "Provider lookup success",
                extra={"url": url, "label": response.fix.label},  # type: ignore[union-attr]
            )
        else:
            self._logger.warning(
                "Provider response has no usable coordinates",
                extra={"url": url, "error": response.error},
            )
        return response

    def parse(self, kind: LookupKind, payload: Any) -> ProviderResponse:
        """Extract a fix from an already-parsed JSON payload.

        Args:
            kind: IP lookups expect an object, place lookups an array.
            payload: Parsed JSON.

        Returns:
            ProviderResponse keeping the payload, with a fix or an error.
        """
        record: Any = payload
        if isinstance(payload, list):
            if not payload:
                return ProviderResponse(kind=kind, payload=payload, error="no results")
            record = payload[0]

        if not isinstance(record, dict):
            return ProviderResponse(
                kind=kind,
                payload=payload,
                error=f"unexpected {kind.name.lower()} response shape",
            )

        if str(record.get("status", "")).lower() == "fail":
            return ProviderResponse(
                kind=kind,
                payload=payload,
                error=str(record.get("message") or "provider reported failure"),
            )

        latitude = _as_float(_first_present(record, _LATITUDE_FIELDS))
        longitude = _as_float(_first_present(record, _LONGITUDE_FIELDS))
        if latitude is None or longitude is None:
            return ProviderResponse(
                kind=kind, payload=payload, error="missing latitude/longitude"
            )

        try:
            fix = GeoFix(
                latitude=latitude,
                longitude=longitude,
                display_name=record.get("display_name"),
                country_name=_first_present(record, ("country", "country_name")),
                city_name=record.get("city"),
                region_name=_first_present(record, ("regionName", "region")),
                metadata={k: record[k] for k in _METADATA_FIELDS if k in record},
            )
        except ValueError as e:
            return ProviderResponse(kind=kind, payload=payload, error=str(e))

        return ProviderResponse(kind=kind, payload=payload, fix=fix)
