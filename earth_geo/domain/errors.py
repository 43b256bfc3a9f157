"""Typed domain errors for geo lookups.

Every failure a lookup can end in has its own type so that callers can
tell a dead network apart from a provider returning garbage, or a client
that simply cannot be moved.

All errors inherit from GeoLookupError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GeoLookupError(Exception):
    """Base error for the geo lookup domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ProviderUnavailableError(GeoLookupError):
    """No HTTP capability is wired, so the provider cannot be reached."""


@dataclass
class NetworkFailureError(GeoLookupError):
    """Transport-level failure or timeout talking to the provider.

    Attributes:
        url: The request URL that failed
    """

    url: str = ""


@dataclass
class ParseFailureError(GeoLookupError):
    """Provider answered, but the body is not JSON or has no coordinates.

    Attributes:
        url: The request URL (empty for cached payloads)
        payload_cached: Whether the parsed payload was stored in the cache
    """

    url: str = ""
    payload_cached: bool = False


@dataclass
class UnknownPlaceError(GeoLookupError):
    """Place name is absent from the static table and cannot be geocoded.

    Attributes:
        place: The place name as typed by the user
    """

    place: str = ""


@dataclass
class CapabilityVetoError(GeoLookupError):
    """The receiving client cannot represent the destination position.

    Attributes:
        protocol_version: Version reported by the client
    """

    protocol_version: Optional[int] = None


@dataclass
class InvalidInputError(GeoLookupError):
    """Malformed command input (bad coordinate pair, empty query).

    Attributes:
        raw_input: The text that could not be interpreted
    """

    raw_input: str = ""


@dataclass
class ConfigurationError(GeoLookupError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
