"""Immutable domain models for geo lookups.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the lookup engine:
fixes, planar positions, requests and their outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Mapping, Optional

from .errors import GeoLookupError


class LookupKind(Enum):
    """What a lookup request is keyed on."""

    IP = auto()
    PLACE = auto()
    COORDINATES = auto()

    @property
    def cache_prefix(self) -> str:
        """Tag used to keep key spaces apart in a shared cache."""
        return self.name.lower()


class LookupStatus(Enum):
    """Terminal state of a lookup request."""

    RESOLVED = auto()
    FAILED = auto()
    SKIPPED = auto()
    VETOED = auto()


@dataclass(frozen=True, slots=True)
class GeoFix:
    """A resolved latitude/longitude pair with optional descriptive metadata.

    Attributes:
        latitude: Degrees north, in [-90, 90]
        longitude: Degrees east, in [-180, 180]
        display_name: Full label as returned by a geocoder
        country_name: Country name from an IP provider
        city_name: City name from an IP provider
        region_name: Region or state name
        metadata: Raw provider extras (isp, timezone, ...), not interpreted
    """

    latitude: float
    longitude: float
    display_name: Optional[str] = None
    country_name: Optional[str] = None
    city_name: Optional[str] = None
    region_name: Optional[str] = None
    metadata: Mapping[str, Any] = field(
        default_factory=dict, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    @property
    def label(self) -> str:
        """Human-readable label for chat messages."""
        if self.display_name:
            return self.display_name
        parts = [p for p in (self.country_name, self.city_name) if p]
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class PlanarPosition:
    """A position in the projected world.

    x and z come from the coordinate transform; y is the ground height and
    is filled in by the caller.
    """

    x: float
    z: float
    y: Optional[float] = None

    def __str__(self) -> str:
        y = "?" if self.y is None else _fmt(self.y)
        return f"{_fmt(self.x)},{y},{_fmt(self.z)}"


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


@dataclass(frozen=True, slots=True)
class WorldCenter:
    """Re-centering offset taken from external world metadata."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True, slots=True)
class LookupRequest:
    """A single resolution attempt.

    Attributes:
        kind: Whether query is an address or a place name
        query: The address or place name as received
        session_name: Identity of the requesting session
    """

    kind: LookupKind
    query: str
    session_name: str = ""


@dataclass(frozen=True, slots=True)
class ProviderResponse:
    """Parsed answer from the provider.

    Attributes:
        kind: Which lookup produced the response
        payload: Parsed JSON (None if the body was not JSON or never arrived)
        fix: Usable fix extracted from the payload
        error: Failure reason when no fix could be obtained
        network_failed: True when the failure happened before parsing
    """

    kind: LookupKind
    payload: Any = None
    fix: Optional[GeoFix] = None
    error: Optional[str] = None
    network_failed: bool = False

    @property
    def is_usable(self) -> bool:
        """Check if the response carries coordinates."""
        return self.fix is not None


@dataclass(frozen=True, slots=True)
class LookupOutcome:
    """Final result of a lookup request.

    Attributes:
        request: The request this outcome answers
        status: Terminal state reached
        fix: The geo fix used, if any
        position: Position applied (or vetoed), if any
        message: Text for the user (empty for silent outcomes)
        error: Typed error for FAILED and VETOED outcomes
        delivered: True if message was already sent to the session
    """

    request: LookupRequest
    status: LookupStatus
    fix: Optional[GeoFix] = None
    position: Optional[PlanarPosition] = None
    message: str = ""
    error: Optional[GeoLookupError] = None
    delivered: bool = False

    @property
    def is_success(self) -> bool:
        """Check if the session was moved."""
        return self.status is LookupStatus.RESOLVED


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """GET request handed to the HTTP collaborator."""

    url: str
    timeout_seconds: float = 8.0


@dataclass(frozen=True, slots=True)
class HttpResult:
    """Completion value of an HTTP request.

    Attributes:
        succeeded: True if a 2xx response body was received
        data: Response body text
        error: Failure reason when not succeeded
        status_code: HTTP status, if a response arrived at all
    """

    succeeded: bool
    data: str = ""
    error: Optional[str] = None
    status_code: Optional[int] = None
