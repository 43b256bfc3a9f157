"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CapabilityVetoError,
    ConfigurationError,
    GeoLookupError,
    InvalidInputError,
    NetworkFailureError,
    ParseFailureError,
    ProviderUnavailableError,
    UnknownPlaceError,
)
from .models import (
    GeoFix,
    HttpRequest,
    HttpResult,
    LookupKind,
    LookupOutcome,
    LookupRequest,
    LookupStatus,
    PlanarPosition,
    ProviderResponse,
    WorldCenter,
)

__all__ = [
    # Models
    "GeoFix",
    "PlanarPosition",
    "WorldCenter",
    "LookupKind",
    "LookupRequest",
    "LookupStatus",
    "LookupOutcome",
    "ProviderResponse",
    "HttpRequest",
    "HttpResult",
    # Errors
    "GeoLookupError",
    "ProviderUnavailableError",
    "NetworkFailureError",
    "ParseFailureError",
    "UnknownPlaceError",
    "CapabilityVetoError",
    "InvalidInputError",
    "ConfigurationError",
]
