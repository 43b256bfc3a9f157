"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the lookup engine and the host
environment. They enable dependency injection and make the system
testable without a network, a game server or a real clock.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .cache import CachePort
from .geocoding import GeoProviderPort, PlaceTablePort
from .http import HttpClientPort
from .session import CapabilityGatePort, SessionPort, WorldPort

__all__ = [
    # Cache
    "CachePort",
    # Geocoding
    "GeoProviderPort",
    "PlaceTablePort",
    # HTTP
    "HttpClientPort",
    # Session
    "SessionPort",
    "WorldPort",
    "CapabilityGatePort",
]
