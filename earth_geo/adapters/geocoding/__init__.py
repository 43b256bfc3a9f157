"""Geocoding adapters - Implementations of the geocoding ports.

Available implementations:
- ProviderGateway: URL-template based HTTP provider (ip-api, Nominatim)
- StaticPlaceTable: Offline table of well-known places
"""

from .provider_gateway import ProviderGateway, percent_encode
from .static_table import CITIES, StaticPlaceTable, normalize_place_name

__all__ = [
    "ProviderGateway",
    "StaticPlaceTable",
    "CITIES",
    "normalize_place_name",
    "percent_encode",
]
