"""Services layer - Application use cases.

Services orchestrate the ports to implement lookups and the ``/geo``
command.
"""

from .capability_gate import ProtocolVersionGate
from .geo_command import CommandResult, GeoCommand, parse_coordinates
from .lookup_orchestrator import LookupOrchestrator, cache_key, place_query_key

__all__ = [
    "LookupOrchestrator",
    "GeoCommand",
    "CommandResult",
    "ProtocolVersionGate",
    "cache_key",
    "place_query_key",
    "parse_coordinates",
]
