"""The ``/geo`` command: move to coordinates or to a named place.

Accepted forms:
    /geo 52.52, 13.405
    /geo 52.52 13.405
    /geo Berlin
    /geo new york
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..domain.errors import GeoLookupError, InvalidInputError
from ..domain.models import GeoFix, LookupOutcome, LookupStatus
from ..ports.session import SessionPort
from .lookup_orchestrator import LookupOrchestrator

USAGE = "Usage: /geo <lat>,<lon> | <lat> <lon> | <place name>"
INVALID_COORDINATES = "Invalid lat/lon or unknown place"


def _split_params(param: str) -> list[str]:
    parts = [p.strip() for p in param.split(",")]
    if len(parts) != 2:
        parts = param.split()
    return parts


def parse_coordinates(param: str) -> Optional[Tuple[float, float]]:
    """Parse a latitude/longitude pair.

    The pair may be comma- or space-separated.

    Returns:
        (latitude, longitude), or None if param is not two finite numbers.
    """
    parts = _split_params(param)
    if len(parts) != 2:
        return None
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    return latitude, longitude


@dataclass(frozen=True)
class CommandResult:
    """What the command front end reports back.

    Attributes:
        success: Command status
        message: Text to return to the user (empty if already delivered)
        pending: Outcome future for lookups still in flight
        error: Typed error for failed commands
    """

    success: bool
    message: str = ""
    pending: Optional[Future[LookupOutcome]] = field(default=None, repr=False)
    error: Optional[GeoLookupError] = None


@dataclass
class GeoCommand:
    """Chat command handler for geo moves."""

    orchestrator: LookupOrchestrator

    name: str = "geo"
    description: str = "Teleport to geo, city or lat,lon"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def execute(self, session: SessionPort, param: str) -> CommandResult:
        """Run the command for a session.

        Args:
            session: The invoking session.
            param: Everything after the command name.

        Returns:
            CommandResult; pending is set if a lookup is still in flight.
        """
        self._logger.info(
            "Geo command", extra={"session": session.name, "param": param}
        )
        param = param.strip()
        if not param:
            return CommandResult(
                False, USAGE, error=InvalidInputError(USAGE, raw_input=param)
            )

        coordinates = parse_coordinates(param)
        if coordinates is not None:
            return self._move_to_coordinates(session, param, *coordinates)

        place = " ".join(_split_params(param))
        future = self.orchestrator.lookup_place(session, place)
        if not future.done():
            return CommandResult(True, f"Looking up {place}...", pending=future)
        return self.to_result(future.result())

    def _move_to_coordinates(
        self, session: SessionPort, param: str, latitude: float, longitude: float
    ) -> CommandResult:
        try:
            fix = GeoFix(latitude=latitude, longitude=longitude)
        except ValueError as e:
            error = InvalidInputError(INVALID_COORDINATES, cause=e, raw_input=param)
            return CommandResult(False, INVALID_COORDINATES, error=error)
        return self.to_result(self.orchestrator.move_to(session, fix))

    @staticmethod
    def to_result(outcome: LookupOutcome) -> CommandResult:
        """Map a finished lookup to a command result."""
        message = "" if outcome.delivered else outcome.message
        return CommandResult(
            success=outcome.status is LookupStatus.RESOLVED,
            message=message,
            error=outcome.error,
        )
