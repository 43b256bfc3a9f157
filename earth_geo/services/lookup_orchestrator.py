"""Lookup orchestrator - Resolves sessions and place names to positions.

Each lookup runs a small state machine:

    START -> classify address (IP lookups) -> cache
          -> hit: RESOLVED
          -> miss: build URL -> async fetch
                -> network/parse failure: FAILED
                -> store in cache -> RESOLVED

Private addresses and sessions without an address end in SKIPPED without
telling the user anything. A resolved fix is projected, placed on the
ground and, unless the capability gate vetoes it (VETOED), applied to the
session.

The synchronous part runs on the caller's thread and every lookup method
returns a Future immediately. When a fetch is needed the future is
completed later on the HTTP worker thread. Concurrent identical lookups
are not coalesced: each one that misses the cache issues its own request.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from typing import Optional

from ..addresses import is_private, strip_port
from ..adapters.cache.memory_cache import InMemoryCache
from ..adapters.geocoding.static_table import StaticPlaceTable
from ..config import LookupConfig, get_config
from ..domain.errors import (
    CapabilityVetoError,
    GeoLookupError,
    InvalidInputError,
    NetworkFailureError,
    ParseFailureError,
    ProviderUnavailableError,
    UnknownPlaceError,
)
from ..domain.models import (
    GeoFix,
    LookupKind,
    LookupOutcome,
    LookupRequest,
    LookupStatus,
    ProviderResponse,
)
from ..ports.cache import CachePort
from ..ports.geocoding import GeoProviderPort, PlaceTablePort
from ..ports.session import CapabilityGatePort, SessionPort, WorldPort
from ..projection import Projection

MESSAGE_PREFIX = "[geoip]"


def cache_key(kind: LookupKind, query: str) -> str:
    """Build a tagged cache key so address and place keys never collide."""
    return f"{kind.cache_prefix}:{query}"


def place_query_key(name: str) -> str:
    """Case-fold and collapse whitespace; every script is kept as typed."""
    return re.sub(r"\s+", " ", name.casefold()).strip()


def _completed(outcome: LookupOutcome) -> Future[LookupOutcome]:
    future: Future[LookupOutcome] = Future()
    future.set_result(outcome)
    return future


def _service_name(kind: LookupKind) -> str:
    return "GeoIP" if kind is LookupKind.IP else "geocoding"


@dataclass
class LookupOrchestrator:
    """Turns an address or a place name into a position for a session.

    Attributes:
        provider: HTTP geolocation/geocoding gateway
        world: Supplies ground heights
        projection: Lat/lon <-> planar transform
        cache: Provider responses keyed by tagged lookup key
        place_table: Offline fallback used when the provider is unavailable
        capability_gate: Optional veto on moves
        config: Lookup settings (enable flags, timeout)
    """

    provider: GeoProviderPort
    world: WorldPort
    projection: Projection = field(default_factory=Projection)
    cache: Optional[CachePort[ProviderResponse]] = None
    place_table: Optional[PlaceTablePort] = field(default_factory=StaticPlaceTable)
    capability_gate: Optional[CapabilityGatePort] = None
    config: LookupConfig = field(default_factory=lambda: get_config().lookup)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.cache is None:
            self.cache = InMemoryCache(
                name="geo", ttl_seconds=self.config.cache_ttl_seconds
            )

    def lookup_address(self, session: SessionPort) -> Future[LookupOutcome]:
        """Geolocate a session by its network address and move it there.

        Args:
            session: The session to locate.

        Returns:
            A future completed with the LookupOutcome.
        """
        address = strip_port(session.network_address())
        request = LookupRequest(LookupKind.IP, address, session.name)

        if not address:
            self._logger.debug(
                "No network address for session",
                extra={"session": session.name},
            )
            return _completed(LookupOutcome(request, LookupStatus.SKIPPED))

        if is_private(address):
            self._logger.debug(
                "Skipping private address",
                extra={"session": session.name, "address": address},
            )
            return _completed(LookupOutcome(request, LookupStatus.SKIPPED))

        key = cache_key(LookupKind.IP, address)
        cached = self.cache.get(key)
        if cached is not None:
            self._logger.debug("Lookup cache hit", extra={"key": key})
            return _completed(self._finish(session, request, cached, url=""))

        if not self.provider.is_available:
            self._logger.warning(
                "HTTP API not available; cannot perform GeoIP lookup",
                extra={"session": session.name},
            )
            error = ProviderUnavailableError("HTTP API not available")
            return _completed(
                LookupOutcome(request, LookupStatus.FAILED, error=error)
            )

        url = self.provider.build_ip_lookup_url(address)
        return self._fetch_and_apply(session, request, key, url)

    def lookup_place(self, session: SessionPort, name: str) -> Future[LookupOutcome]:
        """Geocode a place name and move the session there.

        Without an HTTP capability the offline table is used instead.

        Args:
            session: The session to move.
            name: Free-text place name.

        Returns:
            A future completed with the LookupOutcome.
        """
        query = name.strip()
        request = LookupRequest(LookupKind.PLACE, query, session.name)
        if not query:
            error = InvalidInputError("Place name is empty", raw_input=name)
            return _completed(
                LookupOutcome(
                    request, LookupStatus.FAILED, message=error.message, error=error
                )
            )

        key = cache_key(LookupKind.PLACE, place_query_key(query))
        cached = self.cache.get(key)
        if cached is not None:
            self._logger.debug("Lookup cache hit", extra={"key": key})
            return _completed(self._finish(session, request, cached, url=""))

        if not self.provider.is_available:
            return _completed(self._lookup_offline(session, request))

        url = self.provider.build_geocode_url(query)
        return self._fetch_and_apply(session, request, key, url)

    def move_to(
        self,
        session: SessionPort,
        fix: GeoFix,
        request: Optional[LookupRequest] = None,
    ) -> LookupOutcome:
        """Project a fix, place it on the ground and move the session.

        Args:
            session: The session to move.
            fix: Destination.
            request: Request being answered (a coordinates request if omitted).

        Returns:
            RESOLVED if the session was moved, VETOED if the gate refused.
        """
        if request is None:
            request = LookupRequest(
                LookupKind.COORDINATES,
                f"{fix.latitude},{fix.longitude}",
                session.name,
            )

        planar = self.projection.to_planar(fix)
        ground = self.world.ground_height(planar.x, planar.z)
        position = replace(planar, y=ground - self.projection.vertical_offset)

        label = fix.label
        message = (
            f"Earth: Moving to {label} : {position}"
            if label
            else f"Earth: Moving to {position}"
        )
        self._logger.info(
            "Moving session",
            extra={
                "session": session.name,
                "lat": fix.latitude,
                "lon": fix.longitude,
                "position": str(position),
            },
        )
        session.send_message(message)

        veto = (
            self.capability_gate.check(session, position)
            if self.capability_gate is not None
            else None
        )
        if veto:
            self._logger.info(
                "Move vetoed by client capability",
                extra={"session": session.name, "reason": veto},
            )
            session.send_message(veto)
            error = CapabilityVetoError(
                veto, protocol_version=session.protocol_version()
            )
            return LookupOutcome(
                request,
                LookupStatus.VETOED,
                fix=fix,
                position=position,
                message=veto,
                error=error,
                delivered=True,
            )

        session.set_position(position)
        return LookupOutcome(
            request,
            LookupStatus.RESOLVED,
            fix=fix,
            position=position,
            message=message,
            delivered=True,
        )

    def handle_session_spawn(
        self, session: SessionPort
    ) -> Optional[Future[LookupOutcome]]:
        """Run the automatic lookup for a new or respawned session.

        The lookup only runs when enabled, when auto lookup on spawn is
        switched on, and when the world is not re-centered by metadata.

        Returns:
            The lookup future, or None if no lookup was started.
        """
        if not (self.config.enable and self.config.auto_lookup_on_spawn):
            return None
        if self.projection.reference_center is not None:
            return None
        return self.lookup_address(session)

    def _lookup_offline(
        self, session: SessionPort, request: LookupRequest
    ) -> LookupOutcome:
        self._logger.info(
            "HTTP API not available; using offline place table",
            extra={"place": request.query},
        )
        fix = self.place_table.lookup(request.query) if self.place_table else None
        if fix is None:
            error = UnknownPlaceError(
                f"Unknown place: {request.query}", place=request.query
            )
            return LookupOutcome(
                request, LookupStatus.FAILED, message=error.message, error=error
            )
        return self.move_to(session, fix, request)

    def _fetch_and_apply(
        self,
        session: SessionPort,
        request: LookupRequest,
        key: str,
        url: str,
    ) -> Future[LookupOutcome]:
        outcome_future: Future[LookupOutcome] = Future()
        response_future = self.provider.fetch(
            url, request.kind, self.config.timeout_seconds
        )

        def _on_response(f: Future[ProviderResponse]) -> None:
            try:
                outcome = self._complete(session, request, key, url, f.result())
            except Exception as e:
                self._logger.exception(
                    "Lookup completion failed",
                    extra={"session": session.name, "url": url},
                )
                outcome = LookupOutcome(
                    request,
                    LookupStatus.FAILED,
                    error=GeoLookupError("Lookup failed", cause=e),
                )
            outcome_future.set_result(outcome)

        self._logger.info(
            "Lookup started",
            extra={"session": session.name, "kind": request.kind.name, "url": url},
        )
        response_future.add_done_callback(_on_response)
        return outcome_future

    def _complete(
        self,
        session: SessionPort,
        request: LookupRequest,
        key: str,
        url: str,
        response: ProviderResponse,
    ) -> LookupOutcome:
        if response.network_failed:
            message = (
                f"{MESSAGE_PREFIX} {_service_name(request.kind)} request failed: "
                f"{response.error or 'unknown error'}"
            )
            session.send_message(message)
            error = NetworkFailureError(message, url=url)
            return LookupOutcome(
                request,
                LookupStatus.FAILED,
                message=message,
                error=error,
                delivered=True,
            )

        # Unusable payloads are cached too, so a failing key is not retried
        # until the entry expires.
        if response.payload is not None:
            self.cache.set(key, response)
        return self._finish(session, request, response, url)

    def _finish(
        self,
        session: SessionPort,
        request: LookupRequest,
        response: ProviderResponse,
        url: str,
    ) -> LookupOutcome:
        if response.fix is None:
            message = (
                f"{MESSAGE_PREFIX} Failed to parse {_service_name(request.kind)} "
                f"response: {response.error or 'no coordinates'}"
            )
            session.send_message(message)
            error = ParseFailureError(
                message, url=url, payload_cached=response.payload is not None
            )
            return LookupOutcome(
                request,
                LookupStatus.FAILED,
                message=message,
                error=error,
                delivered=True,
            )
        return self.move_to(session, response.fix, request)
