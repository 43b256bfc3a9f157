"""Session and world ports.

A session is whatever the host calls a connected player: it has a name,
possibly a network address, and an entity that can be moved and told
things. The world supplies ground heights for projected positions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import PlanarPosition


class SessionPort(Protocol):
    """Port for the requesting player/session."""

    @property
    def name(self) -> str:
        """Session identity used in logs and messages."""
        ...

    def network_address(self) -> Optional[str]:
        """Source address of the session, possibly with a port suffix.

        Returns:
            The address, or None/empty if it cannot be discovered.
        """
        ...

    def protocol_version(self) -> Optional[int]:
        """Protocol generation of the connected client, if known."""
        ...

    def send_message(self, text: str) -> None:
        """Send a text notification to the session."""
        ...

    def set_position(self, position: PlanarPosition) -> None:
        """Move the session's entity to a position."""
        ...


class WorldPort(Protocol):
    """Port for world metadata needed to place a session."""

    def ground_height(self, x: float, z: float) -> float:
        """Return a suitable standing height at (x, z)."""
        ...


class CapabilityGatePort(Protocol):
    """Port for vetoing moves a client cannot represent."""

    def check(self, session: SessionPort, position: PlanarPosition) -> Optional[str]:
        """Check whether a session may be moved to a position.

        Returns:
            None to allow the move, or the veto text to show the user.
        """
        ...
