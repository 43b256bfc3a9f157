"""Console stand-ins for the session and world ports.

Used by the command-line entry point, where there is no game server:
messages are printed and the final position is only recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ...domain.models import PlanarPosition


@dataclass
class ConsoleSession:
    """A session that prints what it is told.

    Attributes:
        name: Session identity
        address: Network address reported to the orchestrator
        client_protocol: Protocol version reported to the capability gate
        output: Where messages go (print by default)
    """

    name: str = "console"
    address: Optional[str] = None
    client_protocol: Optional[int] = None
    output: Callable[[str], None] = field(default=print, repr=False)

    messages: List[str] = field(default_factory=list, repr=False)
    position: Optional[PlanarPosition] = None

    def network_address(self) -> Optional[str]:
        return self.address

    def protocol_version(self) -> Optional[int]:
        return self.client_protocol

    def send_message(self, text: str) -> None:
        self.messages.append(text)
        self.output(text)

    def set_position(self, position: PlanarPosition) -> None:
        self.position = position


@dataclass(frozen=True)
class FlatWorld:
    """A world whose ground is at the same height everywhere."""

    height: float = 0.0

    def ground_height(self, x: float, z: float) -> float:
        return self.height
