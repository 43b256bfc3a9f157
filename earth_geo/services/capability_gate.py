"""Client capability checks applied before moving a session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.models import PlanarPosition
from ..ports.session import SessionPort

DEFAULT_VETO_MESSAGE = "Your client does not support 32bit worlds, Use freeminer.org"


@dataclass(frozen=True)
class ProtocolVersionGate:
    """Veto moves for clients older than a protocol generation.

    Old clients cannot represent the large coordinates a world-scale map
    produces. Sessions that report no version are let through.

    Attributes:
        min_protocol_version: Oldest protocol allowed to be moved
        message: Veto text shown to the user
    """

    min_protocol_version: int = 140
    message: str = DEFAULT_VETO_MESSAGE

    def check(self, session: SessionPort, position: PlanarPosition) -> Optional[str]:
        version = session.protocol_version()
        if version is not None and version < self.min_protocol_version:
            return self.message
        return None
