from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stomp_shared.protocol.heartbeat import HeartBeat

from .network import Connection
from .processor import FrameProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """Negotiated state of a connected broker session."""

    version: str
    id: str
    server: str
    heart_beat: HeartBeat
    connection: Connection = field(repr=False, compare=False)
    processor: FrameProcessor = field(repr=False, compare=False)

    @property
    def tx_heart_beat(self) -> int:
        return self.heart_beat.outgoing

    @property
    def rx_heart_beat(self) -> int:
        return self.heart_beat.incoming

    async def close(self) -> None:
        """Stop reading frames and close the connection."""
        await self.processor.stop()
        await self.connection.close()
        logger.info("Session %s closed", self.id or "<anonymous>")


__all__ = ["Session"]
