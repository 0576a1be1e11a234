"""asyncio STOMP client: handshake, session and frame processing."""

from .core import Connection, Session, connect, open_connection

__all__ = ["Connection", "Session", "connect", "open_connection"]
