from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

from stomp_shared.protocol.errors import AddressError, TransportError

logger = logging.getLogger(__name__)


def split_host_port(address: str) -> Tuple[str, str]:
    """
    Split ``host:port`` or ``[host]:port`` into its parts.

    IPv6 hosts must be bracketed; the brackets are removed from the result.
    """
    if not address:
        raise AddressError("missing port in address")

    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise AddressError(f"missing ']' in address {address!r}")
        host, rest = address[1:end], address[end + 1 :]
        if not rest.startswith(":"):
            raise AddressError(f"missing port in address {address!r}")
        port = rest[1:]
        if "[" in host or "]" in port or "[" in port:
            raise AddressError(f"unexpected bracket in address {address!r}")
        return host, port

    host, sep, port = address.rpartition(":")
    if not sep:
        raise AddressError(f"missing port in address {address!r}")
    if ":" in host:
        raise AddressError(f"too many colons in address {address!r}")
    if "[" in host or "]" in host or "]" in port:
        raise AddressError(f"unexpected bracket in address {address!r}")
    return host, port


def join_host_port(host: str, port: object) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class Connection:
    """Duplex byte stream to a broker, backed by asyncio streams."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.reader = reader
        self.writer = writer
        self.closed = False

    @property
    def remote_address(self) -> str:
        """Peer address rendered as ``host:port``; empty when unknown."""
        peername = self.writer.get_extra_info("peername")
        if isinstance(peername, (tuple, list)) and len(peername) >= 2:
            return join_host_port(str(peername[0]), peername[1])
        if isinstance(peername, str):
            return peername
        return ""

    async def write(self, data: bytes) -> None:
        if self.closed:
            raise TransportError("Connection already closed")
        try:
            self.writer.write(data)
            await self.writer.drain()
        except (ConnectionError, OSError, RuntimeError) as exc:
            raise TransportError(f"Send failed: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), self.remote_address)

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as exc:
            logger.debug("Ignoring error while closing connection: %s", exc)
        logger.info("Connection to %s closed", self.remote_address)


async def open_connection(host: str, port: int, limit: Optional[int] = None) -> Connection:
    """Open a TCP connection to a broker."""
    kwargs = {"limit": limit} if limit else {}
    try:
        reader, writer = await asyncio.open_connection(host, port, **kwargs)
    except (OSError, asyncio.TimeoutError) as exc:
        raise TransportError(f"Connect to {join_host_port(host, port)} failed: {exc}") from exc
    logger.info("Connected to %s", join_host_port(host, port))
    return Connection(reader, writer)


__all__ = ["Connection", "open_connection", "split_host_port", "join_host_port"]
