from __future__ import annotations

import asyncio

from stomp_client.core.network import Connection
from stomp_shared.protocol import Frame, encode_frame


class FakeWriter:
    """Stands in for asyncio.StreamWriter; keeps everything written."""

    def __init__(self, peername=("broker.example", 61613), fail: Exception | None = None) -> None:
        self.peername = peername
        self.fail = fail
        self.buffer = bytearray()
        self.closed = False

    def get_extra_info(self, name, default=None):
        return self.peername if name == "peername" else default

    def write(self, data: bytes) -> None:
        if self.fail is not None:
            raise self.fail
        self.buffer.extend(data)

    async def drain(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


def wire(command, body: bytes = b"", **headers: str) -> bytes:
    return encode_frame(Frame.with_body(command, body, **headers))


def make_connection(data: bytes = b"", eof: bool = True, **writer_kwargs) -> Connection:
    """Connection whose reader replays ``data``; call inside a running loop."""
    reader = asyncio.StreamReader()
    if data:
        reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return Connection(reader, FakeWriter(**writer_kwargs))
