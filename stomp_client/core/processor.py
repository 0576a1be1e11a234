from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Dict, Optional, Union

from stomp_shared.protocol.commands import Command, Header, commands_in_group, normalize_command
from stomp_shared.protocol.errors import FrameError
from stomp_shared.protocol.framing import FrameReader
from stomp_shared.protocol.messages import Frame

from .network import Connection

logger = logging.getLogger(__name__)

FrameHandler = Callable[[Frame], Awaitable[None]]

DEFAULT_INBOX_SIZE = 1000

# Only a client may send these; a broker sending one is ignored.
CLIENT_COMMANDS = frozenset(commands_in_group("client"))


class FrameProcessor:
    """Keeps reading frames from a connection once the handshake is done."""

    def __init__(self, connection: Connection, frame_reader: FrameReader, inbox_size: int = DEFAULT_INBOX_SIZE) -> None:
        self.connection = connection
        self.frame_reader = frame_reader
        self.last_received: Optional[float] = None
        self.dropped = 0
        self._handlers: Dict[str, FrameHandler] = {}
        self._inbox: asyncio.Queue[Frame] = asyncio.Queue(maxsize=inbox_size)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "FrameProcessor":
        if self._task is None:
            self._task = asyncio.create_task(self._receive_loop(), name="stomp-frame-processor")
        return self

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def wait_closed(self) -> None:
        """Wait until the broker closes the stream or the processor stops."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    def register_handler(self, command: Union[str, Command], handler: FrameHandler) -> None:
        self._handlers[normalize_command(command)] = handler

    async def receive(self) -> Frame:
        """
        Next frame that no registered handler consumed.

        At most ``inbox_size`` frames are kept; newer ones are dropped until
        the inbox is drained.
        """
        return await self._inbox.get()

    async def _receive_loop(self) -> None:
        while True:
            try:
                frame = await self.frame_reader.read()
            except asyncio.CancelledError:
                break
            except FrameError as exc:
                logger.error("Malformed frame, stopping processor: %s", exc)
                break
            except (EOFError, ConnectionError, OSError) as exc:
                logger.info("Receive loop terminated: %s", exc)
                break
            self.last_received = time.monotonic()
            await self._dispatch(frame)

    async def _dispatch(self, frame: Frame) -> None:
        command = frame.command_text
        if command in CLIENT_COMMANDS:
            logger.warning("Ignoring client-only %s frame from broker", command)
            return
        if command == Command.ERROR:
            logger.warning("Broker sent ERROR: %s", frame.header(Header.MESSAGE, ""))

        handler = self._handlers.get(command)
        if handler is None:
            try:
                self._inbox.put_nowait(frame)
            except asyncio.QueueFull:
                self.dropped += 1
                logger.debug("Inbox full, dropping unhandled %s frame", command)
            return
        try:
            await handler(frame)
        except Exception as exc:
            logger.exception("Handler error for %s: %s", command, exc)


def process(connection: Connection, frame_reader: FrameReader, inbox_size: int = DEFAULT_INBOX_SIZE) -> FrameProcessor:
    """Start a processor for a connection whose handshake just completed."""
    return FrameProcessor(connection, frame_reader, inbox_size).start()


__all__ = ["DEFAULT_INBOX_SIZE", "FrameHandler", "FrameProcessor", "process"]
