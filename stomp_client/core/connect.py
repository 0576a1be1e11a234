"""Client side of the STOMP CONNECT / CONNECTED handshake."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable

from stomp_shared.protocol.commands import Command, Header
from stomp_shared.protocol.constants import ACCEPT_VERSION, ENCODING, NO_HEART_BEAT, TEXT_PLAIN
from stomp_shared.protocol.errors import FrameError, ProtocolError, TransportError
from stomp_shared.protocol.framing import FrameReader, encode_frame
from stomp_shared.protocol.heartbeat import parse_heart_beat
from stomp_shared.protocol.messages import ConnectedHeaders, Frame

from .network import Connection, split_host_port
from .options import HeaderOption
from .processor import FrameProcessor, process
from .session import Session

logger = logging.getLogger(__name__)

ReaderFactory = Callable[[Connection], FrameReader]
ProcessorFactory = Callable[[Connection, FrameReader], FrameProcessor]

UNREADABLE_BODY = "frame body content type is unreadable"


def _frame_reader(connection: Connection) -> FrameReader:
    return FrameReader(connection.reader)


def build_connect_frame(host: str, *options: HeaderOption) -> Frame:
    """CONNECT frame with default headers, then each option applied in order."""
    frame = Frame(command=Command.CONNECT)
    frame.set_header(Header.HOST, host)
    frame.set_header(Header.ACCEPT_VERSION, ACCEPT_VERSION)
    frame.set_header(Header.HEART_BEAT, NO_HEART_BEAT)
    for option in options:
        option(frame.headers)
    return frame


def _error_message(frame: Frame) -> str:
    if frame.header(Header.CONTENT_TYPE) != TEXT_PLAIN:
        return UNREADABLE_BODY
    try:
        body = frame.body.read()
    except (OSError, ValueError) as exc:
        return f"unable to read frame body: {exc}"
    return body.decode(ENCODING, errors="replace")


async def connect(
    connection: Connection,
    *options: HeaderOption,
    reader_factory: ReaderFactory = _frame_reader,
    processor_factory: ProcessorFactory = process,
) -> Session:
    """
    Perform the STOMP handshake over an already open connection.

    Sends CONNECT (``accept-version: 1.1,1.2``, ``heart-beat: 0,0`` and the
    remote host, each overridable through ``options``), reads a single reply
    and, when it is CONNECTED, starts a frame processor and returns the
    session. Nothing is retried and no timeout is applied; wrap the call in
    ``asyncio.wait_for`` to bound it.

    Raises:
        AddressError: the remote address has no host/port; nothing was sent.
        TransportError: writing the request or reading the reply failed.
        ProtocolError: the broker replied with ERROR, with another command,
            or with an unparsable ``heart-beat`` header.
    """
    host, _ = split_host_port(connection.remote_address)
    frame = build_connect_frame(host, *options)

    await connection.write(encode_frame(frame))
    logger.debug("Sent CONNECT to %s", host)

    frame_reader = reader_factory(connection)
    try:
        reply = await frame_reader.read()
    except (FrameError, EOFError, OSError) as exc:
        raise TransportError(f"Reading CONNECT reply failed: {exc}") from exc

    with contextlib.closing(reply.body):
        if reply.command_text == Command.ERROR:
            raise ProtocolError(_error_message(reply), reply.headers)

        if reply.command_text != Command.CONNECTED:
            raise ProtocolError(
                f"unexpected frame command. expected {Command.CONNECTED}, got {reply.command_text}",
                reply.headers,
            )

        connected = ConnectedHeaders.from_frame(reply)
        heart_beat = parse_heart_beat(connected.heart_beat)
        processor = processor_factory(connection, frame_reader)

    session = Session(
        version=connected.version,
        id=connected.session,
        server=connected.server,
        heart_beat=heart_beat,
        connection=connection,
        processor=processor,
    )
    logger.info("STOMP %s session %s established with %s", session.version, session.id, session.server or host)
    return session


__all__ = ["connect", "build_connect_frame", "UNREADABLE_BODY"]
