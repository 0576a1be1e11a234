from __future__ import annotations

import asyncio
import io
from typing import Dict

from .commands import Header, UNESCAPED_COMMANDS, to_command
from .constants import ENCODING, EOL, NULL
from .errors import FrameError
from .messages import Frame

_ESCAPES = {"\\": "\\\\", "\r": "\\r", "\n": "\\n", ":": "\\c"}
_UNESCAPES = {"\\": "\\", "r": "\r", "n": "\n", "c": ":"}


def escape_header(text: str) -> str:
    """Escape a header key or value for the wire."""
    return "".join(_ESCAPES.get(char, char) for char in text)


def unescape_header(text: str) -> str:
    """Undo wire escaping; unknown escape sequences are fatal."""
    out = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        code = next(chars, "")
        if code not in _UNESCAPES:
            raise FrameError(f"Undefined escape sequence \\{code} in header {text!r}")
        out.append(_UNESCAPES[code])
    return "".join(out)


def _body_bytes(frame: Frame) -> bytes:
    body = frame.body
    if isinstance(body, io.BytesIO):
        return body.getvalue()
    return body.read() or b""


def encode_frame(frame: Frame) -> bytes:
    """Encode a frame into bytes (command, headers, blank line, body, NUL)."""
    command = frame.command_text
    escape = command not in UNESCAPED_COMMANDS
    body = _body_bytes(frame)

    headers = dict(frame.headers)
    if body and Header.CONTENT_LENGTH.value not in headers:
        headers[Header.CONTENT_LENGTH.value] = str(len(body))

    lines = [command]
    for key, value in headers.items():
        if escape:
            key, value = escape_header(key), escape_header(value)
        lines.append(f"{key}:{value}")
    head = "\n".join(lines).encode(ENCODING) + EOL + EOL
    return head + body + NULL


class FrameReader:
    """Reads one frame at a time from an asyncio stream."""

    def __init__(self, reader: asyncio.StreamReader) -> None:
        self.reader = reader

    async def read(self) -> Frame:
        """
        Read the next frame, skipping heart-beat EOLs in front of it.

        Raises EOFError when the stream ends and FrameError on malformed input.
        """
        command = await self._read_line()
        while not command:
            command = await self._read_line()

        escaped = command not in UNESCAPED_COMMANDS
        headers: Dict[str, str] = {}
        while True:
            line = await self._read_line()
            if not line:
                break
            key, sep, value = line.partition(":")
            if not sep:
                raise FrameError(f"Malformed header line {line!r}")
            if escaped:
                key, value = unescape_header(key), unescape_header(value)
            # repeated headers: the first one wins
            headers.setdefault(key, value)

        body = await self._read_body(headers.get(Header.CONTENT_LENGTH.value))
        return Frame(command=to_command(command), headers=headers, body=io.BytesIO(body))

    async def _read_line(self) -> str:
        try:
            raw = await self.reader.readline()
        except ValueError as exc:
            raise FrameError("Frame line exceeds the stream buffer limit") from exc
        if not raw.endswith(EOL):
            raise EOFError("stream closed while reading frame")
        try:
            return raw.rstrip(b"\r\n").decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise FrameError(f"Decode failed: {exc}") from exc

    async def _read_body(self, content_length: str | None) -> bytes:
        if content_length is None:
            try:
                data = await self.reader.readuntil(NULL)
            except asyncio.LimitOverrunError as exc:
                raise FrameError("Frame body exceeds the stream buffer limit") from exc
            return data[:-1]

        if not (content_length.isascii() and content_length.isdigit()):
            raise FrameError(f"Invalid content-length {content_length!r}")
        data = await self.reader.readexactly(int(content_length))
        terminator = await self.reader.readexactly(1)
        if terminator != NULL:
            raise FrameError("Frame body is not NUL terminated")
        return data


__all__ = ["escape_header", "unescape_header", "encode_frame", "FrameReader"]
