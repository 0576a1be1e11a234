from __future__ import annotations

import io
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .commands import Command, Header, normalize_command
from .constants import NO_HEART_BEAT
from .errors import ProtocolError


class Frame(BaseModel):
    """One STOMP frame: command, ordered headers and a body stream."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    command: Union[Command, str] = Field(..., description="Frame command such as CONNECT")
    headers: Dict[str, str] = Field(default_factory=dict, description="Unique header keys, insertion ordered")
    body: io.IOBase = Field(default_factory=io.BytesIO, description="Body stream, closed by the consumer")

    @property
    def command_text(self) -> str:
        return normalize_command(self.command)

    def header(self, key: Union[Header, str], default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(str(key), default)

    def set_header(self, key: Union[Header, str], value: str) -> None:
        self.headers[str(key)] = value

    @classmethod
    def with_body(cls, command: Union[Command, str], body: bytes = b"", **headers: str) -> "Frame":
        """Build a frame from raw body bytes; keyword headers use ``_`` for ``-``."""
        return cls(
            command=command,
            headers={key.replace("_", "-"): value for key, value in headers.items()},
            body=io.BytesIO(body),
        )


class ConnectedHeaders(BaseModel):
    """Headers a broker may put on its CONNECTED frame; all optional."""

    model_config = ConfigDict(extra="ignore")

    version: str = ""
    session: str = ""
    server: str = ""
    heart_beat: str = Field(default=NO_HEART_BEAT, alias="heart-beat")

    @classmethod
    def from_frame(cls, frame: Frame) -> "ConnectedHeaders":
        try:
            return cls.model_validate(frame.headers)
        except ValidationError as exc:
            raise ProtocolError(f"CONNECTED headers are invalid: {exc}", frame.headers) from exc


__all__ = ["Frame", "ConnectedHeaders"]
