from __future__ import annotations

from typing import Dict, Optional


class StompError(Exception):
    """Base class for errors raised while talking to a broker."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class AddressError(StompError):
    """Remote address cannot be split into host and port."""


class TransportError(StompError):
    """Reading from or writing to the underlying stream failed."""


class FrameError(StompError):
    """Bytes on the wire do not form a valid frame."""


class ProtocolError(StompError):
    """Broker answered with something other than a usable CONNECTED frame."""

    def __init__(self, message: str = "", headers: Optional[Dict[str, str]] = None) -> None:
        self.headers = dict(headers or {})
        super().__init__(message)


class FormatError(ProtocolError):
    """A header value does not follow its wire format."""

    def __init__(self, message: str = "", field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


__all__ = [
    "StompError",
    "AddressError",
    "TransportError",
    "FrameError",
    "ProtocolError",
    "FormatError",
]
