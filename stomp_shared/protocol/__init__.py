"""
Shared protocol package that centralizes commands, header names, the frame model,
the frame codec and heart-beat parsing.
"""

from .commands import Command, Header, commands_in_group, is_command, normalize_command, to_command
from .constants import ACCEPT_VERSION, ENCODING, NO_HEART_BEAT, NULL, SUPPORTED_VERSIONS, TEXT_PLAIN
from .errors import AddressError, FormatError, FrameError, ProtocolError, StompError, TransportError
from .framing import FrameReader, encode_frame, escape_header, unescape_header
from .heartbeat import HeartBeat, parse_heart_beat
from .messages import ConnectedHeaders, Frame

__all__ = [
    "Command",
    "Header",
    "commands_in_group",
    "is_command",
    "normalize_command",
    "to_command",
    "ACCEPT_VERSION",
    "ENCODING",
    "NO_HEART_BEAT",
    "NULL",
    "SUPPORTED_VERSIONS",
    "TEXT_PLAIN",
    "StompError",
    "AddressError",
    "TransportError",
    "FrameError",
    "ProtocolError",
    "FormatError",
    "FrameReader",
    "encode_frame",
    "escape_header",
    "unescape_header",
    "HeartBeat",
    "parse_heart_beat",
    "ConnectedHeaders",
    "Frame",
]
