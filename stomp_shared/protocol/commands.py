from __future__ import annotations

from enum import StrEnum
from typing import Dict, Iterable, Union


class Command(StrEnum):
    """
    STOMP 1.2 frame commands.
    Frames with a command outside this vocabulary keep their raw text.
    """

    # Client frames
    CONNECT = "CONNECT"
    STOMP = "STOMP"
    SEND = "SEND"
    SUBSCRIBE = "SUBSCRIBE"
    UNSUBSCRIBE = "UNSUBSCRIBE"
    ACK = "ACK"
    NACK = "NACK"
    BEGIN = "BEGIN"
    COMMIT = "COMMIT"
    ABORT = "ABORT"
    DISCONNECT = "DISCONNECT"

    # Server frames
    CONNECTED = "CONNECTED"
    MESSAGE = "MESSAGE"
    RECEIPT = "RECEIPT"
    ERROR = "ERROR"


class Header(StrEnum):
    """Header names used by the handshake."""

    HOST = "host"
    ACCEPT_VERSION = "accept-version"
    HEART_BEAT = "heart-beat"
    CONTENT_TYPE = "content-type"
    CONTENT_LENGTH = "content-length"
    VERSION = "version"
    SESSION = "session"
    SERVER = "server"
    LOGIN = "login"
    PASSCODE = "passcode"
    MESSAGE = "message"


COMMAND_GROUPS: Dict[str, str] = {
    Command.CONNECT.value: "client",
    Command.STOMP.value: "client",
    Command.SEND.value: "client",
    Command.SUBSCRIBE.value: "client",
    Command.UNSUBSCRIBE.value: "client",
    Command.ACK.value: "client",
    Command.NACK.value: "client",
    Command.BEGIN.value: "client",
    Command.COMMIT.value: "client",
    Command.ABORT.value: "client",
    Command.DISCONNECT.value: "client",
    Command.CONNECTED.value: "server",
    Command.MESSAGE.value: "server",
    Command.RECEIPT.value: "server",
    Command.ERROR.value: "server",
}

# Header values of these frames are sent and read without escaping.
UNESCAPED_COMMANDS = frozenset({Command.CONNECT.value, Command.CONNECTED.value})


def normalize_command(command: Union[str, Command]) -> str:
    """Convert enum/string into canonical command text."""
    return command.value if isinstance(command, Command) else str(command)


def is_command(value: str) -> bool:
    """Check if `value` is a known command."""
    try:
        Command(value)
        return True
    except ValueError:
        return False


def to_command(value: str) -> Union[Command, str]:
    """Return the enum member for known commands, the raw text otherwise."""
    return Command(value) if is_command(value) else value


def commands_in_group(group: str) -> Iterable[str]:
    """Yield commands sent by the given side ("client" or "server")."""
    for command, grp in COMMAND_GROUPS.items():
        if grp == group:
            yield command


__all__ = [
    "Command",
    "Header",
    "COMMAND_GROUPS",
    "UNESCAPED_COMMANDS",
    "normalize_command",
    "is_command",
    "to_command",
    "commands_in_group",
]
