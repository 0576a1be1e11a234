from __future__ import annotations

from collections.abc import Callable
from typing import Any, Dict, List, Mapping, Optional

from stomp_shared.protocol.commands import Header
from stomp_shared.protocol.heartbeat import HeartBeat

# Receives the outgoing CONNECT headers and may change them in place.
HeaderOption = Callable[[Dict[str, str]], None]


def with_header(key: str, value: str) -> HeaderOption:
    def apply(headers: Dict[str, str]) -> None:
        headers[str(key)] = value

    return apply


def with_host(host: str) -> HeaderOption:
    """Name the virtual host instead of the connection's remote host."""
    return with_header(Header.HOST, host)


def with_login(login: str, passcode: str) -> HeaderOption:
    def apply(headers: Dict[str, str]) -> None:
        headers[Header.LOGIN.value] = login
        headers[Header.PASSCODE.value] = passcode

    return apply


def with_heart_beat(outgoing: int, incoming: int) -> HeaderOption:
    return with_header(Header.HEART_BEAT, HeartBeat(outgoing, incoming).to_header())


def with_accept_version(*versions: str) -> HeaderOption:
    return with_header(Header.ACCEPT_VERSION, ",".join(versions))


def options_from_config(config: Mapping[str, Any]) -> List[HeaderOption]:
    """Translate client configuration into CONNECT header options."""
    options: List[HeaderOption] = []
    vhost: Optional[str] = config.get("vhost")
    if vhost:
        options.append(with_host(vhost))
    if config.get("login"):
        options.append(with_login(config["login"], config.get("passcode", "")))
    outgoing = int(config.get("heart_beat_outgoing", 0))
    incoming = int(config.get("heart_beat_incoming", 0))
    if outgoing or incoming:
        options.append(with_heart_beat(outgoing, incoming))
    return options


__all__ = [
    "HeaderOption",
    "with_header",
    "with_host",
    "with_login",
    "with_heart_beat",
    "with_accept_version",
    "options_from_config",
]
