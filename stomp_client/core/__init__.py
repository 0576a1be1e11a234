from .connect import build_connect_frame, connect
from .network import Connection, open_connection, split_host_port
from .options import (
    HeaderOption,
    options_from_config,
    with_accept_version,
    with_header,
    with_heart_beat,
    with_host,
    with_login,
)
from .processor import FrameProcessor, process
from .session import Session

__all__ = [
    "build_connect_frame",
    "connect",
    "Connection",
    "open_connection",
    "split_host_port",
    "HeaderOption",
    "options_from_config",
    "with_accept_version",
    "with_header",
    "with_heart_beat",
    "with_host",
    "with_login",
    "FrameProcessor",
    "process",
    "Session",
]
