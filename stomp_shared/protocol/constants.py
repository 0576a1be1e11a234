"""Protocol-wide constants for the STOMP wire format."""

ENCODING = "utf-8"
EOL = b"\n"
NULL = b"\x00"
SUPPORTED_VERSIONS = ("1.1", "1.2")
ACCEPT_VERSION = ",".join(SUPPORTED_VERSIONS)
NO_HEART_BEAT = "0,0"
TEXT_PLAIN = "text/plain"
DEFAULT_PORT = 61613

__all__ = [
    "ENCODING",
    "EOL",
    "NULL",
    "SUPPORTED_VERSIONS",
    "ACCEPT_VERSION",
    "NO_HEART_BEAT",
    "TEXT_PLAIN",
    "DEFAULT_PORT",
]
