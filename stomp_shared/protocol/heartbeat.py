from __future__ import annotations

import re
from typing import NamedTuple

from .errors import FormatError

_INTERVAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


class HeartBeat(NamedTuple):
    """Heart-beat intervals in milliseconds; zero disables that direction."""

    outgoing: int = 0
    incoming: int = 0

    def to_header(self) -> str:
        return f"{self.outgoing},{self.incoming}"


def _parse_interval(value: str) -> int:
    if not _INTERVAL.fullmatch(value):
        raise ValueError(f"invalid integer literal {value!r}")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range {value!r}")
    return number


def parse_heart_beat(value: str) -> HeartBeat:
    """
    Parse a ``heart-beat`` header value such as ``"5000,10000"``.

    Only the first two comma separated fields are read. The pair is returned
    as declared: it is not combined with what the client asked for, and
    negative intervals are not rejected.
    """
    beats = value.split(",")
    if len(beats) < 2:
        raise FormatError("malformed heart beat header: invalid length")

    try:
        outgoing = _parse_interval(beats[0])
    except ValueError as exc:
        raise FormatError(f"malformed rx heart beat header value: {exc}", field="rx") from exc

    try:
        incoming = _parse_interval(beats[1])
    except ValueError as exc:
        raise FormatError(f"malformed tx heart beat header value: {exc}", field="tx") from exc

    return HeartBeat(outgoing, incoming)


__all__ = ["HeartBeat", "parse_heart_beat"]
