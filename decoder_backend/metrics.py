"""Process-local decode and DBC counters for the HTTP backend."""
from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Dict

DECODE_OK = "decode_ok"
DECODE_ERROR = "decode_error"
DBC_LOADED = "dbc_loaded"
DBC_PARSE_ERROR = "dbc_parse_error"

KNOWN_COUNTERS = (DECODE_OK, DECODE_ERROR, DBC_LOADED, DBC_PARSE_ERROR)


class DecoderMetrics:
    """Thread-safe named counters, each starting at zero."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self._lock = Lock()

    def inc(self, name: str, n: int = 1) -> None:
        with self._lock:
            self._counts[name] += n

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            counts = dict(self._counts)
        for name in KNOWN_COUNTERS:
            counts.setdefault(name, 0)
        return counts

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


_registry = DecoderMetrics()


def inc(name: str, n: int = 1) -> None:
    _registry.inc(name, n)


def get_all() -> Dict[str, int]:
    return _registry.snapshot()


def reset_all() -> None:
    _registry.reset()
