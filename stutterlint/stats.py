"""Process-wide symbol name statistics."""

from __future__ import annotations

import threading
from typing import Any

from .models import Position


class SymbolStats:
    """Thread-safe aggregate over every symbol name seen during a run.

    ``longest`` is measured in characters and only replaced by a strictly
    longer name, so among equally long names the first one fed wins.
    ``total_length`` sums UTF-8 byte lengths.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0
        self._total_length = 0
        self._longest = 0
        self._longest_name = ""
        self._longest_position: Position | None = None

    def accumulate(self, name: str, position: Position | None) -> None:
        size = len(name.encode("utf-8"))
        runes = len(name)
        with self._lock:
            self._count += 1
            self._total_length += size
            if runes > self._longest:
                self._longest = runes
                self._longest_name = name
                self._longest_position = position

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def total_length(self) -> int:
        with self._lock:
            return self._total_length

    @property
    def longest(self) -> int:
        with self._lock:
            return self._longest

    @property
    def longest_name(self) -> str:
        with self._lock:
            return self._longest_name

    @property
    def longest_position(self) -> Position | None:
        with self._lock:
            return self._longest_position

    def average(self) -> float | None:
        with self._lock:
            if not self._count:
                return None
            return self._total_length / self._count

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            position = self._longest_position
            return {
                "count": self._count,
                "total_length": self._total_length,
                "longest_name": self._longest_name,
                "longest": self._longest,
                "longest_position": str(position) if position else None,
                "average": self._total_length / self._count if self._count else None,
            }
