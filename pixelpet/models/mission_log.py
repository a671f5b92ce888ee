# pixelpet/models/mission_log.py
from __future__ import annotations

from collections import deque
from typing import Deque, List


class MissionLog:
    """Bounded, display-only journal; the oldest entries fall off first."""

    def __init__(self, cap: int = 50) -> None:
        if cap < 1:
            raise ValueError("cap must be >= 1.")
        self._lines: Deque[str] = deque(maxlen=cap)

    def append(self, line: str) -> None:
        self._lines.append(line)

    def tail(self, n: int | None = None) -> List[str]:
        """Return the newest n lines (all lines when n is None), oldest first."""
        lines = list(self._lines)
        if n is None:
            return lines
        return lines[-n:] if n > 0 else []

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
