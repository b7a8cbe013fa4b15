"""Drawing surfaces: where rendered rows go.

A surface accepts ``(x, y, styled_text)`` writes. ``TerminalSurface`` turns
them into cursor-addressed output flushed to a tty in one ``os.write``;
``BufferSurface`` keeps them in memory for ``--render`` output and tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol

from .ansi import strip_ansi


@dataclass(frozen=True)
class Area:
    """Rectangular screen region in 0-based cells."""

    left: int
    top: int
    width: int
    height: int


class Surface(Protocol):
    def write(self, x: int, y: int, text: str) -> None:
        ...


class TerminalSurface:
    """Collect positioned writes and emit them as one escape-sequence payload."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._out: list[str] = []

    def clear(self) -> None:
        self._out.append("\033[H\033[J")

    def write(self, x: int, y: int, text: str) -> None:
        self._out.append(f"\033[{y + 1};{x + 1}H{text}")

    def flush(self) -> None:
        """Send pending output; an ``OSError`` from the tty propagates."""
        if not self._out:
            return
        payload = "".join(self._out)
        self._out.clear()
        os.write(self.fd, payload.encode("utf-8", errors="replace"))


class BufferSurface:
    """In-memory surface keeping the last styled text written per row."""

    def __init__(self) -> None:
        self.rows: dict[int, str] = {}

    def write(self, x: int, y: int, text: str) -> None:
        # Rows are always written whole, starting at the area's left edge.
        self.rows[y] = text

    def styled_lines(self) -> list[str]:
        if not self.rows:
            return []
        return [self.rows.get(y, "") for y in range(max(self.rows) + 1)]

    def plain_lines(self) -> list[str]:
        return [strip_ansi(line) for line in self.styled_lines()]


__all__ = ["Area", "Surface", "TerminalSurface", "BufferSurface"]
