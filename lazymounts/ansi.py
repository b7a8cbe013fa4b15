"""ANSI-aware text measurement and row shaping utilities.

Rows handed to a drawing surface carry SGR escape sequences. These helpers
measure, clip, and pad such rows by display columns, so a row always covers
exactly the width it was given.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return terminal column width for ANSI-styled text."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    col = 0
    for ch in plain:
        col += char_display_width(ch, col)
    return col


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    # Keep trailing style changes (resets) that follow the last visible cell.
    while i < n and text[i] == "\x1b":
        match = ANSI_ESCAPE_RE.match(text, i)
        if not match:
            break
        out.append(match.group(0))
        i = match.end()

    return "".join(out)


def fit_ansi_line(text: str, width: int, fill: str = " ", fill_style: str = "", reset: str = "") -> str:
    """Clip or pad ``text`` so it covers exactly ``width`` display columns.

    Padding uses ``fill`` (one column wide) wrapped in ``fill_style``/``reset``.
    """
    clipped = clip_ansi_line(text, width)
    missing = width - display_width(clipped)
    if missing <= 0:
        return clipped
    return f"{clipped}{fill_style}{fill * missing}{reset}"


def align_text(text: str, width: int, align: str = "left") -> str:
    """Pad plain ``text`` to ``width`` columns: ``left``, ``center`` or ``right``."""
    missing = width - display_width(text)
    if missing <= 0:
        return text
    if align == "right":
        return " " * missing + text
    if align == "center":
        before = missing // 2
        return " " * before + text + " " * (missing - before)
    return text + " " * missing


__all__ = [
    "ANSI_ESCAPE_RE",
    "align_text",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "strip_ansi",
]
