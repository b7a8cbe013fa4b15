"""Scroll commands and scrollbar geometry for list views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScrollCommand:
    """A scroll request: relative ``lines``/``pages`` or an absolute ``to`` row."""

    kind: str
    amount: int

    @classmethod
    def lines(cls, amount: int) -> ScrollCommand:
        return cls("lines", amount)

    @classmethod
    def pages(cls, amount: int) -> ScrollCommand:
        return cls("pages", amount)

    @classmethod
    def to(cls, row: int) -> ScrollCommand:
        return cls("to", row)

    def apply(self, scroll: int, content_height: int, page_height: int) -> int:
        """Return the new first visible row, clamped to ``[0, max(0, content - page)]``."""
        if self.kind == "to":
            target = self.amount
        elif self.kind == "pages":
            target = scroll + self.amount * page_height
        else:
            target = scroll + self.amount
        max_scroll = max(0, content_height - page_height)
        return max(0, min(target, max_scroll))


def compute_scrollbar(scroll: int, content_height: int, page_height: int) -> tuple[int, int] | None:
    """Return inclusive ``(top, bottom)`` thumb rows within the page, or ``None``.

    No scrollbar is needed when everything fits. The thumb touches the last
    row only when scrolled to the end, and leaves the first row as soon as
    anything is scrolled off the top.
    """
    if page_height <= 0 or content_height <= page_height:
        return None
    thumb_height = max(1, page_height * page_height // content_height)
    if scroll + page_height >= content_height:
        top = page_height - thumb_height
        return top, page_height - 1
    top = scroll * page_height // content_height
    if top == 0 and scroll > 0:
        top = 1
    bottom = top + thumb_height - 1
    if page_height > 3:
        bottom = min(bottom, page_height - 2)
    top = min(top, page_height - 1)
    return top, max(top, bottom)


def is_thumb(row: int, scrollbar: tuple[int, int] | None) -> bool:
    if scrollbar is None:
        return False
    top, bottom = scrollbar
    return top <= row <= bottom


__all__ = ["ScrollCommand", "compute_scrollbar", "is_thumb"]
