"""Table rendering for the filesystems panel.

The renderer receives a snapshot of the view to draw (rows, selection,
scroll, active pattern) and produces one ANSI-styled string per screen row.
Each row is clipped/padded to exactly the area width; data rows keep their
last cell for the scrollbar.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import align_text, fit_ansi_line
from ..mounts import Mount
from ..pattern import Pattern
from ..scroll import compute_scrollbar, is_thumb
from ..surface import Area, Surface
from ..ui_theme import UITheme
from .layout import (
    FS_TITLE,
    MOUNT_POINT_TITLE,
    TYPE_TITLE,
    ColumnLayout,
    ContentWidths,
    plan_columns,
)

HEADER_ROWS = 2
BORDER = "│"
CROSS = "┼"
H_LINE = "─"
SELECTION_MARK = "▶"
SCROLLBAR = "▐"
BAR_FULL = "█"
BAR_PARTIALS = ("", "▏", "▎", "▍", "▌", "▋", "▊", "▉")
SIZE_UNITS = ("", "K", "M", "G", "T", "P", "E", "Z", "Y")


def fit_4(size: int) -> str:
    """Format a byte count in at most 4 characters (``9999``, ``12K``, ``1.2G``)."""
    if size < 10_000:
        return str(size)
    value = float(size)
    unit = 0
    while value >= 999.5 and unit < len(SIZE_UNITS) - 1:
        value /= 1000.0
        unit += 1
    if value >= 9.95:
        return f"{value:.0f}{SIZE_UNITS[unit]}"
    return f"{value:.1f}{SIZE_UNITS[unit]}"


def progress_bar(share: float, width: int) -> str:
    """Left-aligned bar of ``width`` cells filled to ``share`` with eighth blocks."""
    if width <= 0:
        return ""
    eighths = int(round(max(0.0, min(1.0, share)) * width * 8))
    full, part = divmod(eighths, 8)
    bar = BAR_FULL * full + BAR_PARTIALS[part]
    return align_text(bar[:width], width)


class FilesystemRenderer:
    """Render the header, separator, and mount rows of one table."""

    def __init__(
        self,
        mounts: Sequence[Mount],
        selection_idx: int,
        scroll: int,
        pattern: Pattern | None,
        theme: UITheme,
        show_selection_mark: bool = False,
    ) -> None:
        self.mounts = mounts
        self.selection_idx = selection_idx
        self.scroll = scroll
        self.pattern = pattern
        self.theme = theme
        self.show_selection_mark = show_selection_mark

    def draw(self, surface: Surface, area: Area) -> None:
        """Write every row of ``area`` to ``surface``."""
        for y, row in enumerate(self.render_rows(area.width, area.height)):
            surface.write(area.left, area.top + y, row)

    def render_rows(self, width: int, height: int) -> list[str]:
        if width <= 0 or height <= 0:
            return []
        layout = plan_columns(width, ContentWidths.of_mounts(self.mounts), self.show_selection_mark)
        rows = [self._header_row(layout, width), self._separator_row(layout, width)]
        page_height = max(0, height - HEADER_ROWS)
        scrollbar = compute_scrollbar(self.scroll, len(self.mounts), page_height)
        for y in range(page_height):
            rows.append(self._data_row(layout, width, self.scroll + y, is_thumb(y, scrollbar)))
        return rows[:height]

    def _finish(self, text: str, width: int, fill: str, fill_style: str) -> str:
        row = fit_ansi_line(text, width, fill=fill, fill_style=fill_style, reset=self.theme.reset)
        if "\033" in row and self.theme.reset and not row.endswith(self.theme.reset):
            row += self.theme.reset
        return row

    def _header_row(self, layout: ColumnLayout, width: int) -> str:
        theme = self.theme
        border = theme.styled(theme.border, BORDER)
        cells = [align_text(FS_TITLE, layout.wc_fs)]
        if layout.e_dsk:
            cells.append("dsk")
        if layout.e_type:
            cells.append(align_text(TYPE_TITLE, layout.w_type, "center"))
        cells.append("size")
        if layout.e_use:
            cells.append(align_text(layout.usage_title, layout.wc_use, "center"))
        cells.append("free")
        text = border.join(theme.styled(theme.default, cell) for cell in cells)
        text += border + theme.styled(theme.default, MOUNT_POINT_TITLE)
        return self._finish(text, width, " ", theme.border)

    def _separator_row(self, layout: ColumnLayout, width: int) -> str:
        column_widths = [layout.wc_fs]
        if layout.e_dsk:
            column_widths.append(layout.w_dsk)
        if layout.e_type:
            column_widths.append(layout.w_type)
        column_widths.append(layout.w_size)
        if layout.e_use:
            column_widths.append(layout.wc_use)
        column_widths.append(layout.w_free)
        text = "".join(H_LINE * w + CROSS for w in column_widths)
        return self._finish(self.theme.styled(self.theme.border, text), width, H_LINE, self.theme.border)

    def _matched(self, text: str, txt_style: str, match_style: str, width: int = 0, align: str = "left") -> str:
        """Style ``text`` with pattern-matched characters highlighted."""
        theme = self.theme
        padded = align_text(text, width, align) if width else text
        match = self.pattern.search_string(text) if self.pattern is not None else None
        if match is None or not match.positions:
            return theme.styled(txt_style, padded)
        missing = max(0, len(padded) - len(text))
        offset = {"center": missing // 2, "right": missing}.get(align, 0)
        matched = {pos + offset for pos in match.positions}
        out: list[str] = []
        run: list[str] = []
        run_matched = False
        for idx, ch in enumerate(padded):
            is_match = idx in matched
            if run and is_match != run_matched:
                out.append(theme.styled(match_style if run_matched else txt_style, "".join(run)))
                run = []
            run.append(ch)
            run_matched = is_match
        if run:
            out.append(theme.styled(match_style if run_matched else txt_style, "".join(run)))
        return "".join(out)

    def _data_row(self, layout: ColumnLayout, width: int, idx: int, thumb: bool) -> str:
        theme = self.theme
        mount = self.mounts[idx] if idx < len(self.mounts) else None
        selected = mount is not None and idx == self.selection_idx
        txt_style = theme.selected_line if selected else theme.default
        content = ""
        if mount is not None:
            content = self._mount_cells(mount, layout, selected, txt_style)
        row = self._finish(content, max(0, width - 1), " ", txt_style)
        scrollbar_style = theme.scrollbar_thumb if thumb else theme.scrollbar_track
        return row + theme.styled(scrollbar_style, SCROLLBAR)

    def _mount_cells(self, mount: Mount, layout: ColumnLayout, selected: bool, txt_style: str) -> str:
        theme = self.theme
        match_style = theme.selected_char_match if selected else theme.char_match
        border = theme.styled(theme.selected_border if selected else theme.border, BORDER)
        parts: list[str] = []
        if self.show_selection_mark:
            parts.append(theme.styled(txt_style, SELECTION_MARK if selected else " "))
        parts.append(self._matched(mount.fs, txt_style, match_style, layout.w_fs))
        parts.append(border)
        if layout.e_dsk:
            if mount.disk is not None:
                parts.append(self._matched(mount.disk.type_label, txt_style, match_style, layout.w_dsk))
            else:
                parts.append(theme.styled(txt_style, " " * layout.w_dsk))
            parts.append(border)
        if layout.e_type:
            parts.append(self._matched(mount.fs_type, txt_style, match_style, layout.w_type, "center"))
            parts.append(border)

        stats = mount.stats
        if stats is not None and stats.size > 0:
            parts.append(theme.styled(txt_style, f"{fit_4(stats.size):>4}"))
            parts.append(border)
            if layout.e_use:
                share = stats.use_share
                parts.append(theme.styled(txt_style, f"{fit_4(stats.used):>4}"))
                if layout.e_use_bar:
                    parts.append(theme.styled(txt_style, " "))
                    bar_style = theme.default + theme.share_bg(share)
                    parts.append(theme.styled(bar_style, progress_bar(share, layout.w_use_bar)))
                if layout.e_use_share:
                    share_style = txt_style + theme.share_fg(share)
                    parts.append(theme.styled(share_style, f"{100.0 * share:>3.0f}%"))
                parts.append(border)
            parts.append(theme.styled(txt_style, f"{fit_4(stats.available):>4}"))
            parts.append(border)
        else:
            parts.append(theme.styled(txt_style, " " * layout.w_size))
            parts.append(border)
            if layout.e_use:
                parts.append(theme.styled(txt_style, " " * layout.wc_use))
                parts.append(border)
            parts.append(theme.styled(txt_style, " " * layout.w_free))
            parts.append(border)

        parts.append(self._matched(str(mount.mount_point), txt_style, match_style))
        return "".join(parts)


__all__ = [
    "HEADER_ROWS",
    "FilesystemRenderer",
    "fit_4",
    "progress_bar",
]
