"""Column planning for the filesystems table.

``plan_columns`` is a pure function of the available width and the widest
content per text column. Mandatory columns (filesystem, size, free, mount
point) are always present; optional ones are offered the leftover width in
a fixed priority order and the scan stops at the first one that does not
fit. Stopping there keeps the plan monotonic: a narrower width never shows a
column that a wider one hid.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..ansi import display_width
from ..mounts import Mount

FS_TITLE = "filesystem"
TYPE_TITLE = "type"
MOUNT_POINT_TITLE = "mount point"

W_DSK = 3
W_SIZE = 4
W_USE = 4
W_USE_SHARE = 4
W_FREE = 4
W_USE_BAR_MIN = 1
USE_BAR_MAX_GROWTH = 9


@dataclass(frozen=True)
class ContentWidths:
    """Widest cell content per variable-width column, titles included."""

    fs: int
    fs_type: int
    mount_point: int

    @classmethod
    def of_mounts(cls, mounts: Iterable[Mount]) -> ContentWidths:
        w_fs = len(FS_TITLE)
        w_type = len(TYPE_TITLE)
        w_mount_point = len(MOUNT_POINT_TITLE)
        for mount in mounts:
            w_fs = max(w_fs, display_width(mount.fs))
            w_type = max(w_type, display_width(mount.fs_type))
            w_mount_point = max(w_mount_point, display_width(str(mount.mount_point)))
        return cls(fs=w_fs, fs_type=w_type, mount_point=w_mount_point)


@dataclass(frozen=True)
class ColumnLayout:
    """Which columns to draw and how wide each one is.

    ``wc_fs`` includes the selection mark; ``wc_use`` is the whole usage
    group (used, optional bar with its leading space, optional share).
    """

    w_fs: int
    wc_fs: int
    w_type: int
    w_mount_point: int
    w_use_bar: int
    wc_use: int
    e_use: bool = False
    e_use_share: bool = False
    e_dsk: bool = False
    e_use_bar: bool = False
    e_type: bool = False
    w_dsk: int = W_DSK
    w_size: int = W_SIZE
    w_use: int = W_USE
    w_use_share: int = W_USE_SHARE
    w_free: int = W_FREE

    @property
    def usage_title(self) -> str:
        return "usage" if self.wc_use > W_USE else "use"

    def enabled_columns(self) -> tuple[str, ...]:
        """Return drawn column names in screen order."""
        columns = ["fs"]
        if self.e_dsk:
            columns.append("dsk")
        if self.e_type:
            columns.append("type")
        columns.append("size")
        if self.e_use:
            columns.append("use")
        columns.append("free")
        columns.append("mount_point")
        return tuple(columns)


def mandatory_width(widths: ContentWidths, show_selection_mark: bool = False) -> int:
    """Width of fs, size, free and mount point plus their separators."""
    wc_fs = widths.fs + (1 if show_selection_mark else 0)
    return wc_fs + 1 + W_SIZE + 1 + W_FREE + 1 + widths.mount_point


def plan_columns(width: int, widths: ContentWidths, show_selection_mark: bool = False) -> ColumnLayout:
    """Decide visible columns for ``width`` display cells."""
    wc_fs = widths.fs + (1 if show_selection_mark else 0)
    w_mandatory = mandatory_width(widths, show_selection_mark)
    enabled: set[str] = set()
    w_use_bar = W_USE_BAR_MIN
    wc_use = W_USE

    if w_mandatory + 1 < width:
        rem = width - w_mandatory - 1
        # (name, width that must be exceeded, width consumed)
        candidates = (
            ("use", W_USE, W_USE + 1),
            ("use_share", W_USE_SHARE, W_USE_SHARE),  # glued to "use", no separator
            ("dsk", W_DSK, W_DSK + 1),
            ("use_bar", W_USE_BAR_MIN, W_USE_BAR_MIN + 1),
            ("type", widths.fs_type, widths.fs_type + 1),
        )
        for name, needed, consumed in candidates:
            if rem <= needed:
                break
            rem -= consumed
            enabled.add(name)

        if "use_share" in enabled:
            wc_use += W_USE_SHARE
        if "use_bar" in enabled:
            wc_use += W_USE_BAR_MIN + 1
            if rem > 0:
                incr = min(rem, USE_BAR_MAX_GROWTH)
                w_use_bar += incr
                wc_use += incr

    return ColumnLayout(
        w_fs=widths.fs,
        wc_fs=wc_fs,
        w_type=widths.fs_type,
        w_mount_point=widths.mount_point,
        w_use_bar=w_use_bar,
        wc_use=wc_use,
        e_use="use" in enabled,
        e_use_share="use_share" in enabled,
        e_dsk="dsk" in enabled,
        e_use_bar="use_bar" in enabled,
        e_type="type" in enabled,
    )


__all__ = [
    "ColumnLayout",
    "ContentWidths",
    "mandatory_width",
    "plan_columns",
]
