"""Filter overlay built from the master mount list."""

from __future__ import annotations

from dataclasses import dataclass

from ..mounts import Mount
from ..pattern import Pattern


@dataclass
class FilteredContent:
    """Derived view of the mounts matching ``pattern``, in master order.

    ``mounts`` may be empty, in which case ``selection_idx`` stays ``0`` and
    no row is addressable.
    """

    pattern: Pattern
    mounts: tuple[Mount, ...]
    selection_idx: int = 0

    def selected_mount(self) -> Mount | None:
        if not self.mounts:
            return None
        return self.mounts[self.selection_idx]


def mount_matches(pattern: Pattern, mount: Mount) -> bool:
    """Return whether any searchable field of ``mount`` matches ``pattern``."""
    if pattern.score_of_string(mount.fs) is not None:
        return True
    if mount.disk is not None and pattern.score_of_string(mount.disk.type_label) is not None:
        return True
    if pattern.score_of_string(mount.fs_type) is not None:
        return True
    return pattern.score_of_string(str(mount.mount_point)) is not None


def build_filtered_content(
    mounts: tuple[Mount, ...],
    selection_idx: int,
    pattern: Pattern,
) -> FilteredContent:
    """Filter ``mounts`` and carry the master selection over approximately.

    The overlay selects the last match found at or before the master
    selection, or the first match when there is none before it.
    """
    kept: list[Mount] = []
    filtered_selection_idx = 0
    for idx, mount in enumerate(mounts):
        if not mount_matches(pattern, mount):
            continue
        if idx <= selection_idx:
            filtered_selection_idx = len(kept)
        kept.append(mount)
    return FilteredContent(
        pattern=pattern,
        mounts=tuple(kept),
        selection_idx=filtered_selection_idx,
    )


__all__ = ["FilteredContent", "build_filtered_content", "mount_matches"]
