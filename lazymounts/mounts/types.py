"""Read-only mount snapshot datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Disk:
    """Block device backing a mount, reduced to what the table displays."""

    name: str
    rotational: bool | None = None
    removable: bool = False
    ram: bool = False
    crypted: bool = False

    @property
    def type_label(self) -> str:
        """Return the short (at most 3 chars) disk kind shown in the ``dsk`` column."""
        if self.ram:
            return "RAM"
        if self.crypted:
            return "cry"
        if self.removable:
            return "rem"
        if self.rotational is True:
            return "HDD"
        if self.rotational is False:
            return "SSD"
        return ""


@dataclass(frozen=True)
class MountStats:
    """Usage numbers in bytes observed when the snapshot was taken."""

    size: int
    used: int
    available: int

    @property
    def use_share(self) -> float:
        """Return ``used / size`` in ``[0, 1]``, ``0.0`` for zero-sized mounts."""
        if self.size <= 0:
            return 0.0
        return max(0.0, min(1.0, self.used / self.size))


@dataclass(frozen=True)
class Mount:
    """One mounted filesystem.

    ``id`` is unique within one load and is what cross-view selection
    resolves against. ``dev`` is the device number of the mount point when it
    could be stat'ed.
    """

    id: int
    fs: str
    fs_type: str
    mount_point: Path
    dev: int | None = None
    disk: Disk | None = None
    stats: MountStats | None = None


__all__ = [
    "Disk",
    "MountStats",
    "Mount",
]
