"""Mount enumeration backends and the shared, lock-guarded loader.

``PsutilMountSource`` reads the OS mount table through psutil and enriches
each entry with usage numbers and a best-effort disk descriptor from sysfs.
Panels never call a source directly: they go through a ``MountLoader`` that
serializes loads and applies the candidate filter.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import psutil

from ..errors import MountListError
from .types import Disk, Mount, MountStats

logger = logging.getLogger(__name__)

SYS_CLASS_BLOCK = Path("/sys/class/block")


class MountSource(Protocol):
    """Anything able to produce a fresh mount snapshot."""

    def load(self) -> tuple[Mount, ...]:
        ...


def _read_sys(path: Path) -> str | None:
    """Return stripped sysfs attribute text, ``None`` when unreadable."""
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return None


def _parent_block_dir(name: str, sys_root: Path) -> Path | None:
    """Return sysfs dir of the whole disk holding block device ``name``."""
    block_dir = sys_root / name
    if not block_dir.exists():
        return None
    try:
        resolved = block_dir.resolve()
    except OSError:
        return block_dir
    # Partitions live under their disk and carry a ``partition`` attribute.
    if (resolved / "partition").exists():
        return resolved.parent
    return resolved


def disk_for_device(device: str, sys_root: Path = SYS_CLASS_BLOCK) -> Disk | None:
    """Describe the block device behind ``device`` (e.g. ``/dev/sda1``)."""
    if not device.startswith("/dev/"):
        return None
    try:
        name = Path(device).resolve().name
    except OSError:
        name = Path(device).name
    if name.startswith(("zram", "ram")):
        return Disk(name=name, ram=True)

    disk_dir = _parent_block_dir(name, sys_root)
    if disk_dir is None:
        return None

    crypted = False
    dm_uuid = _read_sys(disk_dir / "dm" / "uuid")
    if dm_uuid is not None and dm_uuid.startswith("CRYPT-"):
        crypted = True

    rotational_text = _read_sys(disk_dir / "queue" / "rotational")
    rotational = None if rotational_text is None else rotational_text == "1"
    removable = _read_sys(disk_dir / "removable") == "1"
    return Disk(
        name=disk_dir.name,
        rotational=rotational,
        removable=removable,
        crypted=crypted,
    )


def _safe_dev(mount_point: str) -> int | None:
    try:
        return os.stat(mount_point).st_dev
    except OSError:
        return None


def _safe_stats(mount_point: str) -> MountStats | None:
    """Return usage numbers, ``None`` for pseudo or unreachable filesystems."""
    try:
        usage = psutil.disk_usage(mount_point)
    except OSError:
        return None
    if usage.total <= 0:
        return None
    return MountStats(size=usage.total, used=usage.used, available=usage.free)


class PsutilMountSource:
    """Mount source backed by ``psutil.disk_partitions(all=True)``."""

    def __init__(self, sys_root: Path = SYS_CLASS_BLOCK) -> None:
        self.sys_root = sys_root

    def load(self) -> tuple[Mount, ...]:
        """Enumerate mounts in OS table order.

        Backend failures surface as ``MountListError``; a single mount that
        cannot be stat'ed is kept without ``dev``/``stats``.
        """
        try:
            partitions = psutil.disk_partitions(all=True)
        except OSError as exc:
            raise MountListError(str(exc)) from exc

        mounts: list[Mount] = []
        for idx, part in enumerate(partitions):
            mounts.append(
                Mount(
                    id=idx,
                    fs=part.device,
                    fs_type=part.fstype,
                    mount_point=Path(part.mountpoint),
                    dev=_safe_dev(part.mountpoint),
                    disk=disk_for_device(part.device, self.sys_root),
                    stats=_safe_stats(part.mountpoint),
                )
            )
        return tuple(mounts)


def candidate_mounts(mounts: Iterable[Mount], disks_only: bool = False) -> tuple[Mount, ...]:
    """Keep mounts worth listing: those with usage stats, or with a disk in disks-only mode."""
    if disks_only:
        return tuple(mount for mount in mounts if mount.disk is not None)
    return tuple(mount for mount in mounts if mount.stats is not None)


class MountLoader:
    """Shared entry point to a mount source.

    Several panels may hold the same loader; the lock is only taken for the
    duration of one ``load``/``load_candidates`` call.
    """

    def __init__(self, source: MountSource | None = None) -> None:
        self.source = source if source is not None else PsutilMountSource()
        self._lock = threading.Lock()

    def load(self) -> tuple[Mount, ...]:
        """Return a fresh snapshot from the underlying source."""
        with self._lock:
            return tuple(self.source.load())

    def load_candidates(self, disks_only: bool = False) -> tuple[Mount, ...]:
        """Load and filter in one locked call; raise when nothing is left."""
        with self._lock:
            loaded = tuple(self.source.load())
            mounts = candidate_mounts(loaded, disks_only=disks_only)
        logger.debug("loaded %d mounts, %d listable (disks_only=%s)", len(loaded), len(mounts), disks_only)
        if not mounts:
            raise MountListError("no disk in mount list")
        return mounts


__all__ = [
    "MountSource",
    "PsutilMountSource",
    "MountLoader",
    "candidate_mounts",
    "disk_for_device",
]
