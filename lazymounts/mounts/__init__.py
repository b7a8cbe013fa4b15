"""Mount snapshot model and enumeration backends.

This package contains non-UI mount primitives:
- frozen mount/disk/usage datatypes
- the psutil-backed mount source
- the shared loader applying the listable-candidate filter
"""

from __future__ import annotations

from .types import Disk, Mount, MountStats
from .source import MountLoader, MountSource, PsutilMountSource, candidate_mounts, disk_for_device

__all__ = [
    "Disk",
    "Mount",
    "MountStats",
    "MountLoader",
    "MountSource",
    "PsutilMountSource",
    "candidate_mounts",
    "disk_for_device",
]
