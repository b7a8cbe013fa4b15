"""Filter overlay tests.

Checks which mount fields a pattern is matched against and how the
master selection carries over into the filtered list.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from lazymounts.filesystems.filtering import build_filtered_content, mount_matches
from lazymounts.mounts import Disk, Mount
from lazymounts.pattern import FuzzyPattern


class SubstringPattern:
    """Plain case-sensitive substring pattern."""

    def __init__(self, needle: str) -> None:
        self.needle = needle

    def score_of_string(self, candidate: str) -> int | None:
        return 1 if self.needle in candidate else None

    def search_string(self, candidate: str):
        return None


def _mounts() -> tuple[Mount, ...]:
    return (
        Mount(id=10, fs="/dev/sda1", fs_type="ext4", mount_point=Path("/"), disk=Disk("sda", rotational=False)),
        Mount(id=11, fs="/dev/sdb1", fs_type="xfs", mount_point=Path("/data"), disk=Disk("sdb", rotational=True)),
        Mount(id=12, fs="tmpfs", fs_type="tmpfs", mount_point=Path("/run")),
        Mount(id=13, fs="/dev/sdc1", fs_type="vfat", mount_point=Path("/media/usb"), disk=Disk("sdc", removable=True)),
    )


class MountMatchesTests(unittest.TestCase):
    def test_matches_each_searchable_field(self) -> None:
        mount = _mounts()[1]
        self.assertTrue(mount_matches(SubstringPattern("sdb"), mount))
        self.assertTrue(mount_matches(SubstringPattern("HDD"), mount))
        self.assertTrue(mount_matches(SubstringPattern("xfs"), mount))
        self.assertTrue(mount_matches(SubstringPattern("/data"), mount))
        self.assertFalse(mount_matches(SubstringPattern("nfs"), mount))

    def test_mount_without_disk_is_not_matched_on_disk_label(self) -> None:
        self.assertFalse(mount_matches(SubstringPattern("SSD"), _mounts()[2]))


class BuildFilteredContentTests(unittest.TestCase):
    def test_keeps_master_order(self) -> None:
        filtered = build_filtered_content(_mounts(), 0, SubstringPattern("/dev/"))
        self.assertEqual([mount.id for mount in filtered.mounts], [10, 11, 13])

    def test_single_match_is_selected(self) -> None:
        filtered = build_filtered_content(_mounts(), 0, SubstringPattern("xfs"))
        self.assertEqual([mount.id for mount in filtered.mounts], [11])
        self.assertEqual(filtered.selection_idx, 0)
        self.assertEqual(filtered.selected_mount().id, 11)

    def test_selection_carries_over_when_master_selection_matches(self) -> None:
        filtered = build_filtered_content(_mounts(), 1, SubstringPattern("/dev/"))
        self.assertEqual(filtered.selection_idx, 1)
        self.assertEqual(filtered.selected_mount().id, 11)

    def test_selection_falls_back_to_last_match_before_master_selection(self) -> None:
        # tmpfs at index 2 does not match; the last match before it is sdb1.
        filtered = build_filtered_content(_mounts(), 2, SubstringPattern("/dev/"))
        self.assertEqual(filtered.selected_mount().id, 11)

    def test_selection_falls_back_to_first_match_when_none_before(self) -> None:
        filtered = build_filtered_content(_mounts(), 0, SubstringPattern("vfat"))
        self.assertEqual(filtered.selection_idx, 0)
        self.assertEqual(filtered.selected_mount().id, 13)

    def test_no_match_leaves_empty_overlay(self) -> None:
        filtered = build_filtered_content(_mounts(), 3, SubstringPattern("zfs"))
        self.assertEqual(filtered.mounts, ())
        self.assertEqual(filtered.selection_idx, 0)
        self.assertIsNone(filtered.selected_mount())

    def test_fuzzy_pattern_matches_subsequence_in_mount_point(self) -> None:
        filtered = build_filtered_content(_mounts(), 0, FuzzyPattern("mdu"))
        self.assertEqual([mount.id for mount in filtered.mounts], [13])


if __name__ == "__main__":
    unittest.main()
