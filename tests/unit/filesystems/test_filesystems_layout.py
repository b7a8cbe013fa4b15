"""Column planning tests for the filesystems table.

Covers mandatory-only layouts, the optional column priority order,
usage bar growth, and monotonic behavior as the width shrinks.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from lazymounts.filesystems.layout import (
    ContentWidths,
    mandatory_width,
    plan_columns,
)
from lazymounts.mounts import Mount


def _widths() -> ContentWidths:
    return ContentWidths.of_mounts(
        [
            Mount(id=0, fs="/dev/sda1", fs_type="ext4", mount_point=Path("/")),
            Mount(id=1, fs="/dev/sdb1", fs_type="xfs", mount_point=Path("/data")),
        ]
    )


class ContentWidthsTests(unittest.TestCase):
    def test_titles_set_minimum_widths(self) -> None:
        widths = _widths()
        self.assertEqual(widths, ContentWidths(fs=10, fs_type=4, mount_point=11))

    def test_long_content_widens_columns(self) -> None:
        widths = ContentWidths.of_mounts(
            [Mount(id=0, fs="tmpfs-very-long", fs_type="fuse.sshfs", mount_point=Path("/mnt/remote/host"))]
        )
        self.assertEqual(widths, ContentWidths(fs=15, fs_type=10, mount_point=16))

    def test_wide_characters_count_as_two_cells(self) -> None:
        widths = ContentWidths.of_mounts(
            [Mount(id=0, fs="共有ディスク", fs_type="ディスク形式", mount_point=Path("/mnt/共有"))]
        )
        self.assertEqual(widths, ContentWidths(fs=12, fs_type=12, mount_point=11))


class PlanColumnsTests(unittest.TestCase):
    def test_mandatory_width_counts_separators_and_selection_mark(self) -> None:
        self.assertEqual(mandatory_width(_widths()), 32)
        self.assertEqual(mandatory_width(_widths(), show_selection_mark=True), 33)

    def test_narrow_width_keeps_only_mandatory_columns(self) -> None:
        layout = plan_columns(33, _widths())
        self.assertEqual(layout.enabled_columns(), ("fs", "size", "free", "mount_point"))

    def test_use_column_comes_first_with_short_title(self) -> None:
        layout = plan_columns(40, _widths())
        self.assertEqual(layout.enabled_columns(), ("fs", "size", "use", "free", "mount_point"))
        self.assertFalse(layout.e_use_share)
        self.assertEqual(layout.wc_use, 4)
        self.assertEqual(layout.usage_title, "use")

    def test_share_joins_use_before_disk_column(self) -> None:
        layout = plan_columns(43, _widths())
        self.assertTrue(layout.e_use)
        self.assertTrue(layout.e_use_share)
        self.assertFalse(layout.e_dsk)
        self.assertEqual(layout.wc_use, 8)
        self.assertEqual(layout.usage_title, "usage")

    def test_wide_layout_enables_everything_and_caps_bar_growth(self) -> None:
        layout = plan_columns(80, _widths())
        self.assertEqual(
            layout.enabled_columns(),
            ("fs", "dsk", "type", "size", "use", "free", "mount_point"),
        )
        self.assertTrue(layout.e_use_bar)
        self.assertEqual(layout.w_use_bar, 10)
        self.assertEqual(layout.wc_use, 19)

    def test_selection_mark_widens_filesystem_cell(self) -> None:
        layout = plan_columns(80, _widths(), show_selection_mark=True)
        self.assertEqual(layout.w_fs, 10)
        self.assertEqual(layout.wc_fs, 11)

    def test_shrinking_width_never_adds_columns(self) -> None:
        widths = _widths()
        previous = set(plan_columns(120, widths).enabled_columns())
        for width in range(119, 0, -1):
            current = set(plan_columns(width, widths).enabled_columns())
            self.assertTrue(current <= previous, f"width {width} shows {current - previous}")
            previous = current

    def test_long_type_column_stops_scan_without_skipping(self) -> None:
        widths = ContentWidths(fs=10, fs_type=30, mount_point=11)
        layout = plan_columns(60, widths)
        self.assertTrue(layout.e_use_bar)
        self.assertFalse(layout.e_type)


if __name__ == "__main__":
    unittest.main()
