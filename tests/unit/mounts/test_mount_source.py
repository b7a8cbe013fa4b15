"""Mount enumeration tests.

psutil is patched out so the tests see a fixed mount table. Disk
descriptors are read from a temporary sysfs-like tree.
"""

from __future__ import annotations

import os
import tempfile
import threading
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from lazymounts.errors import MountListError
from lazymounts.mounts import (
    Disk,
    Mount,
    MountLoader,
    MountStats,
    PsutilMountSource,
    candidate_mounts,
    disk_for_device,
)


def _partition(device: str, mountpoint: str, fstype: str) -> SimpleNamespace:
    return SimpleNamespace(device=device, mountpoint=mountpoint, fstype=fstype, opts="rw")


def _usage(total: int, used: int, free: int) -> SimpleNamespace:
    return SimpleNamespace(total=total, used=used, free=free, percent=0.0)


class DiskTypesTests(unittest.TestCase):
    def test_type_label_priority(self) -> None:
        self.assertEqual(Disk("zram0", ram=True, crypted=True).type_label, "RAM")
        self.assertEqual(Disk("dm-0", crypted=True, removable=True).type_label, "cry")
        self.assertEqual(Disk("sdc", removable=True, rotational=True).type_label, "rem")
        self.assertEqual(Disk("sda", rotational=True).type_label, "HDD")
        self.assertEqual(Disk("nvme0n1", rotational=False).type_label, "SSD")
        self.assertEqual(Disk("vda").type_label, "")

    def test_use_share_is_clamped(self) -> None:
        self.assertEqual(MountStats(size=0, used=5, available=0).use_share, 0.0)
        self.assertEqual(MountStats(size=100, used=25, available=75).use_share, 0.25)
        self.assertEqual(MountStats(size=100, used=150, available=0).use_share, 1.0)


class DiskForDeviceTests(unittest.TestCase):
    def _sysfs(self, root: Path) -> Path:
        disk_dir = root / "devices" / "sdq"
        (disk_dir / "queue").mkdir(parents=True)
        (disk_dir / "queue" / "rotational").write_text("0\n", encoding="utf-8")
        (disk_dir / "removable").write_text("0\n", encoding="utf-8")
        (disk_dir / "sdq1").mkdir()
        (disk_dir / "sdq1" / "partition").write_text("1\n", encoding="utf-8")
        crypt_dir = root / "devices" / "dm-7"
        (crypt_dir / "dm").mkdir(parents=True)
        (crypt_dir / "dm" / "uuid").write_text("CRYPT-LUKS2-abc\n", encoding="utf-8")
        class_dir = root / "class"
        class_dir.mkdir()
        os.symlink(disk_dir, class_dir / "sdq")
        os.symlink(disk_dir / "sdq1", class_dir / "sdq1")
        os.symlink(crypt_dir, class_dir / "dm-7")
        return class_dir

    def test_partition_resolves_to_parent_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            sys_root = self._sysfs(Path(tmp))
            disk = disk_for_device("/dev/sdq1", sys_root)
        self.assertEqual(disk, Disk(name="sdq", rotational=False, removable=False))
        self.assertEqual(disk.type_label, "SSD")

    def test_crypt_mapper_is_flagged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            sys_root = self._sysfs(Path(tmp))
            disk = disk_for_device("/dev/dm-7", sys_root)
        self.assertTrue(disk.crypted)
        self.assertIsNone(disk.rotational)

    def test_ram_devices_and_non_block_sources(self) -> None:
        self.assertEqual(disk_for_device("/dev/zram0").type_label, "RAM")
        self.assertIsNone(disk_for_device("tmpfs"))
        self.assertIsNone(disk_for_device("server:/export"))

    def test_unknown_block_device_has_no_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(disk_for_device("/dev/sdq9", Path(tmp)))


class PsutilMountSourceTests(unittest.TestCase):
    def test_load_builds_mounts_in_table_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            partitions = [
                _partition("/dev/sdq1", tmp, "ext4"),
                _partition("proc", "/proc-does-not-exist", "proc"),
            ]

            def disk_usage(path: str) -> SimpleNamespace:
                if path == tmp:
                    return _usage(1000, 250, 750)
                raise FileNotFoundError(path)

            with (
                mock.patch("lazymounts.mounts.source.psutil.disk_partitions", return_value=partitions) as parts,
                mock.patch("lazymounts.mounts.source.psutil.disk_usage", side_effect=disk_usage),
            ):
                mounts = PsutilMountSource(sys_root=Path(tmp) / "no-sysfs").load()
            device_id = os.stat(tmp).st_dev

        parts.assert_called_once_with(all=True)
        self.assertEqual(len(mounts), 2)
        first, second = mounts
        self.assertEqual((first.id, first.fs, first.fs_type), (0, "/dev/sdq1", "ext4"))
        self.assertEqual(first.mount_point, Path(tmp))
        self.assertEqual(first.dev, device_id)
        self.assertEqual(first.stats, MountStats(size=1000, used=250, available=750))
        self.assertIsNone(first.disk)
        self.assertEqual(second.id, 1)
        self.assertIsNone(second.dev)
        self.assertIsNone(second.stats)

    def test_zero_sized_filesystem_has_no_stats(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with (
                mock.patch(
                    "lazymounts.mounts.source.psutil.disk_partitions",
                    return_value=[_partition("sysfs", tmp, "sysfs")],
                ),
                mock.patch("lazymounts.mounts.source.psutil.disk_usage", return_value=_usage(0, 0, 0)),
            ):
                mounts = PsutilMountSource().load()
        self.assertIsNone(mounts[0].stats)

    def test_backend_failure_becomes_mount_list_error(self) -> None:
        with mock.patch(
            "lazymounts.mounts.source.psutil.disk_partitions",
            side_effect=PermissionError("denied"),
        ):
            with self.assertRaises(MountListError) as ctx:
                PsutilMountSource().load()
        self.assertEqual(ctx.exception.details, "denied")
        self.assertEqual(str(ctx.exception), "mount list error: denied")


class FakeSource:
    def __init__(self, mounts: tuple[Mount, ...]) -> None:
        self.mounts = mounts
        self.lock_held: list[bool] = []
        self.loader: MountLoader | None = None

    def load(self) -> tuple[Mount, ...]:
        if self.loader is not None:
            self.lock_held.append(self.loader._lock.locked())
        return self.mounts


def _sample_mounts() -> tuple[Mount, ...]:
    stats = MountStats(size=10, used=1, available=9)
    return (
        Mount(id=0, fs="/dev/sda1", fs_type="ext4", mount_point=Path("/"), disk=Disk("sda"), stats=stats),
        Mount(id=1, fs="proc", fs_type="proc", mount_point=Path("/proc")),
        Mount(id=2, fs="tmpfs", fs_type="tmpfs", mount_point=Path("/run"), stats=stats),
        Mount(id=3, fs="/dev/sdb1", fs_type="ext4", mount_point=Path("/mnt/b"), disk=Disk("sdb")),
    )


class MountLoaderTests(unittest.TestCase):
    def test_candidates_keep_mounts_with_stats(self) -> None:
        self.assertEqual([m.id for m in candidate_mounts(_sample_mounts())], [0, 2])

    def test_disks_only_keeps_mounts_with_disk(self) -> None:
        self.assertEqual([m.id for m in candidate_mounts(_sample_mounts(), disks_only=True)], [0, 3])

    def test_load_candidates_runs_under_lock(self) -> None:
        source = FakeSource(_sample_mounts())
        loader = MountLoader(source)
        source.loader = loader

        mounts = loader.load_candidates()

        self.assertEqual([m.id for m in mounts], [0, 2])
        self.assertEqual(source.lock_held, [True])
        self.assertFalse(loader._lock.locked())
        self.assertEqual(loader.load(), _sample_mounts())

    def test_load_candidates_raises_when_nothing_listable(self) -> None:
        loader = MountLoader(FakeSource((_sample_mounts()[1],)))
        with self.assertRaises(MountListError) as ctx:
            loader.load_candidates(disks_only=True)
        self.assertEqual(ctx.exception.details, "no disk in mount list")
        self.assertFalse(loader._lock.locked())

    def test_concurrent_loads_are_serialized(self) -> None:
        active = []
        overlap = []

        class SlowSource:
            def load(self) -> tuple[Mount, ...]:
                active.append(1)
                overlap.append(len(active) > 1)
                threading.Event().wait(0.01)
                active.pop()
                return _sample_mounts()

        loader = MountLoader(SlowSource())
        threads = [threading.Thread(target=loader.load_candidates) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(overlap, [False] * 4)


if __name__ == "__main__":
    unittest.main()
