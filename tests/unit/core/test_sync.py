"""
Unit tests for the directory synchronizer.
"""

import os
from unittest.mock import patch

import pytest

from modsync.core.errors import SyncIOError
from modsync.core.layout import LayoutPlan
from modsync.core.sync import DirectorySynchronizer, file_digest, same_content
from modsync.core.types import Classification, Dependency, LayoutEntry


@pytest.fixture
def sources(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "libX.jar").write_bytes(b"libX")
    (src / "A-1.0.jar").write_bytes(b"A")
    return src


@pytest.fixture
def output(tmp_path):
    return tmp_path / "out"


def _plan(sources):
    plan = LayoutPlan()
    plan.add(LayoutEntry(target="libX.jar", source=sources / "libX.jar", classification=Classification.SHARED))
    plan.add(
        LayoutEntry(
            target="A-1.0/A-1.0.jar",
            source=sources / "A-1.0.jar",
            classification=Classification.PRIVATE,
            owner=Dependency.parse("A:1.0"),
        )
    )
    return plan


class TestDirectorySynchronizer:
    def test_initial_sync_copies_everything(self, sources, output):
        report = DirectorySynchronizer(output).sync(_plan(sources))

        assert sorted(report.copied) == ["A-1.0/A-1.0.jar", "libX.jar"]
        assert (output / "libX.jar").read_bytes() == b"libX"
        assert (output / "A-1.0" / "A-1.0.jar").read_bytes() == b"A"

    def test_second_sync_writes_nothing(self, sources, output):
        synchronizer = DirectorySynchronizer(output)
        synchronizer.sync(_plan(sources))
        mtime = os.stat(output / "libX.jar").st_mtime_ns

        with patch("modsync.core.sync.shutil.copy2") as copy2:
            report = synchronizer.sync(_plan(sources))

        assert report.writes == 0
        assert not report.changed
        assert sorted(report.unchanged) == ["A-1.0/A-1.0.jar", "libX.jar"]
        copy2.assert_not_called()
        assert os.stat(output / "libX.jar").st_mtime_ns == mtime

    def test_stale_content_replaced(self, sources, output):
        synchronizer = DirectorySynchronizer(output)
        synchronizer.sync(_plan(sources))
        (output / "libX.jar").write_bytes(b"tampered")

        report = synchronizer.sync(_plan(sources))

        assert report.updated == ["libX.jar"]
        assert (output / "libX.jar").read_bytes() == b"libX"

    def test_same_size_different_content_replaced(self, sources, output):
        synchronizer = DirectorySynchronizer(output)
        synchronizer.sync(_plan(sources))
        (output / "libX.jar").write_bytes(b"LIBX")

        report = synchronizer.sync(_plan(sources))

        assert report.updated == ["libX.jar"]

    def test_unplanned_files_and_folders_removed(self, sources, output):
        (output / "old-mod-0.1").mkdir(parents=True)
        (output / "old-mod-0.1" / "old.jar").write_bytes(b"old")
        (output / "stray.jar").write_bytes(b"stray")
        (output / "A-1.0").mkdir()
        (output / "A-1.0" / "gone.jar").write_bytes(b"gone")

        report = DirectorySynchronizer(output).sync(_plan(sources))

        assert sorted(report.removed) == ["A-1.0/gone.jar", "old-mod-0.1/", "stray.jar"]
        assert sorted(p.relative_to(output).as_posix() for p in output.rglob("*")) == [
            "A-1.0",
            "A-1.0/A-1.0.jar",
            "libX.jar",
        ]

    def test_file_replaced_by_folder(self, sources, output):
        output.mkdir()
        (output / "A-1.0").write_bytes(b"not a folder")

        DirectorySynchronizer(output).sync(_plan(sources))

        assert (output / "A-1.0" / "A-1.0.jar").is_file()

    def test_empty_plan_empties_directory(self, sources, output):
        synchronizer = DirectorySynchronizer(output)
        synchronizer.sync(_plan(sources))

        report = synchronizer.sync(LayoutPlan())

        assert output.is_dir()
        assert list(output.iterdir()) == []
        assert sorted(report.removed) == ["A-1.0/", "libX.jar"]

    def test_dry_run_touches_nothing(self, sources, output):
        output.mkdir()
        (output / "stray.jar").write_bytes(b"stray")

        report = DirectorySynchronizer(output).sync(_plan(sources), dry_run=True)

        assert report.dry_run
        assert sorted(report.copied) == ["A-1.0/A-1.0.jar", "libX.jar"]
        assert report.removed == ["stray.jar"]
        assert [p.name for p in output.iterdir()] == ["stray.jar"]

    def test_dry_run_does_not_create_root(self, sources, output):
        DirectorySynchronizer(output).sync(_plan(sources), dry_run=True)
        assert not output.exists()

    def test_parallel_copy(self, sources, output):
        report = DirectorySynchronizer(output, max_workers=4).sync(_plan(sources))
        assert report.writes == 2
        assert (output / "A-1.0" / "A-1.0.jar").read_bytes() == b"A"

    def test_no_temporary_files_left(self, sources, output):
        DirectorySynchronizer(output).sync(_plan(sources))
        assert not [p for p in output.rglob(".modsync-*")]


class TestSyncErrors:
    def test_missing_source(self, sources, output):
        plan = _plan(sources)
        (sources / "libX.jar").unlink()

        with pytest.raises(SyncIOError, match="Failed to read") as exc:
            DirectorySynchronizer(output).sync(plan)

        assert exc.value.operation == "read"

    def test_root_is_a_file(self, sources, output):
        output.write_bytes(b"")
        with pytest.raises(SyncIOError):
            DirectorySynchronizer(output).sync(_plan(sources))

    def test_copy_failure_wrapped(self, sources, output):
        with patch("modsync.core.sync.shutil.copy2", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SyncIOError, match="Failed to copy") as exc:
                DirectorySynchronizer(output).sync(_plan(sources))

        assert isinstance(exc.value.cause, PermissionError)
        assert not [p for p in output.rglob(".modsync-*")]


class TestContentComparison:
    def test_digest_stable(self, sources):
        assert file_digest(sources / "libX.jar") == file_digest(sources / "libX.jar")

    def test_same_content(self, sources, tmp_path):
        copy = tmp_path / "copy.jar"
        copy.write_bytes(b"libX")
        assert same_content(sources / "libX.jar", copy)
        assert not same_content(sources / "libX.jar", sources / "A-1.0.jar")
        assert not same_content(sources / "libX.jar", tmp_path / "missing.jar")
