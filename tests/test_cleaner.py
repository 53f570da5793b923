"""Tests for folder deletion."""

from pathlib import Path
from unittest.mock import patch

from devpurge.cleaner import delete_path, delete_paths, deleted_paths, is_path_safe
from devpurge.models import DeletionResult, ScanResult


def _result(path: Path, size: int = 1000) -> ScanResult:
    return ScanResult(
        path=str(path),
        folder_type=path.name,
        size_bytes=size,
        modified_time=0.0,
    )


class TestIsPathSafe:
    def test_blocks_home_directory(self):
        assert not is_path_safe(Path.home())

    def test_blocks_filesystem_root(self):
        assert not is_path_safe(Path("/"))

    def test_allows_rule_folder(self, tmp_path):
        assert is_path_safe(tmp_path / "proj" / "node_modules")

    def test_blocks_non_rule_folder(self, tmp_path):
        assert not is_path_safe(tmp_path / "proj" / "src")

    def test_blocks_system_bin(self):
        assert not is_path_safe(Path("/bin"))


class TestDeletePath:
    def test_deletes_folder(self, tmp_path, make_project):
        node_modules = make_project(tmp_path, "proj")

        outcome = delete_path(_result(node_modules, 1234))

        assert outcome.success
        assert outcome.bytes_freed == 1234
        assert not node_modules.exists()
        assert (tmp_path / "proj" / "package.json").exists()

    def test_dry_run_keeps_folder(self, tmp_path, make_project):
        node_modules = make_project(tmp_path, "proj")

        outcome = delete_path(_result(node_modules), dry_run=True)

        assert outcome.success
        assert outcome.dry_run
        assert node_modules.exists()

    def test_missing_folder_fails(self, tmp_path):
        outcome = delete_path(_result(tmp_path / "gone" / "target"))
        assert not outcome.success
        assert "no longer exists" in outcome.error

    def test_blocked_folder_fails(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()

        outcome = delete_path(_result(src))

        assert not outcome.success
        assert outcome.error == "Blocked path"
        assert src.exists()

    def test_permission_error(self, tmp_path, make_project):
        node_modules = make_project(tmp_path, "proj")

        with patch("devpurge.cleaner.shutil.rmtree", side_effect=PermissionError("denied")):
            outcome = delete_path(_result(node_modules))

        assert not outcome.success
        assert "Permission denied" in outcome.error
        assert outcome.bytes_freed == 0


class TestDeletePaths:
    def test_continues_past_failures(self, tmp_path, make_project):
        first = make_project(tmp_path, "a")
        second = make_project(tmp_path, "b")
        calls = []

        outcomes = delete_paths(
            [_result(tmp_path / "missing" / "target"), _result(first), _result(second)],
            progress_callback=lambda path, current, total: calls.append((current, total)),
        )

        assert [o.success for o in outcomes] == [False, True, True]
        assert calls == [(1, 3), (2, 3), (3, 3)]
        assert deleted_paths(outcomes) == [str(first), str(second)]

    def test_dry_run_deletes_nothing(self, tmp_path, make_project):
        node_modules = make_project(tmp_path, "a")

        outcomes = delete_paths([_result(node_modules)], dry_run=True)

        assert deleted_paths(outcomes) == []
        assert node_modules.exists()


class TestDeletedPaths:
    def test_only_real_successes(self):
        outcomes = [
            DeletionResult(path="/ok"),
            DeletionResult(path="/failed", success=False, error="x"),
            DeletionResult(path="/dry", dry_run=True),
        ]
        assert deleted_paths(outcomes) == ["/ok"]
