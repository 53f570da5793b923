"""Tests for data models."""

from devpurge.models import (
    CacheEntry,
    CacheStore,
    FolderRule,
    ScanReport,
    ScanResult,
    format_size,
)


class TestFormatSize:
    def test_bytes(self):
        assert format_size(500) == "500 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(125829120) == "120.0 MB"

    def test_gigabytes(self):
        assert format_size(3 * 1024**3) == "3.0 GB"

    def test_terabytes_do_not_overflow(self):
        assert format_size(2048 * 1024**4) == "2048.0 TB"


class TestFolderRule:
    def test_always_valid_without_markers(self):
        assert FolderRule(folder_name="__pycache__", project_type="Python").always_valid

    def test_not_always_valid_with_markers(self):
        rule = FolderRule(
            folder_name="target", project_type="Rust", marker_files=frozenset({"Cargo.toml"})
        )
        assert not rule.always_valid


class TestScanResult:
    def test_size_helpers(self):
        result = ScanResult(
            path="/p/node_modules",
            folder_type="node_modules",
            size_bytes=5 * 1024**2,
            modified_time=1.0,
        )
        assert result.size_mb == 5.0
        assert result.size_human == "5.0 MB"
        assert not result.partial
        assert not result.from_cache


class TestCacheModels:
    def test_entry_accepts_aliases(self):
        entry = CacheEntry.model_validate(
            {"sizeBytes": 1, "folderType": "target", "fingerprintMTime": 2.0}
        )
        assert entry.size_bytes == 1
        assert entry.fingerprint_mtime == 2.0

    def test_store_dumps_aliases_without_path(self):
        store = CacheStore()
        store.entries["/x"] = CacheEntry(
            path="/x", size_bytes=1, folder_type="target", fingerprint_mtime=2.0
        )
        assert store.model_dump(by_alias=True) == {
            "schemaVersion": 1,
            "entries": {"/x": {"sizeBytes": 1, "folderType": "target", "fingerprintMTime": 2.0}},
        }


class TestScanReport:
    def test_total_bytes(self):
        report = ScanReport(
            root="/",
            results=[
                ScanResult(path="/a", folder_type="target", size_bytes=3, modified_time=0.0),
                ScanResult(path="/b", folder_type="target", size_bytes=4, modified_time=0.0),
            ],
        )
        assert report.total_bytes == 7
        assert report.warnings == []
        assert not report.cancelled
