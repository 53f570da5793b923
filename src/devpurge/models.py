"""Data models for devpurge."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

CACHE_SCHEMA_VERSION = 1


def format_size(size_bytes: int) -> str:
    """Format bytes to a human-readable string (binary units)."""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if size < 1024 or unit == "TB":
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size_bytes} B"


class MarkerPolicy(str, Enum):
    """How a rule's marker files are combined."""

    ANY = "any"  # At least one marker must be present


class FolderRule(BaseModel):
    """Static definition of a removable folder type."""

    model_config = ConfigDict(frozen=True)

    folder_name: str = Field(..., description="Exact directory basename to match")
    project_type: str = Field(..., description="Ecosystem the folder belongs to")
    marker_files: frozenset[str] = Field(
        default_factory=frozenset,
        description="Files proving the parent is a real project ('*.ext' matches by extension)",
    )
    marker_policy: MarkerPolicy = Field(MarkerPolicy.ANY, description="Marker combination policy")

    @property
    def always_valid(self) -> bool:
        """Whether the folder is safe by name alone."""
        return not self.marker_files


class Candidate(BaseModel):
    """A directory whose basename matched a rule."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the directory")
    rule: FolderRule
    valid: bool = Field(False, description="Whether the marker check passed")


class ScanResult(BaseModel):
    """A validated, sized folder."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the folder")
    folder_type: str = Field(..., description="Folder name of the matching rule")
    project_type: str = Field("", description="Ecosystem the folder belongs to")
    size_bytes: int = Field(..., description="Total size in bytes")
    modified_time: float = Field(..., description="Directory mtime at scan time")
    partial: bool = Field(False, description="Size is an undercount (unreadable entries)")
    from_cache: bool = Field(False, description="Size was reused from the scan cache")

    @property
    def size_mb(self) -> float:
        """Size in mebibytes."""
        return self.size_bytes / (1024**2)

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class CacheEntry(BaseModel):
    """A cached size keyed by its directory's fingerprint."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field("", exclude=True, description="Absolute path (the cache key)")
    size_bytes: int = Field(..., alias="sizeBytes", ge=0)
    folder_type: str = Field(..., alias="folderType")
    fingerprint_mtime: float = Field(..., alias="fingerprintMTime")


class CacheStore(BaseModel):
    """Everything devpurge remembers between runs."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(CACHE_SCHEMA_VERSION, alias="schemaVersion")
    entries: dict[str, CacheEntry] = Field(default_factory=dict)


class ScanReport(BaseModel):
    """Outcome of a scan: ordered results plus non-fatal warnings."""

    root: str
    results: list[ScanResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    cache_hits: int = Field(0, description="Folders whose size came from the cache")
    cache_misses: int = Field(0, description="Folders that had to be walked")
    cancelled: bool = Field(False, description="Scan was interrupted before completing")

    @property
    def total_bytes(self) -> int:
        """Total reclaimable bytes across all results."""
        return sum(r.size_bytes for r in self.results)


class DeletionResult(BaseModel):
    """Result of deleting one folder."""

    path: str = Field(..., description="Folder that was deleted")
    bytes_freed: int = Field(0, description="Bytes freed by the deletion")
    success: bool = Field(True, description="Whether the deletion succeeded")
    error: Optional[str] = Field(None, description="Error message if failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")
