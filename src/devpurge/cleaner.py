"""Folder deletion with safety checks for devpurge."""

import logging
import shutil
from pathlib import Path
from typing import Callable

from devpurge.config import expand_path
from devpurge.models import DeletionResult, ScanResult
from devpurge.rules import lookup

logger = logging.getLogger(__name__)

# Paths that should NEVER be deleted
BLOCKED_PATHS = [
    "~",
    "~/Documents",
    "~/Desktop",
    "~/Projects",
    "~/Code",
    "/",
    "/bin",
    "/usr",
    "/etc",
    "/var",
    "/System",
    "/Library",
    "/Applications",
]


def is_path_safe(path: Path) -> bool:
    """
    Check if a folder may be deleted.

    Only folders named after a rule are eligible, and never one of the
    blocked locations themselves.

    Args:
        path: Folder to check

    Returns:
        True if safe to delete, False otherwise
    """
    path_str = str(path)

    for blocked in BLOCKED_PATHS:
        if path_str == str(expand_path(blocked)):
            return False

    return lookup(path.name) is not None


def delete_path(result: ScanResult, dry_run: bool = False) -> DeletionResult:
    """
    Delete one scanned folder.

    Args:
        result: Folder to delete, as reported by a scan
        dry_run: If True, don't actually delete

    Returns:
        DeletionResult; bytes_freed is the size reported by the scan
    """
    path = Path(result.path)

    if not is_path_safe(path):
        return DeletionResult(
            path=result.path,
            success=False,
            error="Blocked path",
            dry_run=dry_run,
        )

    if not path.exists():
        return DeletionResult(
            path=result.path,
            success=False,
            error="Path no longer exists",
            dry_run=dry_run,
        )

    if dry_run:
        return DeletionResult(path=result.path, bytes_freed=result.size_bytes, dry_run=True)

    try:
        shutil.rmtree(path)
    except PermissionError as e:
        logger.error("Permission denied deleting %s: %s", path, e)
        return DeletionResult(path=result.path, success=False, error=f"Permission denied: {e}")
    except OSError as e:
        logger.error("Error deleting %s: %s", path, e)
        return DeletionResult(path=result.path, success=False, error=f"OS error: {e}")

    logger.info("Deleted %s", path)
    return DeletionResult(path=result.path, bytes_freed=result.size_bytes)


def delete_paths(
    results: list[ScanResult],
    dry_run: bool = False,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> list[DeletionResult]:
    """
    Delete several scanned folders, continuing past failures.

    Args:
        results: Folders to delete
        dry_run: If True, don't actually delete
        progress_callback: Optional callback(path, current, total)

    Returns:
        One DeletionResult per folder, in input order
    """
    outcomes = []
    total = len(results)

    for i, item in enumerate(results):
        if progress_callback:
            progress_callback(item.path, i + 1, total)
        outcomes.append(delete_path(item, dry_run))

    return outcomes


def deleted_paths(outcomes: list[DeletionResult]) -> list[str]:
    """Paths that were really removed (not failed, not dry run)."""
    return [o.path for o in outcomes if o.success and not o.dry_run]
