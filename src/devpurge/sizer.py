"""Directory size aggregation for devpurge."""

import logging
import os
import threading
from pathlib import Path

from devpurge.exceptions import ScanCancelledError

logger = logging.getLogger(__name__)


def get_directory_size(
    path: Path,
    errors: list[str] | None = None,
    stop: threading.Event | None = None,
) -> tuple[int, bool]:
    """
    Sum the sizes of all files below a directory.

    Uses os.scandir with an explicit stack. Symlinks are counted by neither
    their own size nor their target's.

    Args:
        path: Directory to measure
        errors: Optional list collecting messages for unreadable entries
        stop: Optional event; when set, the walk is abandoned

    Returns:
        Tuple of (total_bytes, partial). partial is True when some entry
        could not be read and its contribution was counted as zero.

    Raises:
        ScanCancelledError: If stop was set before the walk finished
    """
    total_size = 0
    partial = False

    def _record(message: str) -> None:
        nonlocal partial
        partial = True
        logger.debug(message)
        if errors is not None:
            errors.append(message)

    stack: list[str] = [os.fspath(path)]
    while stack:
        if stop is not None and stop.is_set():
            raise ScanCancelledError(str(path))

        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except (PermissionError, OSError) as e:
                        _record(f"Cannot read {entry.path}: {e.strerror or e}")
        except (PermissionError, OSError) as e:
            _record(f"Cannot read directory {current}: {e.strerror or e}")

    return total_size, partial
