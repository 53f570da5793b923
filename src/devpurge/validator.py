"""Marker-file validation for matched folders.

A folder such as ``build`` or ``vendor`` is only removable when it sits
inside a real project. The project root is the folder's parent, and the
proof is one of the rule's marker files directly inside it.
"""

import logging
import os
from pathlib import Path

from devpurge.models import FolderRule

logger = logging.getLogger(__name__)


def _has_extension(directory: Path, suffix: str) -> bool:
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.name.endswith(suffix) and entry.is_file():
                return True
    return False


def has_marker(directory: Path, marker: str, errors: list[str] | None = None) -> bool:
    """
    Check whether a marker exists directly inside a directory.

    Args:
        directory: Directory to look in
        marker: Exact file name, or '*.ext' to match any file with that extension
        errors: Optional list collecting messages for checks that failed

    Returns:
        True if the marker is present. Access errors count as absent.
    """
    try:
        if marker.startswith("*."):
            return _has_extension(directory, marker[1:])
        return (directory / marker).exists()
    except (PermissionError, OSError) as e:
        message = f"Cannot check marker {marker} in {directory}: {e.strerror or e}"
        logger.warning(message)
        if errors is not None:
            errors.append(message)
        return False


def validate(candidate_dir: Path, rule: FolderRule, warnings: list[str] | None = None) -> bool:
    """
    Decide whether a matched folder belongs to a real project.

    Args:
        candidate_dir: Directory whose basename matched the rule
        rule: The matching folder rule
        warnings: Optional list collecting marker checks that errored, when
            no other marker settled the question

    Returns:
        True if the rule needs no markers or any marker is present in the parent
    """
    if rule.always_valid:
        return True

    parent = candidate_dir.parent
    if parent == candidate_dir:
        return False

    errors: list[str] = []
    if any(has_marker(parent, marker, errors) for marker in sorted(rule.marker_files)):
        return True

    if warnings is not None:
        warnings.extend(errors)
    return False
