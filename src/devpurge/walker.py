"""Filesystem traversal for build and dependency folders.

This module finds directories whose basename matches a folder rule
(node_modules, target, __pycache__, ...) anywhere below a root.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterator

from devpurge.models import Candidate
from devpurge.rules import lookup
from devpurge.validator import validate

logger = logging.getLogger(__name__)


def _record(
    message: str,
    path: Path,
    warnings: list[str] | None,
    skipped: set[str] | None,
) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
    if skipped is not None:
        skipped.add(str(path))


def _match(
    path: Path,
    warnings: list[str] | None = None,
    skipped: set[str] | None = None,
) -> Candidate | None:
    rule = lookup(path.name)
    if rule is None:
        return None

    errors: list[str] = []
    valid = validate(path, rule, errors)
    if errors:
        # Undecided, not absent: keep what is known about this folder
        if warnings is not None:
            warnings.extend(errors)
        if skipped is not None:
            skipped.add(str(path))
    return Candidate(path=str(path), rule=rule, valid=valid)


def walk(
    root: Path,
    warnings: list[str] | None = None,
    progress_callback: Callable[[str], None] | None = None,
    stop: threading.Event | None = None,
    skipped: set[str] | None = None,
) -> Iterator[Candidate]:
    """
    Find directories matching a folder rule below root.

    Depth-first, using an explicit stack so arbitrarily deep trees cannot
    exhaust the interpreter's recursion limit. Symlinked directories are
    never followed.

    A matched directory that passes validation is yielded and not descended
    into. A matched directory that fails validation is yielded with
    ``valid=False`` and traversed like any other directory.

    Args:
        root: Absolute directory to start from
        warnings: Optional list collecting unreadable-entry and marker-check warnings
        progress_callback: Optional callback(path) for each directory visited
        stop: Optional event; traversal ends as soon as it is set
        skipped: Optional set collecting paths whose contents could not be
            examined (unreadable directories, failed marker checks)

    Yields:
        Candidates in traversal order
    """
    root_candidate = _match(root, warnings, skipped)
    if root_candidate is not None:
        yield root_candidate
        if root_candidate.valid:
            return

    stack: list[Path] = [root]
    while stack:
        if stop is not None and stop.is_set():
            return

        directory = stack.pop()
        if progress_callback:
            progress_callback(str(directory))

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except (PermissionError, OSError) as e:
            _record(
                f"Cannot read directory {directory}: {e.strerror or e}",
                directory,
                warnings,
                skipped,
            )
            continue

        children: list[Path] = []
        for entry in entries:
            entry_path = Path(entry.path)
            try:
                # Skip files and symlinks
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError as e:
                _record(f"Cannot read {entry_path}: {e.strerror or e}", entry_path, warnings, skipped)
                continue

            candidate = _match(entry_path, warnings, skipped)
            if candidate is not None:
                yield candidate
                # Don't recurse into a folder we are going to report
                if candidate.valid:
                    continue

            children.append(entry_path)

        # Reversed so siblings are visited in name order
        stack.extend(reversed(children))
