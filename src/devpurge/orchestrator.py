"""Scan orchestration: walk, validate, consult the cache, size, report."""

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from devpurge.cache import is_fresh, load_cache, lookup, remove, save_cache, upsert
from devpurge.exceptions import InvalidRootError, ScanCancelledError
from devpurge.models import Candidate, CacheStore, ScanReport, ScanResult
from devpurge.sizer import get_directory_size
from devpurge.walker import walk

logger = logging.getLogger(__name__)


def _measure(path: str, stop: threading.Event) -> tuple[int, bool, list[str]]:
    errors: list[str] = []
    size, partial = get_directory_size(Path(path), errors, stop)
    return size, partial, errors


def _is_under(path: str, root: str) -> bool:
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def sort_results(results: Iterable[ScanResult]) -> list[ScanResult]:
    """Order results by size descending, then path ascending."""
    return sorted(results, key=lambda r: (-r.size_bytes, r.path))


class ScanOrchestrator:
    """
    Runs scans against a single cache store.

    The store is loaded on first use and saved at the end of every
    cache-writing scan and after every deletion batch. Only the thread
    calling scan() mutates it; size workers just return numbers.
    """

    def __init__(self, cache_path: Path | None = None, max_workers: int | None = None) -> None:
        """
        Args:
            cache_path: Cache file location, or None to disable caching entirely
            max_workers: Size workers to run (default: CPU count)
        """
        self.cache_path = cache_path
        self.max_workers = max_workers or os.cpu_count() or 1
        self._store: CacheStore | None = None
        self._stop = threading.Event()

    def cancel(self) -> None:
        """Stop the running scan as soon as possible."""
        self._stop.set()

    def _load_store(self, warnings: list[str] | None = None) -> CacheStore | None:
        if self.cache_path is None:
            return None
        if self._store is None:
            self._store = load_cache(self.cache_path, warnings)
        return self._store

    def _save_store(self, warnings: list[str] | None = None) -> None:
        if self.cache_path is None or self._store is None:
            return
        try:
            save_cache(self.cache_path, self._store)
        except OSError as e:
            message = f"Could not save scan cache {self.cache_path}: {e}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)

    def scan(
        self,
        root: str | Path,
        min_size_bytes: int = 0,
        use_cache: bool = True,
        force_rescan: bool = False,
        progress_callback: Callable[[str], None] | None = None,
    ) -> ScanReport:
        """
        Find, validate and size every removable folder below root.

        Args:
            root: Directory to scan
            min_size_bytes: Drop results smaller than this
            use_cache: Read and write the scan cache
            force_rescan: Ignore cached sizes (results are still written back)
            progress_callback: Optional callback(path) for each directory visited

        Returns:
            ScanReport with results sorted by size descending, then path

        Raises:
            InvalidRootError: If root is missing or not a directory
        """
        root_path = Path(os.path.abspath(os.path.expanduser(str(root))))
        if not root_path.exists():
            raise InvalidRootError(str(root_path), "Path does not exist")
        if not root_path.is_dir():
            raise InvalidRootError(str(root_path), "Not a directory")

        self._stop.clear()
        report = ScanReport(root=str(root_path))
        warnings = report.warnings
        store = self._load_store(warnings) if use_cache else None

        results: list[ScanResult] = []
        seen: set[str] = set()
        skipped: set[str] = set()
        futures: dict[Future, tuple[Candidate, float]] = {}
        interrupted = False

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            for candidate in walk(root_path, warnings, progress_callback, self._stop, skipped):
                if not candidate.valid:
                    logger.debug(
                        "Skipping %s: no %s project marker in parent",
                        candidate.path,
                        candidate.rule.project_type,
                    )
                    continue

                try:
                    mtime = os.stat(candidate.path, follow_symlinks=False).st_mtime
                except OSError as e:
                    message = f"Cannot stat {candidate.path}: {e.strerror or e}"
                    logger.warning(message)
                    warnings.append(message)
                    continue
                seen.add(candidate.path)

                entry = lookup(store, candidate.path) if store is not None else None
                if (
                    entry is not None
                    and not force_rescan
                    and entry.folder_type == candidate.rule.folder_name
                    and is_fresh(entry, mtime)
                ):
                    logger.debug("Cache hit for %s", candidate.path)
                    report.cache_hits += 1
                    results.append(
                        ScanResult(
                            path=candidate.path,
                            folder_type=candidate.rule.folder_name,
                            project_type=candidate.rule.project_type,
                            size_bytes=entry.size_bytes,
                            modified_time=mtime,
                            from_cache=True,
                        )
                    )
                    continue

                logger.debug("Cache miss for %s", candidate.path)
                report.cache_misses += 1
                future = executor.submit(_measure, candidate.path, self._stop)
                futures[future] = (candidate, mtime)

            for future in as_completed(futures):
                candidate, mtime = futures[future]
                try:
                    size, partial, errors = future.result()
                except ScanCancelledError:
                    continue

                for message in errors:
                    logger.warning(message)
                warnings.extend(errors)

                result = ScanResult(
                    path=candidate.path,
                    folder_type=candidate.rule.folder_name,
                    project_type=candidate.rule.project_type,
                    size_bytes=size,
                    modified_time=mtime,
                    partial=partial,
                )
                results.append(result)

                # Undercounts are reported but never remembered
                if store is not None and not partial:
                    upsert(store, result)
        except KeyboardInterrupt:
            self._stop.set()
            interrupted = True
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        report.cancelled = self._stop.is_set()

        if store is not None:
            if not report.cancelled:
                # Folders below unreadable directories were not looked at, not lost
                stale = [
                    p
                    for p in store.entries
                    if _is_under(p, str(root_path))
                    and p not in seen
                    and not any(_is_under(p, s) for s in skipped)
                ]
                for path in stale:
                    logger.debug("Dropping stale cache entry %s", path)
                    remove(store, path)
            self._save_store(warnings)

        if interrupted:
            raise KeyboardInterrupt

        report.results = sort_results(r for r in results if r.size_bytes >= min_size_bytes)
        return report

    def full_scan(
        self,
        root: str | Path,
        min_size_bytes: int = 0,
        force_bypass_cache: bool = False,
    ) -> list[ScanResult]:
        """Scan with caching enabled and return only the ordered results."""
        return self.scan(root, min_size_bytes, use_cache=True, force_rescan=force_bypass_cache).results

    def apply_deletions(self, deleted_paths: Iterable[str | Path]) -> int:
        """
        Forget folders that were removed and persist the cache.

        Only pass paths that were actually deleted; entries for folders
        whose deletion failed must stay so a later run still knows them.

        Returns:
            Number of cache entries removed
        """
        store = self._load_store()
        if store is None:
            return 0

        removed = 0
        for path in deleted_paths:
            if remove(store, os.path.abspath(os.fspath(path))):
                removed += 1

        self._save_store()
        return removed

    post_delete_update = apply_deletions
