"""Persisted scan cache for devpurge.

The cache maps a folder's absolute path to its last measured size, keyed
by the folder's own modification time. When the live mtime still equals
the stored one the size is reused without walking the subtree.

Only the directory's own metadata is compared, so changes deep inside the
tree that never touch it go unnoticed until the folder itself changes.
"""

import json
import logging
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from pydantic import ValidationError

from devpurge.models import CACHE_SCHEMA_VERSION, CacheEntry, CacheStore, ScanResult

logger = logging.getLogger(__name__)

CACHE_TEMP_PREFIX = ".scan_cache."
CACHE_TEMP_SUFFIX = ".tmp"


def new_cache() -> CacheStore:
    """Return an empty cache store."""
    return CacheStore(schema_version=CACHE_SCHEMA_VERSION)


def load_cache(cache_path: Path, warnings: list[str] | None = None) -> CacheStore:
    """
    Load the cache file, pruning entries for folders that no longer exist.

    A missing file gives an empty store. An unreadable or malformed file
    gives an empty store and a warning, never an error.
    """
    if not cache_path.is_file():
        return new_cache()

    def _discard(reason: str) -> CacheStore:
        message = f"Ignoring scan cache {cache_path}: {reason}"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return new_cache()

    try:
        payload = json.loads(cache_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return _discard(str(e))

    if not isinstance(payload, dict):
        return _discard("not a JSON object")

    version = payload.get("schemaVersion")
    if version != CACHE_SCHEMA_VERSION:
        return _discard(f"unsupported schema version {version!r}")

    raw_entries = payload.get("entries")
    if not isinstance(raw_entries, dict):
        return _discard("missing entries")

    store = new_cache()
    for key, value in raw_entries.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue
        try:
            entry = CacheEntry.model_validate({**value, "path": key})
        except ValidationError:
            logger.debug("Dropping malformed cache entry for %s", key)
            continue
        if not os.path.isdir(key):
            logger.debug("Dropping cache entry for vanished folder %s", key)
            continue
        store.entries[key] = entry

    return store


def save_cache(cache_path: Path, store: CacheStore) -> None:
    """Persist the cache atomically by writing a temp file then renaming."""
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    payload = store.model_dump(mode="json", by_alias=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=cache_path.parent,
            prefix=CACHE_TEMP_PREFIX,
            suffix=CACHE_TEMP_SUFFIX,
            delete=False,
        ) as handle:
            temp_name = handle.name
            json.dump(payload, handle, indent=2, sort_keys=True)
            handle.write("\n")
        os.replace(temp_name, cache_path)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise


def lookup(store: CacheStore, path: str) -> CacheEntry | None:
    """Get the cached entry for a folder path."""
    return store.entries.get(path)


def is_fresh(entry: CacheEntry, live_mtime: float) -> bool:
    """Whether a cached entry still describes the folder on disk."""
    return entry.fingerprint_mtime == live_mtime


def upsert(store: CacheStore, result: ScanResult) -> None:
    """Record a sized folder, replacing any previous entry for its path."""
    store.entries[result.path] = CacheEntry(
        path=result.path,
        size_bytes=result.size_bytes,
        folder_type=result.folder_type,
        fingerprint_mtime=result.modified_time,
    )


def remove(store: CacheStore, path: str) -> bool:
    """Forget a folder. Returns True if an entry was removed."""
    return store.entries.pop(path, None) is not None
