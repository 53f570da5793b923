"""Shared fixtures for devpurge tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Keep tests away from the real config and cache directories."""
    home = tmp_path_factory.mktemp("settings")
    monkeypatch.setenv("DEVPURGE_CONFIG", str(home / "config.json"))
    monkeypatch.setenv("DEVPURGE_CACHE_DIR", str(home / "cache"))
    return home


def write_sized(path: Path, size: int) -> Path:
    """Create a (sparse) file with the given apparent size."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def make_project():
    """Build a project folder with optional marker files and a sized artifact folder."""

    def _make(
        root: Path,
        name: str,
        folder: str = "node_modules",
        markers: tuple[str, ...] = ("package.json",),
        size: int = 1000,
    ) -> Path:
        project = root / name
        project.mkdir(parents=True, exist_ok=True)
        for marker in markers:
            (project / marker).write_text("{}")
        artifact = project / folder
        artifact.mkdir(exist_ok=True)
        if size:
            write_sized(artifact / "payload.bin", size)
        return artifact

    return _make
