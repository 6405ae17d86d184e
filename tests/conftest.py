import logging
from pathlib import Path
from typing import Callable

import pytest

from musicsorter.models import DirectoryEntry


@pytest.fixture(autouse=True)
def _reset_logging():
    """setup_logging rewires the root logger; undo it after each test."""
    yield
    logging.captureWarnings(False)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def music_dir(tmp_path) -> Path:
    """An empty folder standing in for the user's unsorted music folder."""
    root = tmp_path / "music"
    root.mkdir()
    return root


@pytest.fixture
def touch(music_dir) -> Callable[..., Path]:
    """Create files inside ``music_dir``: ``touch("A - B.mp3", "C.txt")``."""

    def _touch(*names: str) -> Path:
        path = music_dir
        for name in names:
            path = music_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"ID3")
        return path

    return _touch


@pytest.fixture
def make_entry() -> Callable[..., DirectoryEntry]:
    """Build a DirectoryEntry without touching the filesystem."""

    def _make(name: str, regular: bool = True, hidden: bool = False) -> DirectoryEntry:
        path = Path("/music") / name
        return DirectoryEntry(
            path=path,
            name=name,
            extension=path.suffix,
            is_dir=False,
            is_regular_file=regular,
            is_hidden_or_system=hidden,
        )

    return _make
