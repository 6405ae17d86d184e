from __future__ import annotations

import logging
import os
from pathlib import Path

from musicsorter.models import MoveResult

LOGGER = logging.getLogger(__name__)

_INVALID_DIR_NAMES = {"", ".", ".."}


def apply_move(
    source_path: Path,
    directory_root: Path,
    artist_dir_name: str,
    filename: str,
    dry_run: bool,
) -> MoveResult:
    """Move ``source_path`` to ``directory_root/artist_dir_name/filename``.

    The artist directory is created (one level only) when missing. An
    existing file at the destination is never overwritten. Every filesystem
    error comes back as a failed ``MoveResult`` instead of being raised.
    """
    target_dir = Path(directory_root) / artist_dir_name
    destination = target_dir / filename

    if artist_dir_name in _INVALID_DIR_NAMES:
        return MoveResult(destination=destination, error=f"Invalid artist folder name: {artist_dir_name!r}")

    if dry_run:
        LOGGER.debug("[DRY RUN] %s -> %s", source_path, destination)
        return MoveResult(destination=destination)

    created = False
    try:
        if not target_dir.is_dir():
            # Raises FileExistsError when a plain file already has that name.
            target_dir.mkdir()
            created = True
            LOGGER.debug("Created folder %s", target_dir)

        # os.rename silently replaces files on POSIX.
        if os.path.lexists(destination):
            raise FileExistsError(f"Destination already exists: {destination}")

        os.rename(source_path, destination)
    except OSError as exc:
        LOGGER.warning("Could not move %s: %s", filename, exc)
        return MoveResult(destination=destination, created_directory=created, error=str(exc))

    LOGGER.debug("Moved %s -> %s", source_path, destination)
    return MoveResult(destination=destination, moved=True, created_directory=created)
