"""Single pass over one directory: census, classify, move, tally."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from musicsorter.classifier import classify, normalize_artist
from musicsorter.core import DEFAULT_EXTENSIONS
from musicsorter.hidden import HiddenCheck, is_hidden_or_system
from musicsorter.models import (
    DiagnosticRecord,
    DirectoryEntry,
    Fail,
    FailureReason,
    FolderSummary,
    MoveResult,
    RunReport,
)
from musicsorter.mover import apply_move

LOGGER = logging.getLogger(__name__)

# Called once per attempted file with either the move result or the diagnostic.
ProgressCallback = Callable[[DirectoryEntry, Optional[MoveResult], Optional[DiagnosticRecord]], None]


def _safe_hidden(check: HiddenCheck, entry: os.DirEntry) -> bool:
    try:
        return check(entry)
    except OSError as exc:
        LOGGER.debug("Could not read attributes of %s: %s", entry.name, exc)
        return False


def scan_entries(
    root: Path,
    hidden_check: Optional[HiddenCheck] = None,
    sort_entries: bool = True,
) -> List[DirectoryEntry]:
    """Snapshot the direct children of ``root``.

    The listing is fully read before anything is moved. With ``sort_entries``
    the result is ordered by name, otherwise it keeps the filesystem order.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    check = hidden_check or is_hidden_or_system
    with os.scandir(root) as it:
        entries = [DirectoryEntry.from_dir_entry(e, _safe_hidden(check, e)) for e in it]
    if sort_entries:
        entries.sort(key=lambda e: e.name)
    return entries


def census(entries: Iterable[DirectoryEntry]) -> FolderSummary:
    """Count folders, readable/unreadable files and hidden files."""
    folders = readable = unreadable = hidden = 0
    for entry in entries:
        if entry.is_dir:
            folders += 1
        elif entry.is_hidden_or_system:
            hidden += 1
        elif entry.is_regular_file and os.access(entry.path, os.R_OK):
            readable += 1
        else:
            unreadable += 1
    return FolderSummary(
        folder_count=folders,
        readable_file_count=readable,
        unreadable_file_count=unreadable,
        hidden_file_count=hidden,
    )


def _process_entry(
    entry: DirectoryEntry,
    root: Path,
    dry_run: bool,
    extensions: Sequence[str],
    case_sensitive: bool,
) -> Tuple[Optional[MoveResult], Optional[DiagnosticRecord]]:
    result, diagnostic = classify(entry, extensions, case_sensitive)
    if isinstance(result, Fail):
        return None, diagnostic

    artist_dir = normalize_artist(result.artist_raw)
    move = apply_move(entry.path, root, artist_dir, entry.name, dry_run)
    if not move.ok:
        return None, DiagnosticRecord(
            reason=FailureReason.EXCEPTION_DURING_PROCESSING,
            filename=entry.name,
            message=move.error,
        )
    return move, None


def sort_directory(
    root: Path,
    dry_run: bool = False,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    case_sensitive: bool = True,
    sort_entries: bool = True,
    hidden_check: Optional[HiddenCheck] = None,
    progress: Optional[ProgressCallback] = None,
    on_census: Optional[Callable[[FolderSummary], None]] = None,
) -> RunReport:
    """Sort the files directly inside ``root`` into per-artist folders.

    Raises ``NotADirectoryError``/``OSError`` only when ``root`` itself cannot
    be listed. Problems with individual files end up in the report.
    """
    root = Path(root)
    entries = scan_entries(root, hidden_check=hidden_check, sort_entries=sort_entries)
    report = RunReport(root=root, dry_run=dry_run, summary=census(entries))
    if on_census is not None:
        on_census(report.summary)
    LOGGER.info("Sorting %s (%d entries, dry_run=%s)", root, len(entries), dry_run)

    for entry in entries:
        if entry.is_dir or entry.is_hidden_or_system:
            continue

        try:
            move, diagnostic = _process_entry(entry, root, dry_run, extensions, case_sensitive)
        except OSError as exc:
            LOGGER.warning("Error while processing %s: %s", entry.name, exc)
            move, diagnostic = None, DiagnosticRecord(
                reason=FailureReason.EXCEPTION_DURING_PROCESSING,
                filename=entry.name,
                message=str(exc),
            )

        if diagnostic is not None:
            report.record_failure(diagnostic)
        else:
            report.record_success(move)

        if progress is not None:
            progress(entry, move, diagnostic)

    tally = report.tally
    LOGGER.info(
        "Finished %s | attempted=%d succeeded=%d failed=%d",
        root, tally.attempted, tally.succeeded, tally.failed,
    )
    return report
