"""Value types shared by the classifier, the mover and the run loop.

Everything here is scoped to a single invocation over a single directory.
Nothing is persisted between runs.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

LOGGER = logging.getLogger(__name__)


class FailureReason(Enum):
    NON_REGULAR_FILE = "Not a regular file"
    UNSUPPORTED_EXTENSION = "Unsupported file extension"
    MISSING_SEPARATOR = "Missing '-' separator between artist and song"
    MULTIPLE_CONSECUTIVE_SPACES = "Multiple consecutive spaces"
    UNSUPPORTED_CHARACTERS = "Unsupported (non-printable) characters"
    EXCEPTION_DURING_PROCESSING = "Exception during processing"

    @property
    def label(self) -> str:
        return self.value


def _entry_test(entry: os.DirEntry, test) -> bool:
    # is_dir/is_file only swallow FileNotFoundError; symlink loops raise ELOOP.
    try:
        return test()
    except OSError as exc:
        LOGGER.debug("Could not stat %s: %s", entry.name, exc)
        return False


@dataclass(frozen=True)
class DirectoryEntry:
    path: Path
    name: str
    extension: str  # as stored, case preserved ("" when absent)
    is_dir: bool
    is_regular_file: bool
    is_hidden_or_system: bool = False

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry, is_hidden_or_system: bool = False) -> "DirectoryEntry":
        """Snapshot an ``os.scandir`` entry. Symlinks are followed, so a
        broken or looping link is neither a directory nor a regular file."""
        path = Path(entry.path)
        return cls(
            path=path,
            name=entry.name,
            extension=path.suffix,
            is_dir=_entry_test(entry, entry.is_dir),
            is_regular_file=_entry_test(entry, entry.is_file),
            is_hidden_or_system=is_hidden_or_system,
        )


@dataclass(frozen=True)
class Pass:
    artist_raw: str  # text before the first separator, untrimmed


@dataclass(frozen=True)
class Fail:
    reason: FailureReason


ClassificationResult = Union[Pass, Fail]


@dataclass(frozen=True)
class DiagnosticRecord:
    reason: FailureReason
    filename: str
    message: Optional[str] = None

    def describe(self) -> str:
        if self.message:
            return f"{self.filename}: {self.message}"
        return self.filename


@dataclass
class RunTally:
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0

    def record_success(self) -> None:
        self.attempted += 1
        self.succeeded += 1

    def record_failure(self) -> None:
        self.attempted += 1
        self.failed += 1


@dataclass(frozen=True)
class FolderSummary:
    folder_count: int = 0
    readable_file_count: int = 0
    unreadable_file_count: int = 0
    hidden_file_count: int = 0


@dataclass(frozen=True)
class MoveResult:
    destination: Path
    moved: bool = False
    created_directory: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    root: Path
    dry_run: bool
    summary: FolderSummary = field(default_factory=FolderSummary)
    tally: RunTally = field(default_factory=RunTally)
    diagnostics: List[DiagnosticRecord] = field(default_factory=list)
    moves: List[MoveResult] = field(default_factory=list)

    def record_failure(self, diagnostic: DiagnosticRecord) -> None:
        self.diagnostics.append(diagnostic)
        self.tally.record_failure()

    def record_success(self, result: MoveResult) -> None:
        self.moves.append(result)
        self.tally.record_success()

    def diagnostics_by_reason(self) -> Dict[FailureReason, List[DiagnosticRecord]]:
        """Group diagnostics by reason, in enum order, keeping run order inside a group."""
        grouped: Dict[FailureReason, List[DiagnosticRecord]] = {}
        for reason in FailureReason:
            items = [d for d in self.diagnostics if d.reason is reason]
            if items:
                grouped[reason] = items
        return grouped
