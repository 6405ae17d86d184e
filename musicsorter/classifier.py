"""Decide whether a single directory entry can be sorted, and why not.

The rules run in a fixed order and the first one that matches wins:

1. the entry is not a regular file (broken symlink, FIFO, ...)
2. the filename contains a non-printable character
3. the extension is not one of the accepted ones
4. the filename has no ``-`` separator
5. the filename contains two consecutive spaces

Anything that survives is a pass, carrying the raw text before the first
separator. Classification never touches the filesystem beyond what the
``DirectoryEntry`` already captured.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from musicsorter.core import DEFAULT_EXTENSIONS, SEPARATOR
from musicsorter.models import (
    ClassificationResult,
    DiagnosticRecord,
    DirectoryEntry,
    Fail,
    FailureReason,
    Pass,
)

LOGGER = logging.getLogger(__name__)


def _has_unprintable(name: str) -> bool:
    return any(not ch.isprintable() for ch in name)


def _extension_allowed(extension: str, extensions: Iterable[str], case_sensitive: bool) -> bool:
    if case_sensitive:
        return extension in extensions
    ext = extension.lower()
    return any(ext == allowed.lower() for allowed in extensions)


def classify(
    entry: DirectoryEntry,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    case_sensitive: bool = True,
) -> Tuple[ClassificationResult, Optional[DiagnosticRecord]]:
    """Classify ``entry`` and return ``(result, diagnostic)``.

    ``diagnostic`` is ``None`` for a pass and exactly one record for a fail.
    """
    name = entry.name
    extensions = tuple(extensions)

    if not entry.is_regular_file:
        reason = FailureReason.NON_REGULAR_FILE
    elif _has_unprintable(name):
        reason = FailureReason.UNSUPPORTED_CHARACTERS
    elif not _extension_allowed(entry.extension, extensions, case_sensitive):
        reason = FailureReason.UNSUPPORTED_EXTENSION
    elif SEPARATOR not in name:
        reason = FailureReason.MISSING_SEPARATOR
    elif "  " in name:
        reason = FailureReason.MULTIPLE_CONSECUTIVE_SPACES
    else:
        artist_raw = name[: name.index(SEPARATOR)]
        LOGGER.debug("Pass: %r -> artist %r", name, artist_raw)
        return Pass(artist_raw=artist_raw), None

    LOGGER.debug("Fail: %r -> %s", name, reason.name)
    return Fail(reason), DiagnosticRecord(reason=reason, filename=name)


def normalize_artist(artist_raw: str) -> str:
    """Turn the raw artist text into a directory name.

    Surrounding whitespace is trimmed and inner spaces become underscores:
    ``"  The Band  "`` -> ``"The_Band"``. Nothing else is sanitised.
    """
    return artist_raw.strip().replace(" ", "_")
