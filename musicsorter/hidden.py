"""Hidden/system entry detection.

Windows exposes hidden and system flags as file attributes; elsewhere the
leading-dot convention is all there is.
"""

from __future__ import annotations

import os
import platform
import stat
from typing import Callable, Optional

HiddenCheck = Callable[[os.DirEntry], bool]

_WINDOWS_HIDDEN_BITS = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2) | getattr(stat, "FILE_ATTRIBUTE_SYSTEM", 0x4)


def _is_hidden_windows(entry: os.DirEntry) -> bool:
    # Attributes of the link itself, like Explorer shows them.
    attrs = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    return bool(attrs & _WINDOWS_HIDDEN_BITS)


def _is_hidden_posix(entry: os.DirEntry) -> bool:
    return entry.name.startswith(".")


def get_hidden_check(system: Optional[str] = None) -> HiddenCheck:
    """Return the hidden/system test for ``system`` (defaults to the host)."""
    sysname = system or platform.system()
    if sysname == "Windows":
        return _is_hidden_windows
    return _is_hidden_posix


def is_hidden_or_system(entry: os.DirEntry) -> bool:
    return get_hidden_check()(entry)
