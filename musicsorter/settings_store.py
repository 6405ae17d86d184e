from typing import Any, Dict, Optional

from musicsorter.core import DEFAULT_EXTENSIONS


# Settings are never read from or written to disk; a run only sees these
# defaults plus whatever the command line overrides.
DEFAULT_SETTINGS = {
    # None means "ask interactively"
    "dry_run": None,
    "show_errors": None,
    "extensions": list(DEFAULT_EXTENSIONS),
    # Matches the historic behaviour: "Song.MP3" is rejected.
    "case_sensitive_extensions": True,
    # Sort entries by name so output is the same on every filesystem.
    "sort_entries": True,
    # Exit 1 when at least one file failed (default: always 0).
    "strict_exit": False,
    "color": True,
    "debug": False,
    # Optional rotating log file. Empty: console logging only.
    "log_file": "",
}


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the defaults with every non-None override applied."""
    settings = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_SETTINGS.items()}
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {key}")
        settings[key] = value
    return settings
