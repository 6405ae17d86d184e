#!/usr/bin/env python3
"""Sort 'Artist Name - Song Name.mp3' files into per-artist folders.

Usage:
    musicsorter ~/Downloads/Music --dry-run
    musicsorter                       # asks for the folder interactively
"""

from __future__ import annotations

import argparse
import re
import sys
import uuid
from functools import partial
from pathlib import Path
from typing import List, Optional, Sequence

from musicsorter.console import (
    make_console,
    print_census,
    print_error_log,
    print_progress,
    print_summary,
    prompt_directory,
    prompt_yes_no,
)
from musicsorter.logging_utils import setup_logging
from musicsorter.settings_store import load_settings
from musicsorter.sorter import sort_directory


def _normalise_extensions(values: Sequence[str], case_sensitive: bool) -> List[str]:
    result: List[str] = []
    for item in values:
        ext = str(item or '').strip()
        if not ext:
            continue
        if not case_sensitive:
            ext = ext.lower()
        if not ext.startswith('.'):
            ext = f'.{ext}'
        if ext not in result:
            result.append(ext)
    return result


def parse_extensions(raw_values: Optional[Sequence[str]], case_sensitive: bool = True) -> Optional[List[str]]:
    """Split ``--ext`` values on spaces/commas; ``None`` when nothing was given."""
    if not raw_values:
        return None

    tokens: List[str] = []
    for value in raw_values:
        parts = re.split(r"[\s,;|]+", str(value or '').strip())
        tokens.extend(part for part in parts if part)

    return _normalise_extensions(tokens, case_sensitive)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Move 'Artist Name - Song Name.mp3' files into one folder per artist.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Folder containing the unsorted files. Asked for interactively when omitted.",
    )
    parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Preview the moves without touching the filesystem (asked when omitted).",
    )
    parser.add_argument(
        "--show-errors",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the itemised error log at the end (asked when omitted).",
    )
    parser.add_argument(
        "--ext",
        action="append",
        help="Accepted extension; repeat or comma-separate for several (default: .mp3).",
    )
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match extensions case-insensitively (accept .MP3).",
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        help="Process entries in filesystem order instead of by name.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any file could not be sorted.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", help="Also write logs to this file (rotating).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    case_sensitive = not args.ignore_case

    extensions = parse_extensions(args.ext, case_sensitive)
    if extensions is not None and not extensions:
        sys.stderr.write("No valid extensions provided.\n")
        return 2

    settings = load_settings({
        "dry_run": args.dry_run,
        "show_errors": args.show_errors,
        "extensions": extensions,
        "case_sensitive_extensions": case_sensitive,
        "sort_entries": not args.no_sort,
        "strict_exit": args.strict,
        "color": not args.no_color,
        "debug": args.debug,
        "log_file": args.log_file,
    })
    logger = setup_logging(settings, str(uuid.uuid4())[:8])
    console = make_console(settings["color"])

    try:
        if args.path:
            root = Path(args.path).expanduser()
            if not root.is_dir():
                sys.stderr.write(f"Folder does not exist or is not a directory: {root}\n")
                return 2
        else:
            root = prompt_directory(console)

        dry_run = settings["dry_run"]
        if dry_run is None:
            dry_run = prompt_yes_no(console, "Dry run (preview without moving anything)?")

        report = sort_directory(
            root,
            dry_run=dry_run,
            extensions=settings["extensions"],
            case_sensitive=settings["case_sensitive_extensions"],
            sort_entries=settings["sort_entries"],
            progress=partial(print_progress, console, dry_run),
            on_census=partial(print_census, console, root),
        )

        print_summary(console, report)

        show_errors = settings["show_errors"]
        if show_errors is None and report.diagnostics:
            show_errors = prompt_yes_no(console, "Show the error log?")
        if show_errors:
            print_error_log(console, report)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Interrupted.[/yellow]")
        return 130
    except OSError as exc:
        logger.error("Could not sort folder: %s", exc)
        return 2

    if settings["strict_exit"] and report.tally.failed:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
