"""Interactive prompts and terminal reporting."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from musicsorter.models import DiagnosticRecord, DirectoryEntry, FolderSummary, MoveResult, RunReport

_YES = {"Y", "y"}
_NO = {"N", "n"}


def make_console(color: bool = True) -> Console:
    return Console(color_system="auto" if color else None, highlight=False)


def prompt_directory(console: Console, prompt: str = "Enter the path to your music directory: ") -> Path:
    """Ask until the answer names an existing directory."""
    while True:
        answer = console.input(prompt).strip().strip('"')
        if answer:
            path = Path(answer).expanduser()
            if path.is_dir():
                return path
        console.print(f"[red]Not an existing directory:[/red] {escape(answer)}")


def prompt_yes_no(console: Console, prompt: str) -> bool:
    """Ask until the answer is exactly Y/y or N/n."""
    while True:
        answer = console.input(f"{escape(prompt)} \\[Y/N]: ").strip()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        console.print("[yellow]Please answer Y or N.[/yellow]")


def print_progress(
    console: Console,
    dry_run: bool,
    entry: DirectoryEntry,
    move: Optional[MoveResult],
    diagnostic: Optional[DiagnosticRecord],
) -> None:
    name = escape(entry.name)
    if diagnostic is not None:
        console.print(f"[yellow]⚠ Skipped:[/yellow] {name} [dim]({diagnostic.reason.label})[/dim]")
        return
    target = escape(f"{move.destination.parent.name}/{entry.name}")
    if dry_run:
        console.print(f"[cyan]\\[DRY RUN] Would move:[/cyan] {name} → {target}")
    else:
        console.print(f"[green]✔ Moved:[/green] {name} → {target}")


def print_census(console: Console, root: Path, summary: FolderSummary) -> None:
    table = Table(title=f"Contents of {escape(str(root))}", show_header=False)
    table.add_column("What")
    table.add_column("Count", justify="right")
    table.add_row("Folders", str(summary.folder_count))
    table.add_row("Readable files", str(summary.readable_file_count))
    table.add_row("Unreadable files", str(summary.unreadable_file_count))
    table.add_row("Hidden files", str(summary.hidden_file_count))
    console.print(table)


def print_summary(console: Console, report: RunReport) -> None:
    tally = report.tally
    failed_style = "bold red" if tally.failed else "green"
    header = "--- Summary (dry run, nothing moved) ---" if report.dry_run else "--- Summary ---"
    console.print(f"[bold]{header}[/bold]")
    console.print(f"Attempted: [bold]{tally.attempted}[/bold]")
    console.print(f"Succeeded: [bold green]{tally.succeeded}[/bold green]")
    console.print(f"Failed:    [{failed_style}]{tally.failed}[/{failed_style}]")


def print_error_log(console: Console, report: RunReport) -> None:
    """List every diagnostic, grouped by failure reason."""
    grouped = report.diagnostics_by_reason()
    if not grouped:
        console.print("[green]No errors.[/green]")
        return
    for reason, records in grouped.items():
        console.print(f"[bold red]{escape(reason.label)}[/bold red] ({len(records)})")
        for record in records:
            console.print(f"  {escape(record.describe())}")
