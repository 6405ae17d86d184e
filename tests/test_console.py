"""Tests for the interactive prompts and report printing."""
import io
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from musicsorter.console import (
    print_census,
    print_error_log,
    print_progress,
    print_summary,
    prompt_directory,
    prompt_yes_no,
)
from musicsorter.models import DiagnosticRecord, FailureReason, FolderSummary, MoveResult, RunReport


@pytest.fixture
def console():
    return Console(file=io.StringIO(), color_system=None, width=120)


def output(console):
    return console.file.getvalue()


class TestPrompts:
    def test_yes_no_reprompts_until_valid(self, console):
        with patch.object(console, "input", side_effect=["maybe", "yes", "", "y"]) as mock_input:
            assert prompt_yes_no(console, "Dry run?") is True
        assert mock_input.call_count == 4
        assert output(console).count("Please answer Y or N.") == 3

    @pytest.mark.parametrize("answer, expected", [("Y", True), ("y", True), ("N", False), ("n", False)])
    def test_yes_no_answers(self, console, answer, expected):
        with patch.object(console, "input", return_value=answer):
            assert prompt_yes_no(console, "Dry run?") is expected

    def test_directory_reprompts_until_existing(self, console, tmp_path):
        missing = tmp_path / "missing"
        a_file = tmp_path / "file.mp3"
        a_file.write_bytes(b"")
        with patch.object(console, "input", side_effect=["", str(missing), str(a_file), f'"{tmp_path}"']):
            assert prompt_directory(console) == tmp_path
        assert output(console).count("Not an existing directory") == 3


class TestReports:
    def _report(self, root):
        report = RunReport(root=root, dry_run=False)
        report.record_success(MoveResult(destination=root / "Radiohead" / "Radiohead - Creep.mp3", moved=True))
        report.record_failure(DiagnosticRecord(FailureReason.MISSING_SEPARATOR, "NoDash.mp3"))
        report.record_failure(DiagnosticRecord(FailureReason.MISSING_SEPARATOR, "Other[1].mp3"))
        report.record_failure(
            DiagnosticRecord(FailureReason.EXCEPTION_DURING_PROCESSING, "A - B.mp3", "Destination already exists")
        )
        return report

    def test_summary(self, console, tmp_path):
        print_summary(console, self._report(tmp_path))
        text = output(console)
        assert "Attempted: 4" in text
        assert "Succeeded: 1" in text
        assert "Failed:    3" in text

    def test_dry_run_summary_header(self, console, tmp_path):
        print_summary(console, RunReport(root=tmp_path, dry_run=True))
        assert "dry run" in output(console)

    def test_error_log_grouped(self, console, tmp_path):
        print_error_log(console, self._report(tmp_path))
        lines = output(console).splitlines()
        assert lines[0].startswith(FailureReason.MISSING_SEPARATOR.label)
        assert lines[1].strip() == "NoDash.mp3"
        assert lines[2].strip() == "Other[1].mp3"
        assert lines[3].startswith(FailureReason.EXCEPTION_DURING_PROCESSING.label)
        assert lines[4].strip() == "A - B.mp3: Destination already exists"

    def test_empty_error_log(self, console, tmp_path):
        print_error_log(console, RunReport(root=tmp_path, dry_run=False))
        assert "No errors." in output(console)

    def test_census(self, console, tmp_path):
        print_census(console, tmp_path, FolderSummary(2, 5, 1, 3))
        text = output(console)
        assert "Hidden files" in text
        assert "5" in text

    def test_progress_lines(self, console, make_entry):
        entry = make_entry("Radiohead - Creep.mp3")
        move = MoveResult(destination=Path("/music/Radiohead/Radiohead - Creep.mp3"), moved=True)
        print_progress(console, False, entry, move, None)
        print_progress(console, True, entry, MoveResult(destination=move.destination), None)
        print_progress(console, False, make_entry("x.txt"), None,
                       DiagnosticRecord(FailureReason.UNSUPPORTED_EXTENSION, "x.txt"))
        lines = output(console).splitlines()
        assert lines[0] == "✔ Moved: Radiohead - Creep.mp3 → Radiohead/Radiohead - Creep.mp3"
        assert lines[1] == "[DRY RUN] Would move: Radiohead - Creep.mp3 → Radiohead/Radiohead - Creep.mp3"
        assert lines[2].startswith("⚠ Skipped: x.txt")
