"""Tests for terminal display."""

from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from devpurge import display
from devpurge.display import parse_selection, shorten_path
from devpurge.models import DeletionResult, ScanReport, ScanResult


@pytest.fixture
def captured():
    """Swap the display console for one writing into a buffer."""
    buffer = StringIO()
    test_console = Console(file=buffer, width=200, force_terminal=False)
    with patch.object(display, "console", test_console):
        yield buffer


def _result(path, size, partial=False):
    return ScanResult(
        path=path,
        folder_type="node_modules",
        project_type="JavaScript/TypeScript",
        size_bytes=size,
        modified_time=0.0,
        partial=partial,
    )


class TestParseSelection:
    def test_all_by_default(self):
        assert parse_selection("", 3) == [0, 1, 2]
        assert parse_selection("all", 3) == [0, 1, 2]

    def test_none(self):
        assert parse_selection("none", 3) == []

    def test_numbers_and_ranges(self):
        assert parse_selection("1, 3,5-6", 6) == [0, 2, 4, 5]

    def test_duplicates_collapse(self):
        assert parse_selection("2,2,1-2", 3) == [0, 1]

    @pytest.mark.parametrize("text", ["0", "4", "2-9", "x", "3-1"])
    def test_rejects_bad_input(self, text):
        with pytest.raises(ValueError):
            parse_selection(text, 3)


class TestShortenPath:
    def test_short_path_unchanged(self):
        assert shorten_path("/a/b", 50) == "/a/b"

    def test_long_path_keeps_tail(self):
        path = "/very/long/" + "x" * 100 + "/node_modules"
        short = shorten_path(path, 50)
        assert len(short) == 50
        assert short.startswith("...")
        assert short.endswith("/node_modules")


class TestShowResults:
    def test_lists_results_and_total(self, captured):
        report = ScanReport(
            root="/r",
            results=[_result("/r/a/node_modules", 2 * 1024**2), _result("/r/b/node_modules", 1024)],
            cache_hits=1,
        )

        display.show_results(report)

        output = captured.getvalue()
        assert "/r/a/node_modules" in output
        assert "2.0 MB" in output
        assert "Found 2 folders, 1 from cache" in output

    def test_marks_partial_sizes(self, captured):
        report = ScanReport(root="/r", results=[_result("/r/a/node_modules", 1024, partial=True)])
        display.show_results(report)
        assert ">=1.0 KB" in captured.getvalue()

    def test_paths_with_brackets(self, captured):
        report = ScanReport(root="/r", results=[_result("/r/[weird]/node_modules", 10)])
        display.show_results(report)
        assert "[weird]" in captured.getvalue()


class TestShowWarnings:
    def test_truncates_long_lists(self, captured):
        display.show_warnings([f"warning {i}" for i in range(15)], limit=10)
        output = captured.getvalue()
        assert "15 warning(s)" in output
        assert "warning 9" in output
        assert "warning 10" not in output
        assert "and 5 more" in output

    def test_nothing_for_no_warnings(self, captured):
        display.show_warnings([])
        assert captured.getvalue() == ""


class TestPrompts:
    def test_prompt_selection_retries_until_valid(self, captured):
        results = [_result("/a/node_modules", 1), _result("/b/node_modules", 2)]
        with patch.object(display.Prompt, "ask", side_effect=["7", "2"]):
            assert display.prompt_selection(results) == [results[1]]
        assert "No folder numbered 7" in captured.getvalue()

    @pytest.mark.parametrize("answer,expected", [("yes", True), (" YES ", True), ("y", False)])
    def test_confirm_deletion_needs_yes(self, answer, expected):
        with patch.object(display.Prompt, "ask", return_value=answer):
            assert display.confirm_deletion(2) is expected


class TestDeletionOutput:
    def test_summary(self, captured):
        display.show_deletion_summary(
            [
                DeletionResult(path="/a", bytes_freed=1024**2),
                DeletionResult(path="/b", success=False, error="Permission denied"),
            ]
        )
        output = captured.getvalue()
        assert "Reclaimed space" in output
        assert "1.0 MB" in output
        assert "Failed: 1" in output

    def test_failed_result(self, captured):
        display.show_deletion_result(
            DeletionResult(path="/b", success=False, error="Permission denied")
        )
        assert "Permission denied" in captured.getvalue()
