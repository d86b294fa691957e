"""Tests for the task commands (list, add, done, edit, rm, focus, projects, contexts)."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from todotxt_cli.main import app

runner = CliRunner()

SAMPLE = "\n".join(
    [
        "(B) 2026-01-01 Buy milk +Grocery @store due:2026-01-10",
        "Water plants +Home rec:1w due:2026-01-15",
        "(A) Write report +Work @office t:2026-02-01",
        "x 2026-01-12 Call mom @phone",
    ]
)


@pytest.fixture()
def seeded(tmp_config, frozen_today, todo_file):
    todo_file.write_text(SAMPLE, encoding="utf-8")
    return todo_file


def invoke(todo_file, *args, **kwargs):
    return runner.invoke(app, [*args, "--file", str(todo_file)], **kwargs)


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestList:
    def test_default_sort_from_config(self, seeded):
        result = invoke(seeded, "list", "-o", "quiet")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "(A) Write report +Work @office t:2026-02-01",
            "(B) 2026-01-01 Buy milk +Grocery @store due:2026-01-10",
            "Water plants +Home rec:1w due:2026-01-15",
            "x 2026-01-12 Call mom @phone",
        ]

    def test_file_order(self, seeded):
        result = invoke(seeded, "list", "-o", "quiet", "--sort", "default")
        assert result.output.splitlines() == SAMPLE.split("\n")

    def test_json_keeps_file_numbers(self, seeded):
        result = invoke(seeded, "list", "-o", "json", "--status", "active", "--sort", "default")
        data = json.loads(result.output)

        assert [item["index"] for item in data] == [1, 2, 3]
        assert data[0]["due_status"] == "overdue"
        assert data[1]["due_status"] == "today"
        assert data[2]["threshold_status"] == "not_ready"

    def test_search(self, seeded):
        result = invoke(seeded, "list", "-o", "quiet", "-q", "store|phone -milk")
        assert result.output.splitlines() == ["x 2026-01-12 Call mom @phone"]

    def test_priority_filter(self, seeded):
        result = invoke(seeded, "list", "-o", "quiet", "-p", "b")
        assert result.output.splitlines() == [SAMPLE.split("\n")[0]]

    def test_group_by_project(self, seeded):
        result = invoke(seeded, "list", "-o", "json", "-g", "project", "--sort", "default")
        data = json.loads(result.output)
        assert list(data) == ["Grocery", "Home", "Work", "Unclassified"]
        assert data["Unclassified"][0]["index"] == 4

    def test_pretty(self, seeded):
        result = invoke(seeded, "list")
        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "3 active, 1 completed" in result.output

    def test_empty(self, tmp_config, todo_file):
        result = invoke(todo_file, "list")
        assert result.exit_code == 0
        assert "No tasks found" in result.output

    def test_invalid_status(self, seeded):
        result = invoke(seeded, "list", "--status", "later")
        assert result.exit_code == 2

    def test_unknown_preset(self, seeded):
        result = invoke(seeded, "list", "--preset", "nope")
        assert result.exit_code == 5


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add(self, tmp_config, frozen_today, todo_file):
        result = invoke(todo_file, "add", "Buy", "milk", "+Grocery", "-p", "a", "-d", "2026-01-20")

        assert result.exit_code == 0
        assert todo_file.read_text() == "(A) 2026-01-15 Buy milk +Grocery due:2026-01-20 t:2026-01-15"

    def test_add_appends(self, seeded):
        invoke(seeded, "add", "New task")
        assert seeded.read_text().split("\n")[-1] == "2026-01-15 New task t:2026-01-15"

    def test_placeholders(self, tmp_config, frozen_today, todo_file):
        invoke(todo_file, "add", "Call due:{{tomorrow}}")
        assert todo_file.read_text() == "2026-01-15 Call due:2026-01-16 t:2026-01-15"

    def test_invalid_due(self, tmp_config, frozen_today, todo_file):
        result = invoke(todo_file, "add", "Call", "-d", "2026-02-30")
        assert result.exit_code == 2
        assert not todo_file.exists()

    def test_invalid_priority(self, tmp_config, frozen_today, todo_file):
        result = invoke(todo_file, "add", "Call", "-p", "AA")
        assert result.exit_code == 2

    def test_blank_description(self, tmp_config, frozen_today, todo_file):
        result = invoke(todo_file, "add", " ")
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# done / edit / rm
# ---------------------------------------------------------------------------


class TestDone:
    def test_complete(self, seeded):
        result = invoke(seeded, "done", "1")

        assert result.exit_code == 0
        assert seeded.read_text().split("\n")[0] == (
            "x 2026-01-15 2026-01-01 Buy milk +Grocery @store due:2026-01-10 pri:B"
        )

    def test_reopen(self, seeded):
        invoke(seeded, "done", "4")
        assert seeded.read_text().split("\n")[3] == "Call mom @phone"

    def test_recurring(self, seeded):
        result = invoke(seeded, "done", "2")

        lines = seeded.read_text().split("\n")
        assert len(lines) == 5
        assert lines[-1] == "2026-01-15 Water plants +Home rec:1w due:2026-01-22"
        assert "Next occurrence" in result.output

    def test_several_numbers(self, seeded):
        invoke(seeded, "done", "1", "3", "1")
        lines = seeded.read_text().split("\n")
        assert lines[0].startswith("x ")
        assert lines[2].startswith("x ")

    def test_unknown_number(self, seeded):
        result = invoke(seeded, "done", "9")
        assert result.exit_code == 5
        assert seeded.read_text() == SAMPLE


class TestEdit:
    def test_priority(self, seeded):
        invoke(seeded, "edit", "3", "-p", "c")
        assert seeded.read_text().split("\n")[2] == "(C) Write report +Work @office t:2026-02-01"

    def test_clear_priority_and_due(self, seeded):
        invoke(seeded, "edit", "1", "-p", "", "-d", "")
        assert seeded.read_text().split("\n")[0] == "2026-01-01 Buy milk +Grocery @store"

    def test_description(self, seeded):
        invoke(seeded, "edit", "1", "-m", "Buy oat milk +Grocery")
        assert seeded.read_text().split("\n")[0] == "(B) 2026-01-01 Buy oat milk +Grocery due:2026-01-10"

    def test_nothing_to_change(self, seeded):
        assert invoke(seeded, "edit", "1").exit_code == 2

    def test_invalid_date(self, seeded):
        assert invoke(seeded, "edit", "1", "-t", "soon").exit_code == 2
        assert seeded.read_text() == SAMPLE


class TestRemove:
    def test_remove(self, seeded):
        result = invoke(seeded, "rm", "2", "--yes")
        assert result.exit_code == 0
        assert "Water plants" not in seeded.read_text()

    def test_cancel(self, seeded):
        result = invoke(seeded, "rm", "2", input="n\n")
        assert "Cancelled" in result.output
        assert seeded.read_text() == SAMPLE


# ---------------------------------------------------------------------------
# focus / projects / contexts
# ---------------------------------------------------------------------------


class TestViews:
    def test_focus(self, seeded):
        result = invoke(seeded, "focus", "-o", "quiet")
        assert result.output.splitlines() == [
            "(B) 2026-01-01 Buy milk +Grocery @store due:2026-01-10",
            "Water plants +Home rec:1w due:2026-01-15",
        ]

    def test_projects(self, seeded):
        result = invoke(seeded, "projects", "-o", "json")
        assert json.loads(result.output) == ["Grocery", "Home", "Work"]

    def test_contexts_pretty(self, seeded):
        result = invoke(seeded, "contexts")
        assert result.output.splitlines() == ["@office", "@phone", "@store"]


# ---------------------------------------------------------------------------
# file selection
# ---------------------------------------------------------------------------


class TestFileSelection:
    def test_warns_for_unknown_extension(self, tmp_config, frozen_today, tmp_path):
        notes = tmp_path / "notes.md"
        result = runner.invoke(app, ["add", "Call mom", "--file", str(notes)])

        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert notes.read_text() == "2026-01-15 Call mom t:2026-01-15"

    def test_no_warning_for_todotxt_file(self, seeded):
        result = invoke(seeded, "list", "-o", "quiet")
        assert "Warning:" not in result.output

    def test_listed_path_is_todotxt(self, tmp_config, frozen_today, tmp_path):
        notes = tmp_path / "notes.md"
        tmp_config.set("todo_paths", [str(notes)])
        result = runner.invoke(app, ["add", "Call mom", "--file", str(notes)])
        assert "Warning:" not in result.output
