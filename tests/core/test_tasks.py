"""Tests for task mutation operations."""

from __future__ import annotations

from datetime import date

from todotxt_cli.core.parser import parse_all, parse_line
from todotxt_cli.core.tasks import (
    create_and_append_task,
    create_task,
    delete_and_remove_task,
    delete_task,
    edit_and_update_task,
    edit_task,
    remove_from_list,
    toggle_at_index,
    toggle_completion,
)
from todotxt_cli.models.task import Task, TaskUpdate

TODAY = date(2026, 1, 15)


# ---------------------------------------------------------------------------
# toggle_completion
# ---------------------------------------------------------------------------


class TestToggleCompletion:
    def test_complete_archives_priority(self):
        result = toggle_completion(Task(priority="A", description="Call mom"), TODAY)
        done = result.original_task

        assert done.completed is True
        assert done.priority is None
        assert done.tags["pri"] == "A"
        assert done.completion_date == "2026-01-15"
        assert done.raw == "x 2026-01-15 Call mom pri:A"
        assert result.recurring_task is None

    def test_complete_keeps_creation_date(self):
        done = toggle_completion(parse_line("(A) 2026-01-01 Call mom"), TODAY).original_task
        assert done.raw == "x 2026-01-15 2026-01-01 Call mom pri:A"

    def test_complete_without_priority(self):
        done = toggle_completion(parse_line("Call mom"), TODAY).original_task
        assert done.tags == {}
        assert done.raw == "x 2026-01-15 Call mom"

    def test_reopen_restores_priority(self):
        task = parse_line("x 2026-01-15 2026-01-01 Call mom pri:A")
        reopened = toggle_completion(task, TODAY).original_task

        assert reopened.completed is False
        assert reopened.completion_date is None
        assert reopened.priority == "A"
        assert "pri" not in reopened.tags
        assert reopened.raw == "(A) 2026-01-01 Call mom"

    def test_reopen_with_invalid_archived_priority(self):
        reopened = toggle_completion(parse_line("x 2026-01-15 Call mom pri:zz"), TODAY).original_task
        assert reopened.priority is None
        assert reopened.description == "Call mom"

    def test_round_trip_restores_line(self):
        task = parse_line("(B) 2026-01-01 Pay bills +Home due:2026-01-20")
        done = toggle_completion(task, TODAY).original_task
        again = toggle_completion(done, TODAY).original_task
        assert again.raw == task.raw

    def test_recurring_task_generated(self):
        result = toggle_completion(parse_line("Water plants rec:1d due:2026-01-15"), TODAY)
        assert result.recurring_task is not None
        assert result.recurring_task.raw == "2026-01-15 Water plants rec:1d due:2026-01-16"

    def test_input_not_mutated(self):
        task = parse_line("(A) Call mom")
        toggle_completion(task, TODAY)
        assert task.priority == "A"
        assert task.completed is False

    def test_uses_clock_when_today_omitted(self, frozen_today):
        done = toggle_completion(parse_line("Call mom")).original_task
        assert done.completion_date == frozen_today.isoformat()


# ---------------------------------------------------------------------------
# create_task
# ---------------------------------------------------------------------------


class TestCreateTask:
    def test_defaults_threshold_to_today(self):
        task = create_task("Buy milk +Grocery", today=TODAY)

        assert task.completed is False
        assert task.creation_date == "2026-01-15"
        assert task.tags == {"t": "2026-01-15"}
        assert task.projects == ["Grocery"]
        assert task.raw == "2026-01-15 Buy milk +Grocery t:2026-01-15"

    def test_due_and_threshold(self):
        task = create_task("Report @work", due_date="2026-01-20", threshold_date="2026-01-18", today=TODAY)
        assert task.raw == "2026-01-15 Report @work due:2026-01-20 t:2026-01-18"
        assert task.contexts == ["work"]

    def test_priority(self):
        assert create_task("Report", priority="B", today=TODAY).raw.startswith("(B) 2026-01-15 ")

    def test_invalid_priority_dropped(self):
        assert create_task("Report", priority="b", today=TODAY).priority is None

    def test_description_is_trimmed(self):
        assert create_task("  Report  ", today=TODAY).description == "Report t:2026-01-15"

    def test_round_trips_through_parser(self):
        task = create_task("Report +Work due:x", due_date="2026-01-20", today=TODAY)
        assert parse_line(task.raw).tags == task.tags


# ---------------------------------------------------------------------------
# edit_task
# ---------------------------------------------------------------------------


class TestEditTask:
    TASK = parse_line("(A) Call mom due:2026-01-10 +Family")

    def test_new_description_keeps_carried_tags(self):
        edited = edit_task(self.TASK, {"description": "Call dad"})
        assert edited.description == "Call dad due:2026-01-10"
        assert edited.tags == {"due": "2026-01-10"}
        assert edited.projects == []
        assert edited.priority == "A"

    def test_new_description_overrides_tag_value(self):
        edited = edit_task(self.TASK, {"description": "Call dad due:2026-02-01"})
        assert edited.tags == {"due": "2026-02-01"}
        assert edited.description == "Call dad due:2026-02-01"

    def test_clear_priority(self):
        edited = edit_task(self.TASK, TaskUpdate(priority=None))
        assert edited.priority is None
        assert edited.raw == "Call mom due:2026-01-10 +Family"

    def test_absent_fields_untouched(self):
        edited = edit_task(self.TASK, TaskUpdate())
        assert edited.priority == "A"
        assert edited.raw == "(A) Call mom due:2026-01-10 +Family"

    def test_set_due_date(self):
        edited = edit_task(self.TASK, {"due_date": "2026-03-01"})
        assert edited.tags["due"] == "2026-03-01"
        assert edited.description == "Call mom +Family due:2026-03-01"

    def test_remove_due_date(self):
        edited = edit_task(self.TASK, {"due_date": ""})
        assert "due" not in edited.tags
        assert edited.description == "Call mom +Family"

    def test_set_threshold(self):
        edited = edit_task(self.TASK, {"threshold_date": "2026-01-05"})
        assert edited.tags == {"due": "2026-01-10", "t": "2026-01-05"}

    def test_completion_state_kept(self):
        done = parse_line("x 2026-01-12 Call mom")
        edited = edit_task(done, {"description": "Call dad"})
        assert edited.raw == "x 2026-01-12 Call dad"


# ---------------------------------------------------------------------------
# list and document helpers
# ---------------------------------------------------------------------------


class TestListHelpers:
    def test_remove_from_list(self):
        tasks = parse_all("a\nb\nc")
        assert [t.description for t in remove_from_list(tasks, 1)] == ["a", "c"]
        assert len(tasks) == 3

    def test_remove_out_of_range(self):
        tasks = parse_all("a\nb")
        assert remove_from_list(tasks, 5) == tasks
        assert delete_task(tasks, -1) == tasks


class TestDocumentHelpers:
    def test_toggle_at_index_appends_recurrence(self):
        text = "a\nb rec:1d due:2026-01-15"
        assert toggle_at_index(text, 1, TODAY) == (
            "a\nx 2026-01-15 b rec:1d due:2026-01-15\n2026-01-15 b rec:1d due:2026-01-16"
        )

    def test_toggle_at_index_out_of_range(self):
        text = "a\nb"
        assert toggle_at_index(text, 2, TODAY) is text

    def test_create_and_append(self):
        assert create_and_append_task("a", "b", today=TODAY) == "a\n2026-01-15 b t:2026-01-15"

    def test_create_and_append_to_empty(self):
        assert create_and_append_task("", "b", today=TODAY) == "2026-01-15 b t:2026-01-15"

    def test_edit_and_update(self):
        assert edit_and_update_task("a\nb", 0, {"priority": "C"}) == "(C) a\nb"

    def test_edit_and_update_out_of_range(self):
        text = "a"
        assert edit_and_update_task(text, 3, {"priority": "C"}) is text

    def test_delete_and_remove(self):
        assert delete_and_remove_task("a\n\nb\nc", 1) == "a\nc"

    def test_delete_out_of_range(self):
        text = "a"
        assert delete_and_remove_task(text, 1) is text
