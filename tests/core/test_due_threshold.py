"""Tests for due and threshold date status."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from todotxt_cli.core.due import get_due_date, get_due_date_status, get_task_due_status
from todotxt_cli.core.parser import parse_line
from todotxt_cli.core.threshold import (
    get_task_threshold_status,
    get_threshold_date,
    get_threshold_date_status,
    is_threshold_ready,
)

TODAY = date(2026, 1, 10)


class TestDueDate:
    def test_overdue_example(self):
        assert get_due_date_status(date(2026, 1, 1), date(2026, 1, 10)) == "overdue"

    def test_same_day_is_today_regardless_of_time(self):
        assert get_due_date_status(datetime(2026, 1, 10, 0, 0), datetime(2026, 1, 10, 23, 59)) == "today"

    def test_future(self):
        assert get_due_date_status(date(2026, 1, 11), TODAY) == "future"

    @pytest.mark.parametrize("offset", range(-3, 4))
    def test_statuses_partition_days(self, offset):
        status = get_due_date_status(TODAY + timedelta(days=offset), TODAY)
        expected = "overdue" if offset < 0 else "today" if offset == 0 else "future"
        assert status == expected

    def test_get_due_date(self):
        assert get_due_date(parse_line("a due:2026-01-12")) == date(2026, 1, 12)

    @pytest.mark.parametrize("line", ["a", "a due:2026-02-30", "a due:tomorrow"])
    def test_missing_or_invalid_due(self, line):
        task = parse_line(line)
        assert get_due_date(task) is None
        assert get_task_due_status(task, TODAY) is None


class TestThreshold:
    def test_future_threshold_is_not_ready(self):
        assert get_threshold_date_status(date(2026, 1, 11), TODAY) == "not_ready"

    def test_threshold_today_is_ready(self):
        assert get_threshold_date_status(TODAY, TODAY) == "ready"

    def test_past_threshold_is_ready(self):
        assert get_threshold_date_status(date(2025, 12, 31), TODAY) == "ready"

    def test_get_threshold_date(self):
        assert get_threshold_date(parse_line("a t:2026-01-12")) == date(2026, 1, 12)

    def test_task_status(self):
        assert get_task_threshold_status(parse_line("a t:2026-01-12"), TODAY) == "not_ready"
        assert get_task_threshold_status(parse_line("a"), TODAY) is None

    def test_is_threshold_ready(self):
        assert is_threshold_ready(parse_line("a"), TODAY) is True
        assert is_threshold_ready(parse_line("a t:2026-99-99"), TODAY) is True
        assert is_threshold_ready(parse_line("a t:2026-01-10"), TODAY) is True
        assert is_threshold_ready(parse_line("a t:2026-01-11"), TODAY) is False
