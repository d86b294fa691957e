"""Tests for command_wrapper."""

from __future__ import annotations

import pytest
import typer

from todotxt_cli.commands.decorators import AppError, command_wrapper
from todotxt_cli.utils.exit_codes import ERROR_GENERAL, ERROR_NOT_FOUND


class TestCommandWrapper:
    def test_returns_result(self):
        @command_wrapper
        def ok():
            return 42

        assert ok() == 42

    def test_runs_coroutines(self):
        @command_wrapper
        async def ok_async(value):
            return value * 2

        assert ok_async(21) == 42

    def test_app_error_exit_code(self, capsys):
        @command_wrapper
        def missing():
            raise AppError("Task not found", ERROR_NOT_FOUND)

        with pytest.raises(typer.Exit) as exc_info:
            missing()
        assert exc_info.value.exit_code == ERROR_NOT_FOUND
        assert "Task not found" in capsys.readouterr().out

    def test_unexpected_error(self, capsys):
        @command_wrapper
        def broken():
            raise RuntimeError("boom")

        with pytest.raises(typer.Exit) as exc_info:
            broken()
        assert exc_info.value.exit_code == ERROR_GENERAL
        assert "An unexpected error occurred: boom" in capsys.readouterr().out

    def test_exit_passes_through(self):
        @command_wrapper
        def stop():
            raise typer.Exit(code=3)

        with pytest.raises(typer.Exit) as exc_info:
            stop()
        assert exc_info.value.exit_code == 3

    def test_keeps_name(self):
        @command_wrapper()
        def named():
            pass

        assert named.__name__ == "named"
