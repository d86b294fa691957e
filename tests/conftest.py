"""Shared test fixtures and configuration.

Keeps tests away from the real config, data and log directories and pins
"today" for the date dependent mutation helpers.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from todotxt_cli.core.dates import set_today_provider

TODAY = date(2026, 1, 15)


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    """Send log output to a temporary directory."""
    from todotxt_cli.utils.logger import reset_logger

    reset_logger()
    with patch("todotxt_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    reset_logger()


@pytest.fixture()
def frozen_today():
    """Pin the engine clock to TODAY."""
    set_today_provider(lambda: TODAY)
    yield TODAY
    set_today_provider(None)


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    clears the lru_cache so each test gets a fresh service instance.
    """
    from todotxt_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "todotxt_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "todotxt_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture()
def todo_file(tmp_path):
    """A todo.txt path inside tmp_path; write to it to seed tasks."""
    return tmp_path / "todo.txt"
