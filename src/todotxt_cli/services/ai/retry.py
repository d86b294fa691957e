"""Retry with exponential backoff for AI requests."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from todotxt_cli.models.config_models import RetryConfig
from todotxt_cli.utils.logger import get_logger

T = TypeVar("T")


class ApiError(Exception):
    """Non-success HTTP response from the AI service."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status


def is_retryable_error(error: BaseException) -> bool:
    """Network failures, rate limiting (429) and server errors (5xx) are retried."""
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, ApiError):
        return error.status == 429 or 500 <= error.status < 600
    return False


def backoff_delay(config: RetryConfig, attempt: int) -> float:
    """Delay in seconds before retry number *attempt* (0-based)."""
    return config.initial_delay_ms * 2**attempt / 1000


async def with_retry(fn: Callable[[], Awaitable[T]], config: RetryConfig) -> T:
    """Await ``fn()``, retrying retryable failures up to ``config.max_retries`` times."""
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as e:
            if not config.enabled or not is_retryable_error(e):
                raise
            if attempt >= config.max_retries:
                raise
            delay = backoff_delay(config, attempt)
            get_logger().warning(
                "AI request failed (%s), retry %d/%d in %.1fs",
                e,
                attempt + 1,
                config.max_retries,
                delay,
            )
            await asyncio.sleep(delay)
            attempt += 1
