"""OpenRouter chat completion client for AI task entry."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field

from todotxt_cli.models.config_models import AIConfig
from todotxt_cli.models.task import Task
from todotxt_cli.utils.logger import get_logger

from .prompts import (
    build_bulk_edit_prompt,
    build_decompose_prompt,
    build_edit_prompt,
    build_system_prompt,
    parse_decompose_response,
    split_response_lines,
)
from .retry import ApiError, with_retry

REFERER = "https://github.com/todotxt-cli"
TITLE = "todotxt-cli"
INVALID_RESPONSE = "Invalid response format from API"


class ConversionResult(BaseModel):
    success: bool
    lines: list[str] = Field(default_factory=list)
    error: str | None = None


class EditResult(BaseModel):
    success: bool
    line: str | None = None
    error: str | None = None


class BulkEditResult(BaseModel):
    success: bool
    lines: list[str] = Field(default_factory=list)
    error: str | None = None


class DecomposeResult(BaseModel):
    success: bool
    lines: list[str] = Field(default_factory=list)
    error: str | None = None


def get_http_error_message(status: int) -> str:
    """Human readable message for an HTTP error status."""
    if status == 401:
        return "Unauthorized: Invalid API key"
    if status == 429:
        return "Rate limit exceeded: Too many requests"
    if status >= 500:
        return f"Server error: {status}"
    if status >= 400:
        return f"Client error: {status}"
    return f"API error: {status}"


def format_error_message(error: BaseException) -> str:
    if isinstance(error, httpx.TimeoutException):
        return "Request timed out"
    if isinstance(error, httpx.TransportError):
        return f"Network error: {error}"
    return str(error) or type(error).__name__


class OpenRouterService:
    """Client for the OpenRouter chat completions API.

    Public methods never raise for API or network failures; they return a
    result model with ``success=False`` and a readable ``error`` instead.
    """

    def __init__(self, config: AIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> OpenRouterService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
            "HTTP-Referer": REFERER,
            "X-Title": TITLE,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.endpoint,
                timeout=self.config.timeout,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send *messages* and return the first choice's content.

        Raises:
            ApiError: On an HTTP error status, after retries
            ValueError: When the response has no message content
            httpx.TransportError: On network failure, after retries
        """
        client = self._get_client()
        payload = {"model": self.config.model, "messages": messages}

        async def call() -> httpx.Response:
            response = await client.post("/chat/completions", json=payload)
            if response.status_code >= 400:
                raise ApiError(response.status_code, get_http_error_message(response.status_code))
            return response

        response = await with_retry(call, self.config.retry)
        content = _first_content(response)
        if not content:
            raise ValueError(INVALID_RESPONSE)
        return content

    async def _run(self, operation: str, messages: list[dict[str, str]]) -> str | BaseException:
        logger = get_logger()
        logger.info("AI %s request (model=%s)", operation, self.config.model)
        try:
            return await self.complete(messages)
        except (ApiError, ValueError, httpx.HTTPError) as e:
            logger.error("AI %s failed: %s", operation, e)
            return e

    async def convert_to_todotxt(
        self, text: str, current_date: str, custom_contexts: dict[str, str] | None = None
    ) -> ConversionResult:
        """Turn free text into todo.txt lines."""
        system = build_system_prompt(current_date, custom_contexts or self.config.custom_contexts)
        content = await self._run(
            "convert",
            [{"role": "system", "content": system}, {"role": "user", "content": text}],
        )
        if isinstance(content, BaseException):
            return ConversionResult(success=False, error=format_error_message(content))
        return ConversionResult(success=True, lines=split_response_lines(content))

    async def edit_todo(
        self,
        task: Task,
        instruction: str,
        current_date: str,
        custom_contexts: dict[str, str] | None = None,
    ) -> EditResult:
        """Rewrite one task line following *instruction*."""
        prompt = build_edit_prompt(
            task, instruction, current_date, custom_contexts or self.config.custom_contexts
        )
        content = await self._run("edit", [{"role": "user", "content": prompt}])
        if isinstance(content, BaseException):
            return EditResult(success=False, error=format_error_message(content))
        return EditResult(success=True, line=content.strip())

    async def bulk_edit_todos(
        self,
        tasks: list[Task],
        instruction: str,
        current_date: str,
        custom_contexts: dict[str, str] | None = None,
    ) -> BulkEditResult:
        """Apply *instruction* to every task; the reply must have one line per task."""
        prompt = build_bulk_edit_prompt(
            tasks, instruction, current_date, custom_contexts or self.config.custom_contexts
        )
        content = await self._run("bulk edit", [{"role": "user", "content": prompt}])
        if isinstance(content, BaseException):
            return BulkEditResult(success=False, error=format_error_message(content))
        lines = split_response_lines(content)
        if len(lines) != len(tasks):
            return BulkEditResult(
                success=False,
                error=f"Line count mismatch: expected {len(tasks)}, got {len(lines)}",
            )
        return BulkEditResult(success=True, lines=lines)

    async def decompose_task(
        self, task: Task, current_date: str, custom_instruction: str | None = None
    ) -> DecomposeResult:
        """Ask for subtasks of *task*."""
        prompt = build_decompose_prompt(
            task.description or task.raw,
            current_date,
            custom_instruction,
            task.projects,
            task.contexts,
        )
        content = await self._run("decompose", [{"role": "user", "content": prompt}])
        if isinstance(content, BaseException):
            return DecomposeResult(success=False, error=format_error_message(content))
        return DecomposeResult(success=True, lines=parse_decompose_response(content))


def _first_content(response: httpx.Response) -> str | None:
    try:
        data: Any = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None
