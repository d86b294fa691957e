"""Tests for OpenRouterService against a mocked HTTP transport."""

from __future__ import annotations

import json

import httpx
import pytest

from todotxt_cli.core.parser import parse_line
from todotxt_cli.models.config_models import AIConfig, RetryConfig
from todotxt_cli.services.ai.openrouter import (
    OpenRouterService,
    format_error_message,
    get_http_error_message,
)


def make_config(**overrides) -> AIConfig:
    data = {
        "api_key": "sk-test",
        "endpoint": "https://ai.example.com/api/v1",
        "retry": RetryConfig(max_retries=1, initial_delay_ms=0),
    }
    data.update(overrides)
    return AIConfig(**data)


def reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class Recorder:
    """MockTransport handler that returns queued responses and keeps requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def service_for(recorder: Recorder, **overrides) -> OpenRouterService:
    return OpenRouterService(make_config(**overrides), transport=httpx.MockTransport(recorder))


class TestErrorMessages:
    @pytest.mark.parametrize(
        "status,message",
        [
            (401, "Unauthorized: Invalid API key"),
            (429, "Rate limit exceeded: Too many requests"),
            (503, "Server error: 503"),
            (404, "Client error: 404"),
        ],
    )
    def test_http_messages(self, status, message):
        assert get_http_error_message(status) == message

    def test_timeout(self):
        assert format_error_message(httpx.ReadTimeout("slow")) == "Request timed out"

    def test_network(self):
        assert format_error_message(httpx.ConnectError("refused")) == "Network error: refused"


class TestConvert:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        recorder = Recorder(reply("2026-01-15 Buy milk @home\n\n2026-01-15 Call mom"))
        async with service_for(recorder) as ai:
            result = await ai.convert_to_todotxt("buy milk, call mom", "2026-01-15")

        assert result.success is True
        assert result.lines == ["2026-01-15 Buy milk @home", "2026-01-15 Call mom"]

        request = recorder.requests[0]
        assert str(request.url) == "https://ai.example.com/api/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body["model"] == "anthropic/claude-3.5-haiku"
        assert body["messages"][0]["role"] == "system"
        assert body["messages"][1] == {"role": "user", "content": "buy milk, call mom"}

    @pytest.mark.asyncio
    async def test_unauthorized_not_retried(self):
        recorder = Recorder(httpx.Response(401))
        async with service_for(recorder) as ai:
            result = await ai.convert_to_todotxt("x", "2026-01-15")

        assert result.success is False
        assert result.error == "Unauthorized: Invalid API key"
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_server_error_retried(self):
        recorder = Recorder(httpx.Response(502), reply("2026-01-15 a"))
        async with service_for(recorder) as ai:
            result = await ai.convert_to_todotxt("x", "2026-01-15")

        assert result.lines == ["2026-01-15 a"]
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_network_error(self):
        recorder = Recorder(httpx.ConnectError("refused"), httpx.ConnectError("refused"))
        async with service_for(recorder) as ai:
            result = await ai.convert_to_todotxt("x", "2026-01-15")

        assert result.success is False
        assert result.error.startswith("Network error")

    @pytest.mark.asyncio
    async def test_invalid_response(self):
        recorder = Recorder(httpx.Response(200, json={"choices": []}))
        async with service_for(recorder) as ai:
            result = await ai.convert_to_todotxt("x", "2026-01-15")

        assert result.success is False
        assert result.error == "Invalid response format from API"


class TestEdit:
    @pytest.mark.asyncio
    async def test_edit_single(self):
        recorder = Recorder(reply("  (A) Call mom due:2026-01-16  \n"))
        async with service_for(recorder) as ai:
            result = await ai.edit_todo(parse_line("Call mom"), "urgent, tomorrow", "2026-01-15")

        assert result.success is True
        assert result.line == "(A) Call mom due:2026-01-16"

    @pytest.mark.asyncio
    async def test_bulk_edit(self):
        recorder = Recorder(reply("a @home\nb @home"))
        async with service_for(recorder) as ai:
            result = await ai.bulk_edit_todos([parse_line("a"), parse_line("b")], "add @home", "2026-01-15")

        assert result.lines == ["a @home", "b @home"]

    @pytest.mark.asyncio
    async def test_bulk_edit_line_mismatch(self):
        recorder = Recorder(reply("a @home"))
        async with service_for(recorder) as ai:
            result = await ai.bulk_edit_todos([parse_line("a"), parse_line("b")], "add @home", "2026-01-15")

        assert result.success is False
        assert result.error == "Line count mismatch: expected 2, got 1"


class TestDecompose:
    @pytest.mark.asyncio
    async def test_decompose(self):
        recorder = Recorder(reply("1. Book flights\n2. Pack bags"))
        async with service_for(recorder) as ai:
            result = await ai.decompose_task(parse_line("Plan trip +Travel"), "2026-01-15")

        assert result.lines == ["Book flights", "Pack bags"]
        prompt = json.loads(recorder.requests[0].content)["messages"][0]["content"]
        assert "+Travel" in prompt
