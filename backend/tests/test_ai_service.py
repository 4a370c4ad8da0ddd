"""Tests for the Claude AI gateway."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import anthropic
import httpx
import pytest

from app.core.ai_service import (
    MAX_TOKENS,
    AIErrorType,
    AIService,
    TokenUsage,
    classify_error,
)
from app.utils.prompt import FILE_CONTEXT_CHARS, GENERATE_SYSTEM_PROMPT, build_files_context

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def make_message(text, input_tokens, output_tokens):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def _status_error(status_code: int) -> anthropic.APIStatusError:
    response = httpx.Response(status_code, request=_REQUEST, json={"error": {"message": "nope"}})
    return anthropic.APIStatusError("nope", response=response, body=None)


class TestTokenUsage:
    """Tests for TokenUsage."""

    def test_total(self):
        usage = TokenUsage(input_tokens=3, output_tokens=4)
        assert usage.to_dict() == {"input_tokens": 3, "output_tokens": 4, "total_tokens": 7}


class TestClassifyError:
    """Provider exceptions map to error types."""

    @pytest.mark.parametrize(
        "status_code, expected",
        [
            (401, AIErrorType.UNAUTHENTICATED),
            (403, AIErrorType.UNAUTHENTICATED),
            (429, AIErrorType.RATE_LIMITED),
            (400, AIErrorType.INVALID_REQUEST),
            (413, AIErrorType.INVALID_REQUEST),
            (500, AIErrorType.UNKNOWN),
            (529, AIErrorType.UNKNOWN),
        ],
    )
    def test_status_codes(self, status_code, expected):
        assert classify_error(_status_error(status_code)) == expected

    def test_timeouts(self):
        assert classify_error(anthropic.APITimeoutError(request=_REQUEST)) == AIErrorType.TIMEOUT
        assert classify_error(asyncio.TimeoutError()) == AIErrorType.TIMEOUT

    def test_other_exceptions(self):
        assert classify_error(RuntimeError("socket closed")) == AIErrorType.UNKNOWN


class TestAIServiceConfiguration:
    """Configured vs. not configured."""

    def test_no_key_is_not_configured(self, unconfigured_ai_service):
        assert unconfigured_ai_service.is_configured() is False

    def test_no_client_built_without_key(self):
        with patch("app.core.ai_service.anthropic.AsyncAnthropic") as client_cls:
            AIService(api_key="")
        client_cls.assert_not_called()

    def test_client_built_without_sdk_retries(self):
        with patch("app.core.ai_service.anthropic.AsyncAnthropic") as client_cls:
            service = AIService(api_key="sk-test", timeout=12)
        client_cls.assert_called_once_with(api_key="sk-test", timeout=12, max_retries=0)
        assert service.is_configured() is True

    @pytest.mark.asyncio
    async def test_not_configured_fails_fast(self, unconfigured_ai_service):
        result = await unconfigured_ai_service.generate_code("make a button")

        assert result.success is False
        assert result.error_type == AIErrorType.NOT_CONFIGURED
        assert "CLAUDE_API_KEY" in result.error

    def test_usage_stats(self, ai_service, unconfigured_ai_service):
        stats = ai_service.get_usage_stats()
        assert stats["configured"] is True
        assert stats["model"] == "claude-test"
        assert len(stats["features"]) == 4
        assert unconfigured_ai_service.get_usage_stats()["configured"] is False


class TestAIServiceCalls:
    """Capability calls against a mocked client."""

    @pytest.mark.asyncio
    async def test_generate_code_success(self, ai_service, mock_anthropic_client):
        mock_anthropic_client.messages.create.return_value = make_message("<App/>", 100, 50)

        result = await ai_service.generate_code("make a button", "Project: Demo")

        assert result.success is True
        assert result.content == "<App/>"
        assert result.usage.total_tokens == 150
        assert result.model == "claude-test"

        kwargs = mock_anthropic_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == MAX_TOKENS["generate"] == 4000
        assert kwargs["system"] == GENERATE_SYSTEM_PROMPT
        prompt = kwargs["messages"][0]["content"]
        assert "Project Context: Project: Demo" in prompt
        assert "User Request: make a button" in prompt

    @pytest.mark.asyncio
    async def test_only_text_blocks_are_returned(self, ai_service, mock_anthropic_client):
        mock_anthropic_client.messages.create.return_value = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="part one "),
                SimpleNamespace(type="tool_use", name="noop"),
                SimpleNamespace(type="text", text="part two"),
            ],
            usage=SimpleNamespace(input_tokens=1, output_tokens=1),
        )

        result = await ai_service.explain_code("x = 1", "python")

        assert result.content == "part one part two"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, args, capability",
        [
            ("explain_code", ("let a = 1;", "javascript"), "explain"),
            ("suggest_improvements", ("let a = 1;", "hot path"), "improve"),
            ("generate_tests", ("let a = 1;", "vitest"), "tests"),
        ],
    )
    async def test_token_budgets(self, ai_service, mock_anthropic_client, method, args, capability):
        await getattr(ai_service, method)(*args)

        kwargs = mock_anthropic_client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == MAX_TOKENS[capability]
        assert "system" not in kwargs
        assert "let a = 1;" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_rate_limit_is_reported(self, ai_service, mock_anthropic_client):
        mock_anthropic_client.messages.create.side_effect = _status_error(429)

        result = await ai_service.generate_tests("code")

        assert result.success is False
        assert result.error_type == AIErrorType.RATE_LIMITED
        assert result.error == "Rate limit exceeded - please try again in a moment"
        assert mock_anthropic_client.messages.create.await_count == 1

    @pytest.mark.asyncio
    async def test_invalid_key_is_reported(self, ai_service, mock_anthropic_client):
        mock_anthropic_client.messages.create.side_effect = _status_error(401)

        result = await ai_service.explain_code("code")

        assert result.error_type == AIErrorType.UNAUTHENTICATED
        assert "Invalid API key" in result.error

    @pytest.mark.asyncio
    async def test_slow_provider_times_out(self, mock_anthropic_client):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        mock_anthropic_client.messages.create = AsyncMock(side_effect=slow)
        service = AIService(timeout=0.01, client=mock_anthropic_client)

        result = await service.suggest_improvements("code")

        assert result.success is False
        assert result.error_type == AIErrorType.TIMEOUT


class TestPromptAssembly:
    """File context included in generation prompts."""

    def test_files_are_labelled_and_truncated(self):
        files = [
            SimpleNamespace(file_path="src/App.tsx", content="a" * (FILE_CONTEXT_CHARS + 10)),
            SimpleNamespace(file_path="src/index.css", content="body {}"),
        ]

        context = build_files_context(files)

        assert "--- src/App.tsx ---" in context
        assert "a" * FILE_CONTEXT_CHARS + "\n... (truncated)" in context
        assert "a" * (FILE_CONTEXT_CHARS + 1) not in context
        assert "body {}" in context

    def test_no_files_no_section(self):
        assert build_files_context([]) == ""
