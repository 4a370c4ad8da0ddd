"""Claude API gateway: one provider call per capability, failures returned as values."""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

import anthropic

from app.utils.prompt import (
    GENERATE_SYSTEM_PROMPT,
    build_explain_prompt,
    build_generate_prompt,
    build_improve_prompt,
    build_tests_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_TIMEOUT = 60.0

MAX_TOKENS = {
    "generate": 4000,
    "explain": 1500,
    "improve": 2000,
    "tests": 3000,
}

FEATURES = [
    "Code generation",
    "Code explanation",
    "Improvement suggestions",
    "Test generation",
]


class AIErrorType(str, enum.Enum):
    """Provider failure classes surfaced to callers."""
    NOT_CONFIGURED = "not_configured"
    UNAUTHENTICATED = "unauthenticated"
    RATE_LIMITED = "rate_limited"
    INVALID_REQUEST = "invalid_request"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


ERROR_MESSAGES = {
    AIErrorType.NOT_CONFIGURED: "AI service not configured - please add CLAUDE_API_KEY environment variable",
    AIErrorType.UNAUTHENTICATED: "Invalid API key - please check your CLAUDE_API_KEY environment variable",
    AIErrorType.RATE_LIMITED: "Rate limit exceeded - please try again in a moment",
    AIErrorType.INVALID_REQUEST: "Invalid request - the prompt might be too long or contain unsupported content",
    AIErrorType.TIMEOUT: "AI request timed out - please try again",
    AIErrorType.UNKNOWN: "AI provider request failed - please try again later",
}


@dataclass
class TokenUsage:
    """Token accounting for one provider call."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> Dict[str, int]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class AIResult:
    """Uniform outcome of a capability call."""
    success: bool
    content: Optional[str] = None
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[AIErrorType] = None

    @classmethod
    def failure(cls, error_type: AIErrorType, model: Optional[str] = None) -> "AIResult":
        return cls(success=False, error=ERROR_MESSAGES[error_type], error_type=error_type, model=model)


def classify_error(exc: BaseException) -> AIErrorType:
    """Map a provider exception onto an AIErrorType."""
    if isinstance(exc, (anthropic.APITimeoutError, asyncio.TimeoutError)):
        return AIErrorType.TIMEOUT
    status = getattr(exc, "status_code", None)
    if status in (401, 403):
        return AIErrorType.UNAUTHENTICATED
    if status == 429:
        return AIErrorType.RATE_LIMITED
    if status in (400, 413, 422):
        return AIErrorType.INVALID_REQUEST
    return AIErrorType.UNKNOWN


class AIService:
    """
    Wraps the Anthropic Messages API.

    Without an API key the service is "not configured": every capability
    returns a NOT_CONFIGURED failure and no client is ever created.
    The SDK's own retries are disabled; one call per request.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[Any] = None,
    ):
        """Initialize the gateway.

        Args:
            api_key: Anthropic API key; None disables AI features
            model: Model identifier used for every call
            timeout: Per-request timeout in seconds
            client: Pre-built client (tests)
        """
        self.model = model
        self.timeout = timeout
        self._client = client
        if self._client is None and api_key:
            self._client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)

        if self._client is None:
            logger.warning("CLAUDE_API_KEY not provided - AI features will be disabled")
        else:
            logger.info(f"Claude AI service initialized (model={self.model})")

    @classmethod
    def from_settings(cls, settings) -> "AIService":
        return cls(
            api_key=settings.claude_api_key,
            model=settings.claude_model,
            timeout=settings.ai_timeout_seconds,
        )

    def is_configured(self) -> bool:
        return self._client is not None

    async def _complete(self, capability: str, prompt: str, system: Optional[str] = None) -> AIResult:
        if not self.is_configured():
            return AIResult.failure(AIErrorType.NOT_CONFIGURED)

        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": MAX_TOKENS[capability],
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            message = await asyncio.wait_for(
                self._client.messages.create(**request),
                timeout=self.timeout,
            )
        except Exception as e:
            error_type = classify_error(e)
            logger.error(f"AI {capability} error ({error_type.value}): {e}")
            return AIResult.failure(error_type, model=self.model)

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        usage = TokenUsage(
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
        logger.info(f"AI {capability} completed: {usage.total_tokens} tokens")
        return AIResult(success=True, content=text, usage=usage, model=self.model)

    async def generate_code(self, prompt: str, project_context: str = "", files: Iterable = ()) -> AIResult:
        """Generate code for a request, given the project summary and its existing files."""
        return await self._complete(
            "generate",
            build_generate_prompt(prompt, project_context, files),
            system=GENERATE_SYSTEM_PROMPT,
        )

    async def explain_code(self, code: str, language: str = "javascript") -> AIResult:
        return await self._complete("explain", build_explain_prompt(code, language))

    async def suggest_improvements(self, code: str, context: str = "") -> AIResult:
        return await self._complete("improve", build_improve_prompt(code, context))

    async def generate_tests(self, code: str, framework: str = "jest") -> AIResult:
        return await self._complete("tests", build_tests_prompt(code, framework))

    def get_usage_stats(self) -> Dict[str, Any]:
        return {
            "configured": self.is_configured(),
            "model": self.model,
            "features": list(FEATURES),
        }
