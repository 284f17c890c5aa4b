"""LLM completion service built on LangChain chat models.

Every call is bounded by a timeout and retried once on timeouts and transient
provider errors before surfacing as TransientCallError.
"""

import asyncio
from typing import Any

import anthropic
import openai
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.core.config import Settings, get_settings
from app.core.errors import ConfigurationError, TransientCallError
from app.core.logging import get_logger

logger = get_logger(__name__)

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
    anthropic.APIConnectionError,
    anthropic.APITimeoutError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


def get_llm(
    model: str,
    temperature: float = 0.1,
    max_tokens: int | None = None,
    settings: Settings | None = None,
) -> BaseChatModel:
    """
    Get configured chat model for the active provider.

    Args:
        model: Model name
        temperature: Temperature for generation (default 0.1)
        max_tokens: Completion token limit
        settings: Settings override (defaults to cached settings)

    Returns:
        ChatOpenAI or ChatAnthropic instance

    Raises:
        ConfigurationError: If the provider is unknown or its key is missing
    """
    settings = settings or get_settings()
    provider = settings.LLM_PROVIDER.lower()

    if provider == "openai":
        return ChatOpenAI(
            api_key=settings.OPENAI_API_KEY,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )

    if provider == "anthropic":
        if not settings.ANTHROPIC_API_KEY:
            raise ConfigurationError("ANTHROPIC_API_KEY not configured")
        return ChatAnthropic(
            api_key=settings.ANTHROPIC_API_KEY,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens or 1024,
            max_retries=0,
        )

    raise ConfigurationError(f"Unknown LLM_PROVIDER: {settings.LLM_PROVIDER}")


def _response_text(response: Any) -> str:
    """Flatten a chat model response into plain text."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")


class LLMService:
    """Single-operation completion service: system + user messages -> text."""

    def __init__(self, settings: Settings | None = None, llm_factory=None):
        self.settings = settings or get_settings()
        self._llm_factory = llm_factory or get_llm
        self._models: dict[tuple[str, float, int], BaseChatModel] = {}

    def _model(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        key = (model, temperature, max_tokens)
        if key not in self._models:
            self._models[key] = self._llm_factory(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                settings=self.settings,
            )
        return self._models[key]

    async def complete(
        self,
        system: str,
        user: str,
        *,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 1500,
    ) -> str:
        """
        Run one chat completion.

        Args:
            system: System message
            user: User message
            model: Model name
            temperature: Sampling temperature
            max_tokens: Completion token limit

        Returns:
            Response text (may be empty)

        Raises:
            TransientCallError: If the call fails after the retry policy
        """
        llm = self._model(model, temperature, max_tokens)
        messages = [SystemMessage(content=system), HumanMessage(content=user)]
        timeout = self.settings.LLM_TIMEOUT_SECONDS
        max_retries = self.settings.LLM_MAX_RETRIES

        for attempt in range(max_retries + 1):
            try:
                response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
                return _response_text(response)
            except TRANSIENT_ERRORS as e:
                if attempt < max_retries:
                    logger.warning(
                        f"LLM attempt {attempt + 1}/{max_retries + 1} failed "
                        f"({type(e).__name__}), retrying in {self.settings.LLM_RETRY_DELAY_SECONDS}s"
                    )
                    await asyncio.sleep(self.settings.LLM_RETRY_DELAY_SECONDS)
                    continue
                raise TransientCallError(
                    f"LLM call failed after {attempt + 1} attempts: {type(e).__name__}: {e}"
                ) from e
            except Exception as e:
                raise TransientCallError(f"LLM call failed: {type(e).__name__}: {e}") from e

        raise TransientCallError("LLM call failed")
