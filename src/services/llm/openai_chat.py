"""
OpenAI chat-completion LLM provider.

Uses ``openai.AsyncOpenAI`` with SDK retries disabled; each call is a
single system + user message exchange.
"""

import logging

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from src.core.config import get_settings
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


class OpenAILLM(BaseLLM):
    """OpenAI chat-completions provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        settings=None,
    ) -> None:
        settings = settings or get_settings()
        self._api_key = api_key or settings.openai_api_key
        self._model = model or settings.openai_chat_model
        self._temperature = (
            temperature if temperature is not None else settings.decoding_temperature
        )
        self._client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=base_url or settings.openai_base_url or None,
            timeout=timeout or settings.provider_timeout,
            max_retries=0,
        )

    async def _call_api(
        self,
        messages: list[dict[str, str]],
        temperature: float | None = None,
    ) -> str:
        """Send one chat request and return the first choice's content.

        SDK exceptions are translated to ``ConnectionError`` / ``TimeoutError``
        / ``RuntimeError`` like the other providers.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=temperature if temperature is not None else self._temperature,
                messages=messages,
            )
        except APITimeoutError as exc:
            logger.warning("OpenAI API timeout: %s", exc)
            raise TimeoutError(f"OpenAI API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("OpenAI API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to OpenAI API: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("OpenAI API rate limit hit: %s", exc)
            raise ConnectionError(f"OpenAI API rate limit exceeded: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected OpenAI API error: %s", exc)
            raise RuntimeError(f"OpenAI API error: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def generate(self, prompt: str, **kwargs) -> str:
        """Generate a free-form text response."""
        messages: list[dict[str, str]] = []
        system = kwargs.pop("system", None)
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        return await self._call_api(messages=messages, temperature=kwargs.pop("temperature", None))
