"""OpenAI speech-to-text provider.

Sends the uploaded clip as-is to the OpenAI transcription endpoint via
``openai.AsyncOpenAI``. SDK retries are disabled so every request makes
exactly one attempt.
"""

import logging

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from src.core.config import get_settings
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class OpenAISTT(BaseSTT):
    """Speech-to-text through the OpenAI audio transcription API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        temperature: float | None = None,
        settings=None,
    ) -> None:
        settings = settings or get_settings()
        self._api_key = api_key or settings.openai_api_key
        self._model = model or settings.stt_model
        self._temperature = (
            temperature if temperature is not None else settings.decoding_temperature
        )
        self._client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=base_url or settings.openai_base_url or None,
            timeout=timeout or settings.provider_timeout,
            max_retries=0,
        )

    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        language: str | None = None,
        temperature: float | None = None,
    ) -> str:
        kwargs: dict = {
            "model": self._model,
            "file": (filename, audio, content_type),
            "temperature": temperature if temperature is not None else self._temperature,
        }
        # No hint = provider-side language detection
        if language:
            kwargs["language"] = language

        try:
            response = await self._client.audio.transcriptions.create(**kwargs)
        except APITimeoutError as exc:
            logger.warning("OpenAI transcription timeout: %s", exc)
            raise TimeoutError(f"OpenAI transcription request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("OpenAI transcription connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to OpenAI: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("OpenAI rate limit hit: %s", exc)
            raise ConnectionError(f"OpenAI rate limit exceeded: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected OpenAI transcription error: %s", exc)
            raise RuntimeError(f"OpenAI transcription error: {exc}") from exc

        return getattr(response, "text", None) or ""
