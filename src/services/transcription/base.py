"""
Abstract base class for Speech-to-Text providers.

All STT implementations (OpenAI API, local Whisper) must implement this
interface, enabling provider-agnostic transcription in the pipeline.
"""

from abc import ABC, abstractmethod


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        language: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Transcribe an in-memory audio clip to text.

        Args:
            audio: Raw bytes of the uploaded file (any container the provider accepts).
            filename: Original filename, used by providers to sniff the format.
            content_type: MIME type of the clip.
            language: ISO 639-1 hint, or ``None`` to let the provider auto-detect.
            temperature: Decoding temperature.

        Returns:
            The recognized text (may be empty when nothing was recognized).
        """
