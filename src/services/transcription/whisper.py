"""Local Whisper STT implementation using faster-whisper.

Offline alternative to the OpenAI provider (``STT_PROVIDER=local``). The
WhisperModel is loaded lazily and cached at module level, one instance per
size/device/compute type, to avoid repeated initialization overhead.
"""

import asyncio
import io
import logging

from faster_whisper import WhisperModel

from src.core.config import get_settings
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

# (model_size, device, compute_type) -> loaded model
_model_cache: dict[tuple[str, str, str], WhisperModel] = {}


class WhisperSTT(BaseSTT):
    """Speech-to-text provider using faster-whisper (CTranslate2).

    Args:
        model_size: Whisper model size (tiny, base, small, medium, large-v3).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model_size = model_size or self._settings.whisper_model
        self._device = device
        self._compute_type = compute_type

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel for this size/device/compute type."""
        key = (self._model_size, self._device, self._compute_type)
        model = _model_cache.get(key)
        if model is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            model = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
            _model_cache[key] = model
        return model

    def _run_transcription(
        self,
        audio: bytes,
        language: str | None,
        temperature: float,
    ) -> str:
        """Run synchronous transcription (CPU-bound).

        Must be called via asyncio.to_thread(). The segment iterator is
        consumed inside this function to avoid CTranslate2 thread-safety
        issues.
        """
        model = self._get_model()
        segments_iter, _info = model.transcribe(
            io.BytesIO(audio),
            language=language,
            temperature=temperature,
            vad_filter=True,
        )
        return " ".join(seg.text.strip() for seg in segments_iter if seg.text.strip())

    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        language: str | None = None,
        temperature: float | None = None,
    ) -> str:
        if temperature is None:
            temperature = self._settings.decoding_temperature
        try:
            return await asyncio.to_thread(
                self._run_transcription,
                audio,
                language,
                temperature,
            )
        except Exception as exc:
            logger.error("Whisper transcription of %s failed: %s", filename, exc)
            raise RuntimeError(f"Whisper transcription failed: {exc}") from exc
