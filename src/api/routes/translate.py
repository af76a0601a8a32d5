"""
Translation REST endpoints.

``POST /api/translate`` accepts one multipart audio upload plus two
language codes and returns the transcription and its translation.
All work is delegated to ``TranslationPipeline`` — no business logic here.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.core.config import get_settings
from src.core.exceptions import (
    AUDIO_REQUIRED,
    SpeechBridgeError,
    UnexpectedError,
    ValidationError,
)
from src.core.languages import AUTO, DEFAULT_SOURCE, DEFAULT_TARGET, LANGUAGES
from src.core.models import (
    ErrorResponse,
    LanguageResponse,
    TranslationRequest,
    TranslationResult,
)
from src.services.pipeline import TranslationPipeline, create_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["translate"])

_DEFAULT_CONTENT_TYPE = "audio/mpeg"


def get_pipeline() -> TranslationPipeline:
    """Build the per-request pipeline (raises ConfigurationError without credentials)."""
    return create_pipeline(get_settings())


@router.get("/languages", response_model=list[LanguageResponse])
async def list_languages():
    """Return the language table shared with the UI."""
    return [
        LanguageResponse(code=opt.code, label=opt.label, source_only=opt.source_only)
        for opt in LANGUAGES.options()
    ]


@router.post(
    "/translate",
    response_model=TranslationResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate_audio(
    pipeline: TranslationPipeline = Depends(get_pipeline),
    audio: UploadFile | None = File(None),
    source_language: str | None = Form(None, alias="sourceLanguage"),
    target_language: str | None = Form(None, alias="targetLanguage"),
):
    """Transcribe the uploaded clip, then translate the transcript."""
    if audio is None:
        raise ValidationError(AUDIO_REQUIRED)

    source = (source_language or "").strip() or DEFAULT_SOURCE
    target = (target_language or "").strip() or DEFAULT_TARGET
    if target == AUTO:
        raise ValidationError("Target language cannot be auto-detected.")

    data = await audio.read()
    if not data:
        raise ValidationError("Audio file is empty.")

    request = TranslationRequest(
        audio=data,
        filename=audio.filename or "audio",
        content_type=audio.content_type or _DEFAULT_CONTENT_TYPE,
        source_language=source,
        target_language=target,
    )
    logger.debug("Received %s (%s, %d bytes)", request.filename, request.content_type, len(data))

    try:
        return await pipeline.run(request)
    except SpeechBridgeError:
        raise
    except Exception as exc:
        raise UnexpectedError(str(exc)) from exc
