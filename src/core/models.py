"""
Pydantic v2 request / response models used across the API layer.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from src.core.languages import AUTO, DEFAULT_TARGET

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


class LanguageResponse(BaseModel):
    """One entry of GET /api/languages."""

    code: str
    label: str
    source_only: bool = False


# ---------------------------------------------------------------------------
# Translation pipeline
# ---------------------------------------------------------------------------


class PipelineStage(StrEnum):
    """Per-request server-side progress of the translation pipeline."""

    validating = "validating"
    transcribing = "transcribing"
    translating = "translating"
    succeeded = "succeeded"
    failed = "failed"


class TranslationRequest(BaseModel):
    """Internal request built from the multipart upload; consumed once."""

    model_config = ConfigDict(frozen=True)

    audio: bytes = Field(repr=False)
    filename: str = "audio"
    content_type: str = "audio/mpeg"
    source_language: str = AUTO
    target_language: str = DEFAULT_TARGET


class Transcript(BaseModel):
    """Intermediate result of the speech-to-text step."""

    text: str
    language: str = AUTO


class TranslationResult(BaseModel):
    """POST /api/translate success response."""

    transcription: str
    translation: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: str
    code: str
    timestamp: str
