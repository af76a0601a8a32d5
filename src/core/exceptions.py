"""
SpeechBridge exception hierarchy.

All application-specific exceptions inherit from SpeechBridgeError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime

AUDIO_REQUIRED = "Audio file is required."


class SpeechBridgeError(Exception):
    """Base exception for all SpeechBridge errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "SPEECHBRIDGE_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class ConfigurationError(SpeechBridgeError):
    """Raised when a provider credential is not configured."""

    def __init__(self, detail: str = "Server is not configured") -> None:
        super().__init__(
            detail=detail,
            code="CONFIGURATION_ERROR",
            status_code=500,
        )


class ValidationError(SpeechBridgeError):
    """Raised when the client request is malformed (e.g. no audio)."""

    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(
            detail=detail,
            code="VALIDATION_ERROR",
            status_code=400,
        )


class TranscriptionError(SpeechBridgeError):
    """Raised when the STT provider returns no usable text."""

    def __init__(self, detail: str = "The transcription service returned no text.") -> None:
        super().__init__(
            detail=detail,
            code="TRANSCRIPTION_ERROR",
            status_code=500,
        )


class TranslationError(SpeechBridgeError):
    """Raised when the LLM provider returns no usable translation."""

    def __init__(self, detail: str = "The translation service returned no text.") -> None:
        super().__init__(
            detail=detail,
            code="TRANSLATION_ERROR",
            status_code=500,
        )


class UnexpectedError(SpeechBridgeError):
    """Wraps any other failure raised while serving a request."""

    def __init__(self, detail: str = "Unexpected error") -> None:
        super().__init__(
            detail=detail or "Unexpected error",
            code="UNEXPECTED_ERROR",
            status_code=500,
        )
