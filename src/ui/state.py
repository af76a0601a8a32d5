"""
Capture state machine for the Streamlit UI.

Kept free of Streamlit imports so the transitions can be unit tested.

States: idle -> recording -> idle (clip staged) -> processing -> ready,
with ``fail()`` returning to idle from any state.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from src.core.languages import AUTO, DEFAULT_SOURCE, DEFAULT_TARGET

logger = logging.getLogger(__name__)

MIC_UNAVAILABLE = "Microphone access denied or not available."
INVALID_FILE = "Please choose a valid audio file."
NO_AUDIO = "Record audio or upload a file before submitting."


class CaptureStatus(StrEnum):
    """Lifecycle of the capture page."""

    idle = "idle"
    recording = "recording"
    processing = "processing"
    ready = "ready"


class InvalidTransitionError(Exception):
    """Raised when an action is not allowed in the current status."""

    def __init__(self, action: str, status: CaptureStatus) -> None:
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} while {status}")


class ClientValidationError(Exception):
    """User-correctable input problem, shown verbatim in the UI."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StagedAudio:
    """A clip waiting to be submitted.

    The session owns at most one staged clip; replacing or clearing it
    calls ``release()`` on the previous one. Can also be used as a
    context manager for scoped use outside a session.
    """

    def __init__(self, data: bytes, filename: str, content_type: str) -> None:
        self._data = data
        self.filename = filename
        self.content_type = content_type
        self._released = False

    @property
    def data(self) -> bytes:
        if self._released:
            raise ValueError(f"Staged audio {self.filename} was already released")
        return self._data

    @property
    def released(self) -> bool:
        return self._released

    @property
    def is_audio(self) -> bool:
        return self.content_type.startswith("audio/")

    def release(self) -> None:
        if not self._released:
            self._released = True
            self._data = b""

    def __enter__(self) -> "StagedAudio":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"StagedAudio({self.filename!r}, {self.content_type!r}, released={self._released})"


@dataclass(frozen=True)
class SubmitPayload:
    """Everything the API client needs for one POST /api/translate."""

    audio: bytes
    filename: str
    content_type: str
    source_language: str
    target_language: str


# action -> statuses it may be invoked from
_ALLOWED = {
    "start recording": {CaptureStatus.idle, CaptureStatus.ready},
    "stop recording": {CaptureStatus.recording},
    "cancel recording": {CaptureStatus.recording},
    "select a file": {CaptureStatus.idle, CaptureStatus.ready},
    "submit": {CaptureStatus.idle, CaptureStatus.ready},
    "complete": {CaptureStatus.processing},
}


@dataclass
class CaptureSession:
    """Client-side state of one capture page.

    Attributes:
        status: Current lifecycle state.
        pending: The staged clip, if any.
        transcription: Result text, set only in ``ready``.
        translation: Result text, set only in ``ready``.
        error: Last user-facing error message.
    """

    status: CaptureStatus = CaptureStatus.idle
    pending: StagedAudio | None = None
    transcription: str = ""
    translation: str = ""
    error: str | None = None
    source_language: str = DEFAULT_SOURCE
    target_language: str = DEFAULT_TARGET

    @property
    def can_submit(self) -> bool:
        return self.pending is not None and self.status in _ALLOWED["submit"]

    def _require(self, action: str) -> None:
        if self.status not in _ALLOWED[action]:
            raise InvalidTransitionError(action, self.status)

    def _move(self, status: CaptureStatus) -> None:
        logger.debug("Capture %s -> %s", self.status, status)
        self.status = status

    def _stage(self, clip: StagedAudio | None) -> None:
        if self.pending is not None and self.pending is not clip:
            self.pending.release()
        self.pending = clip

    def _clear_results(self) -> None:
        self.transcription = ""
        self.translation = ""

    # -- recording --

    def start_recording(self) -> None:
        self._require("start recording")
        self.error = None
        self._clear_results()
        self._move(CaptureStatus.recording)

    def fail_recording(self, message: str = MIC_UNAVAILABLE) -> None:
        """Microphone denied or unavailable: report and go back to idle."""
        self.error = message
        if self.status == CaptureStatus.recording:
            self._move(CaptureStatus.idle)

    def stop_recording(self, clip: StagedAudio) -> None:
        self._require("stop recording")
        self._stage(clip)
        self._move(CaptureStatus.idle)

    def cancel_recording(self) -> None:
        self._require("cancel recording")
        self._move(CaptureStatus.idle)

    # -- upload --

    def select_file(self, clip: StagedAudio) -> None:
        """Stage a user-chosen file; non-audio files leave the state untouched.

        Raises:
            ClientValidationError: If the MIME type is not ``audio/*``.
        """
        self._require("select a file")
        if not clip.is_audio:
            clip.release()
            self.error = INVALID_FILE
            raise ClientValidationError(INVALID_FILE)
        self.error = None
        self._clear_results()
        self._stage(clip)
        if self.status != CaptureStatus.idle:
            self._move(CaptureStatus.idle)

    # -- submission --

    def set_languages(self, source_language: str, target_language: str) -> None:
        if target_language == AUTO:
            raise ClientValidationError("Target language cannot be auto-detected.")
        self.source_language = source_language
        self.target_language = target_language

    def begin_submit(self) -> SubmitPayload:
        """Move to ``processing`` and return the request payload.

        Raises:
            ClientValidationError: If no clip is staged.
            InvalidTransitionError: If a submission is already in flight.
        """
        self._require("submit")
        if self.pending is None:
            self.error = NO_AUDIO
            raise ClientValidationError(NO_AUDIO)
        self.error = None
        self._clear_results()
        payload = SubmitPayload(
            audio=self.pending.data,
            filename=self.pending.filename,
            content_type=self.pending.content_type,
            source_language=self.source_language,
            target_language=self.target_language,
        )
        self._move(CaptureStatus.processing)
        return payload

    def complete(self, transcription: str, translation: str) -> None:
        self._require("complete")
        self.transcription = transcription
        self.translation = translation
        self._move(CaptureStatus.ready)

    def fail(self, message: str) -> None:
        """Any failure: surface the message and return to idle."""
        self.error = message
        self._clear_results()
        if self.status != CaptureStatus.idle:
            self._move(CaptureStatus.idle)

    def close(self) -> None:
        """Release the staged clip (page teardown / reset)."""
        self._stage(None)
        self._clear_results()
        self.error = None
        if self.status != CaptureStatus.idle:
            self._move(CaptureStatus.idle)
