"""
Capture component — record or upload a clip, submit it, show results.

Rendering is driven by ``CaptureSession.status``; every state change goes
through the session's transition methods and is followed by ``st.rerun()``.
"""

import logging
import time

import streamlit as st

from src.core.config import get_settings
from src.core.languages import LANGUAGES
from src.ui.api_client import APIError, get_api_client
from src.ui.state import (
    CaptureSession,
    CaptureStatus,
    ClientValidationError,
    StagedAudio,
    SubmitPayload,
)

logger = logging.getLogger(__name__)

_SESSION_KEY = "capture"
_PAYLOAD_KEY = "_submit_payload"
_UPLOAD_ID_KEY = "_last_upload_id"

_UPLOAD_TYPES = ["mp3", "mp4", "mpeg", "mpga", "m4a", "wav", "webm", "ogg", "flac"]


def get_capture_session() -> CaptureSession:
    """Return the page's CaptureSession, creating it on first run."""
    if _SESSION_KEY not in st.session_state:
        st.session_state[_SESSION_KEY] = CaptureSession()
    return st.session_state[_SESSION_KEY]


def reset_capture_session() -> None:
    """Release the staged clip and start over."""
    session = st.session_state.pop(_SESSION_KEY, None)
    if session is not None:
        session.close()
    st.session_state.pop(_PAYLOAD_KEY, None)
    st.session_state.pop(_UPLOAD_ID_KEY, None)


def _render_language_selectors(session: CaptureSession, disabled: bool) -> None:
    sources = LANGUAGES.source_options()
    targets = LANGUAGES.target_options()
    source_codes = [opt.code for opt in sources]
    target_codes = [opt.code for opt in targets]

    col1, col2 = st.columns(2)
    with col1:
        source = st.selectbox(
            "Source language",
            source_codes,
            index=source_codes.index(session.source_language)
            if session.source_language in source_codes
            else 0,
            format_func=LANGUAGES.label,
            disabled=disabled,
        )
    with col2:
        target = st.selectbox(
            "Target language",
            target_codes,
            index=target_codes.index(session.target_language)
            if session.target_language in target_codes
            else 0,
            format_func=LANGUAGES.label,
            disabled=disabled,
        )
    session.set_languages(source, target)


def _render_upload(session: CaptureSession) -> None:
    uploaded = st.file_uploader("Or upload an audio file", type=_UPLOAD_TYPES)
    if uploaded is None or st.session_state.get(_UPLOAD_ID_KEY) == uploaded.file_id:
        return
    st.session_state[_UPLOAD_ID_KEY] = uploaded.file_id
    clip = StagedAudio(
        data=uploaded.getvalue(),
        filename=uploaded.name,
        content_type=uploaded.type or "",
    )
    try:
        session.select_file(clip)
    except ClientValidationError:
        pass  # message already on session.error
    st.rerun()


def _render_idle(session: CaptureSession) -> None:
    """Record/upload controls, staged clip preview, and submit button."""
    if st.button("Start recording", icon=":material/mic:"):
        session.start_recording()
        st.rerun()

    _render_upload(session)

    if session.pending is not None:
        st.caption(f"Ready to submit: {session.pending.filename}")
        st.audio(session.pending.data, format=session.pending.content_type)

    if st.button("Translate", type="primary", disabled=not session.can_submit):
        try:
            st.session_state[_PAYLOAD_KEY] = session.begin_submit()
        except ClientValidationError:
            pass
        st.rerun()


def _render_recording(session: CaptureSession) -> None:
    """Microphone widget; the finished clip is staged as the pending upload."""
    st.info("Recording… press stop in the widget when you are done.")
    audio = st.audio_input("Record audio")
    if audio is not None:
        content_type = audio.type or "audio/wav"
        extension = content_type.split("/")[-1]
        clip = StagedAudio(
            data=audio.getvalue(),
            filename=f"recording-{int(time.time() * 1000)}.{extension}",
            content_type=content_type,
        )
        session.stop_recording(clip)
        st.rerun()

    if st.button("Cancel recording"):
        session.cancel_recording()
        st.rerun()

    # Browser-side permission denial is not visible to the script.
    if st.button("Microphone not available"):
        session.fail_recording()
        st.rerun()


def _render_processing(session: CaptureSession) -> None:
    """Send the pending payload with a spinner."""
    payload: SubmitPayload | None = st.session_state.pop(_PAYLOAD_KEY, None)
    if payload is None:
        session.fail("Submission was interrupted. Please try again.")
        st.rerun()
        return

    settings = get_settings()
    client = get_api_client(st.session_state.api_base_url, settings.ui_request_timeout)
    with st.spinner("Transcribing and translating…"):
        try:
            result = client.translate(
                audio=payload.audio,
                filename=payload.filename,
                content_type=payload.content_type,
                source_language=payload.source_language,
                target_language=payload.target_language,
            )
        except APIError as exc:
            logger.warning("Translate request failed (%s): %s", exc.category, exc.message)
            session.fail(exc.message)
        else:
            session.complete(result["transcription"], result["translation"])

    st.rerun()


def _render_ready(session: CaptureSession) -> None:
    """Show both texts and allow another round with the same clip."""
    st.subheader(f"Transcription ({LANGUAGES.label(session.source_language)})")
    st.code(session.transcription, language=None, wrap_lines=True)
    st.subheader(f"Translation ({LANGUAGES.label(session.target_language)})")
    st.code(session.translation, language=None, wrap_lines=True)

    _render_idle(session)

    if st.button("Start over"):
        reset_capture_session()
        st.rerun()


def render_capture() -> None:
    """Render the full capture UI based on the current session status."""
    session = get_capture_session()
    busy = session.status in (CaptureStatus.recording, CaptureStatus.processing)

    _render_language_selectors(session, disabled=busy)

    if session.error:
        st.error(session.error)

    if session.status == CaptureStatus.idle:
        _render_idle(session)
    elif session.status == CaptureStatus.recording:
        _render_recording(session)
    elif session.status == CaptureStatus.processing:
        _render_processing(session)
    elif session.status == CaptureStatus.ready:
        _render_ready(session)
