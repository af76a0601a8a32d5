"""Integration tests for POST /api/translate and GET /api/languages.

Exercises the full HTTP path (multipart parsing, validation, pipeline,
error envelope) with fake STT/LLM providers.
"""

from unittest.mock import patch

from src.core.config import Settings

# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


async def test_translate_returns_both_texts(async_client, mock_stt, mock_llm, sample_wav_bytes):
    """Valid clip, auto source, Spanish target -> 200 with both fields."""
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", sample_wav_bytes, "audio/wav")},
        data={"sourceLanguage": "auto", "targetLanguage": "es"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body == {"transcription": "Hello, how are you?", "translation": "Hola, ¿cómo estás?"}

    stt_kwargs = mock_stt.transcribe.call_args.kwargs
    assert stt_kwargs["language"] is None
    assert stt_kwargs["filename"] == "clip.wav"
    assert stt_kwargs["content_type"] == "audio/wav"
    assert mock_stt.transcribe.call_args.args[0] == sample_wav_bytes

    llm_kwargs = mock_llm.generate.call_args.kwargs
    assert "Spanish" in llm_kwargs["system"]


async def test_explicit_source_language_is_forwarded(async_client, mock_stt, mock_llm):
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.webm", b"webm-bytes", "audio/webm")},
        data={"sourceLanguage": "fr", "targetLanguage": "de"},
    )

    assert resp.status_code == 200
    assert mock_stt.transcribe.call_args.kwargs["language"] == "fr"
    prompt = mock_llm.generate.call_args.args[0]
    assert prompt.startswith("Transcript (French): ")
    assert "German" in mock_llm.generate.call_args.kwargs["system"]


async def test_language_fields_default(async_client, mock_stt, mock_llm):
    """Omitted language fields fall back to auto -> English."""
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.mp3", b"mp3-bytes", "audio/mpeg")},
    )

    assert resp.status_code == 200
    assert mock_stt.transcribe.call_args.kwargs["language"] is None
    assert "English" in mock_llm.generate.call_args.kwargs["system"]


async def test_unmapped_target_code_used_verbatim(async_client, mock_llm):
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
        data={"targetLanguage": "sw"},
    )

    assert resp.status_code == 200
    assert "into sw," in mock_llm.generate.call_args.kwargs["system"]


# ---------------------------------------------------------------------------
# Validation (400)
# ---------------------------------------------------------------------------


async def test_missing_audio_returns_400(async_client, mock_stt, mock_llm):
    """No audio field -> 400 and neither provider is called."""
    resp = await async_client.post("/api/translate", data={"targetLanguage": "es"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Audio file is required."
    assert body["code"] == "VALIDATION_ERROR"
    mock_stt.transcribe.assert_not_awaited()
    mock_llm.generate.assert_not_awaited()


async def test_text_audio_field_returns_400(async_client, mock_stt):
    """A plain form value named ``audio`` is not a file upload."""
    resp = await async_client.post(
        "/api/translate",
        files={"other": ("x.txt", b"x", "text/plain")},
        data={"audio": "not a file"},
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == "Audio file is required."
    mock_stt.transcribe.assert_not_awaited()


async def test_audio_part_without_filename_returns_400(async_client, mock_stt, mock_llm):
    """A multipart part with no filename is a plain value, not an upload."""
    resp = await async_client.post(
        "/api/translate",
        files={"audio": (None, b"raw-bytes")},
        data={"targetLanguage": "es"},
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body == {
        "error": "Audio file is required.",
        "code": "VALIDATION_ERROR",
        "timestamp": body["timestamp"],
    }
    mock_stt.transcribe.assert_not_awaited()
    mock_llm.generate.assert_not_awaited()


async def test_empty_audio_returns_400(async_client, mock_stt):
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"", "audio/wav")},
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == "Audio file is empty."
    mock_stt.transcribe.assert_not_awaited()


async def test_auto_target_returns_400(async_client, mock_stt):
    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
        data={"targetLanguage": "auto"},
    )

    assert resp.status_code == 400
    mock_stt.transcribe.assert_not_awaited()


# ---------------------------------------------------------------------------
# Provider failures (500)
# ---------------------------------------------------------------------------


async def test_empty_transcription_short_circuits(async_client, mock_stt, mock_llm):
    mock_stt.transcribe.return_value = "   "

    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
    )

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "TRANSCRIPTION_ERROR"
    assert body["error"] == "The transcription service returned no text."
    assert "transcription" not in body
    mock_llm.generate.assert_not_awaited()


async def test_empty_translation_returns_500(async_client, mock_stt, mock_llm):
    mock_llm.generate.return_value = ""

    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
        data={"targetLanguage": "ja"},
    )

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "TRANSLATION_ERROR"
    assert "translation" not in body
    assert mock_stt.transcribe.await_count == 1
    assert mock_llm.generate.await_count == 1


async def test_provider_exception_reports_message(async_client, mock_stt, mock_llm):
    mock_stt.transcribe.side_effect = ConnectionError("Failed to connect to OpenAI: boom")

    resp = await async_client.post(
        "/api/translate",
        files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
    )

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "UNEXPECTED_ERROR"
    assert body["error"] == "Failed to connect to OpenAI: boom"
    mock_llm.generate.assert_not_awaited()


# ---------------------------------------------------------------------------
# Configuration (500)
# ---------------------------------------------------------------------------


async def test_missing_credential_returns_500_without_provider_calls(unconfigured_client):
    unconfigured = Settings(_env_file=None, openai_api_key="")
    with (
        patch("src.api.routes.translate.get_settings", return_value=unconfigured),
        patch("src.services.pipeline.create_stt") as create_stt,
        patch("src.services.pipeline.create_llm") as create_llm,
    ):
        with_audio = await unconfigured_client.post(
            "/api/translate",
            files={"audio": ("clip.wav", b"wav-bytes", "audio/wav")},
        )
        without_audio = await unconfigured_client.post("/api/translate")

    for resp in (with_audio, without_audio):
        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == "CONFIGURATION_ERROR"
        assert body["error"] == "Missing OPENAI_API_KEY environment variable."
    create_stt.assert_not_called()
    create_llm.assert_not_called()


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


async def test_list_languages(async_client):
    resp = await async_client.get("/api/languages")

    assert resp.status_code == 200
    entries = resp.json()
    assert len(entries) == 14
    assert entries[0] == {"code": "auto", "label": "Auto Detect", "source_only": True}
    assert {"code": "es", "label": "Spanish", "source_only": False} in entries
