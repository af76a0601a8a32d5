"""Two-step translation pipeline: speech-to-text, then LLM translation.

Each request flows ``validating -> transcribing -> translating -> succeeded``;
a failure at any step ends in ``failed`` and nothing partial is returned.
The stages run strictly in sequence: translation never starts before a
non-empty transcript exists.

Usage::

    from src.services.pipeline import create_pipeline

    pipeline = create_pipeline(get_settings())
    result = await pipeline.run(request)
"""

import logging

from src.core.config import Settings
from src.core.exceptions import ConfigurationError, TranscriptionError, TranslationError
from src.core.languages import AUTO, LANGUAGES, LanguageTable
from src.core.models import PipelineStage, Transcript, TranslationRequest, TranslationResult
from src.services.llm import BaseLLM, create_llm
from src.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

# Provider name -> (settings attribute, env var) of the credential it needs
_STT_CREDENTIALS = {"openai": ("openai_api_key", "OPENAI_API_KEY")}
_LLM_CREDENTIALS = {
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
    "claude": ("claude_api_key", "CLAUDE_API_KEY"),
}


def build_system_prompt(target_label: str) -> str:
    """Instruction naming the target language in human-readable form."""
    return (
        "You are a precise translation assistant. "
        f"Translate the user's transcript into {target_label}, preserving tone and meaning. "
        "Return only the translated text."
    )


def build_user_prompt(source_label: str, transcript: str) -> str:
    return f"Transcript ({source_label}): {transcript}"


class TranslationPipeline:
    """Chains one STT call and one LLM call.

    Args:
        stt: Speech-to-text provider.
        llm: Chat model used for translation.
        languages: Code -> label table used to name languages in prompts.
        temperature: Decoding temperature for both calls.
    """

    def __init__(
        self,
        stt: BaseSTT,
        llm: BaseLLM,
        languages: LanguageTable = LANGUAGES,
        temperature: float = 0.2,
    ) -> None:
        self._stt = stt
        self._llm = llm
        self._languages = languages
        self._temperature = temperature

    async def transcribe(self, request: TranslationRequest) -> Transcript:
        """Step 1: recognize speech in the uploaded clip.

        Raises:
            TranscriptionError: If the provider returned no text.
        """
        language = None if request.source_language == AUTO else request.source_language
        text = await self._stt.transcribe(
            request.audio,
            filename=request.filename,
            content_type=request.content_type,
            language=language,
            temperature=self._temperature,
        )
        text = (text or "").strip()
        if not text:
            raise TranscriptionError()
        return Transcript(text=text, language=request.source_language)

    async def translate(self, transcript: Transcript, target_language: str) -> str:
        """Step 2: render the transcript into the target language.

        Raises:
            TranslationError: If the model returned no content.
        """
        system = build_system_prompt(self._languages.label(target_language))
        prompt = build_user_prompt(self._languages.label(transcript.language), transcript.text)
        translation = await self._llm.generate(
            prompt,
            system=system,
            temperature=self._temperature,
        )
        translation = (translation or "").strip()
        if not translation:
            raise TranslationError()
        return translation

    async def run(self, request: TranslationRequest) -> TranslationResult:
        """Run both steps and return the combined result."""
        stage = PipelineStage.transcribing
        logger.info(
            "Translating %s (%d bytes, %s -> %s)",
            request.filename,
            len(request.audio),
            request.source_language,
            request.target_language,
        )
        try:
            transcript = await self.transcribe(request)
            stage = PipelineStage.translating
            logger.debug("Transcript ready (%d chars)", len(transcript.text))
            translation = await self.translate(transcript, request.target_language)
        except Exception:
            logger.info("Pipeline %s at stage %s", PipelineStage.failed, stage)
            raise

        logger.info("Pipeline %s", PipelineStage.succeeded)
        return TranslationResult(transcription=transcript.text, translation=translation)


def check_credentials(settings: Settings) -> None:
    """Fail fast when a configured provider has no credential.

    Raises:
        ConfigurationError: Naming the missing environment variable.
    """
    required = [
        _STT_CREDENTIALS.get(settings.stt_provider),
        _LLM_CREDENTIALS.get(settings.llm_provider),
    ]
    for entry in required:
        if entry is None:
            continue
        attr, env_var = entry
        if not getattr(settings, attr):
            raise ConfigurationError(f"Missing {env_var} environment variable.")


def create_pipeline(settings: Settings) -> TranslationPipeline:
    """Build a pipeline from settings, checking credentials first."""
    check_credentials(settings)
    return TranslationPipeline(
        stt=create_stt(provider=settings.stt_provider, settings=settings),
        llm=create_llm(provider=settings.llm_provider, settings=settings),
        temperature=settings.decoding_temperature,
    )
