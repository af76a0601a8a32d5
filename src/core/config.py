"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SpeechBridge application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        openai_api_key: Credential for the OpenAI API (``OPENAI_API_KEY``).
        stt_provider: Speech-to-text backend ("openai" or "local").
        llm_provider: Translation LLM backend ("openai", "claude" or "ollama").
        decoding_temperature: Temperature used for both provider calls.
        provider_timeout: Upper bound in seconds for a single provider call.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- OpenAI ---
    openai_api_key: str = ""  # Required when either provider is "openai"
    openai_base_url: str = ""  # Empty = SDK default endpoint

    # --- Speech-to-text ---
    stt_provider: str = "openai"
    stt_model: str = "gpt-4o-mini-transcribe"
    whisper_model: str = "base"  # faster-whisper size when stt_provider="local"

    # --- Translation LLM ---
    llm_provider: str = "openai"
    openai_chat_model: str = "gpt-4o-mini"

    # Claude (Anthropic API) settings
    claude_api_key: str = ""  # Required when llm_provider="claude"
    claude_model: str = "claude-sonnet-4-20250514"

    # Ollama (local LLM) settings
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # --- Decoding ---
    decoding_temperature: float = 0.2
    provider_timeout: float = 60.0  # Seconds; applied to every SDK client

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]

    # --- UI ---
    api_base_url: str = "http://localhost:8000"
    ui_request_timeout: float = 120.0


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
