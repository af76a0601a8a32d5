"""
Synchronous HTTP client for the SpeechBridge backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)

TRANSLATION_FAILED = "Translation failed."


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "response", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` with user-friendly
    messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 120.0) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the SpeechBridge FastAPI backend.
            timeout: Per-request timeout in seconds; covers both provider calls.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/translate").
            **kwargs: Passed through to httpx (files, data, params, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("error") or TRANSLATION_FAILED
            except Exception:
                detail = TRANSLATION_FAILED
            raise APIError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- translation --

    def translate(
        self,
        audio: bytes,
        filename: str,
        content_type: str,
        source_language: str,
        target_language: str,
    ) -> dict:
        """Upload a clip and return ``{"transcription", "translation"}``.

        Raises:
            APIError: On transport/HTTP failure or a malformed success body.
        """
        resp = self._request(
            "post",
            "/api/translate",
            files={"audio": (filename, audio, content_type)},
            data={"sourceLanguage": source_language, "targetLanguage": target_language},
        )
        try:
            payload = resp.json()
        except ValueError:
            raise APIError(TRANSLATION_FAILED, category="response") from None

        if not isinstance(payload, dict) or not all(
            isinstance(payload.get(key), str) for key in ("transcription", "translation")
        ):
            logger.warning("Malformed translate response: %r", payload)
            raise APIError(TRANSLATION_FAILED, category="response")
        return payload


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000", timeout: float = 120.0) -> APIClient:
    """Return a cached APIClient, keyed by base_url and timeout.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url, timeout=timeout)
