"""Text generation client for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GenerationError(RuntimeError):
    """Raised when the generative service fails or answers with nothing usable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}" if status_code else message)


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        ...


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Could not parse error response."
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or "Unknown error")
    return "Could not parse error response."


def extract_text(payload: Any) -> str:
    """Pull the first candidate's text out of a generateContent response."""
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not candidates:
        raise GenerationError("Received an invalid or empty response from the AI service.")
    try:
        parts = candidates[0]["content"]["parts"]
        return "".join(str(p.get("text", "")) for p in parts)
    except (KeyError, IndexError, TypeError) as exc:
        raise GenerationError("Received an invalid or empty response from the AI service.") from exc


class GeminiClient:
    """Sends one prompt per call; no retries."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash-latest",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = client or httpx.Client(base_url=GEMINI_BASE_URL, timeout=timeout)

    @property
    def model(self) -> str:
        return self._model

    def close(self) -> None:
        self._client.close()

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise GenerationError("Gemini API key is not configured.")
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._client.post(
                f"/models/{self._model}:generateContent",
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.TimeoutException as exc:
            raise GenerationError("Timed out waiting for the AI service.") from exc
        except httpx.RequestError as exc:
            raise GenerationError(f"Could not reach the AI service: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error("Gemini call failed with status %s: %s", response.status_code, message)
            raise GenerationError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise GenerationError("AI service returned a non-JSON body.", status_code=response.status_code) from exc
        return extract_text(body)


__all__ = ["GEMINI_BASE_URL", "GeminiClient", "GenerationError", "TextGenerator", "extract_text"]
