from __future__ import annotations

import logging

import requests

from .config import get_settings

logger = logging.getLogger(__name__)


class GeminiClientError(RuntimeError):
    """Error while talking to the Gemini API."""


class GeminiClient:
    """
    Minimal client for the Gemini ``generateContent`` REST endpoint.

    Search grounding is enabled so the model can look up current fares.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout_s

    # ──────────────────────────────────────────────────────────

    def generate(self, prompt: str) -> str:
        """Send *prompt* and return the reply text ("" when there is none)."""
        if not self.api_key:
            raise GeminiClientError("GEMINI_API_KEY is not set")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
        }
        logger.debug("POST %s (%d prompt chars)", url, len(prompt))
        resp = requests.post(
            url,
            json=payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        if resp.status_code != 200:
            raise GeminiClientError(
                f"HTTP {resp.status_code} – {resp.text[:120]}"
            )

        data = resp.json()
        if data.get("error"):
            raise GeminiClientError(f"API error: {data['error']}")
        return self._reply_text(data)

    @staticmethod
    def _reply_text(data: dict) -> str:
        """Join the text parts of the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)


__all__ = ["GeminiClient", "GeminiClientError"]
