from typing import Any

from domain.models import ProviderId
from infrastructure.ai.base import MAX_OUTPUT_TOKENS, HTTPProviderAdapter, dig


_DEFAULT_MODEL = "gemini-1.5-pro"
_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
_TEMPERATURE = 0.7


class GeminiProvider(HTTPProviderAdapter):
    provider_id = ProviderId.GEMINI

    def get_default_model(self) -> str:
        return _DEFAULT_MODEL

    def get_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key}

    def get_api_url(self) -> str:
        return f"{_API_BASE_URL}/models/{self.model}:generateContent"

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
                "temperature": _TEMPERATURE,
            },
        }

    def extract_content_from_response(self, response: Any) -> str:
        text = dig(response, "candidates", 0, "content", "parts", 0, "text")
        return self._require_text(text, "Gemini")
