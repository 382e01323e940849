from typing import Any

from domain.models import ProviderId
from infrastructure.ai.base import MAX_OUTPUT_TOKENS, HTTPProviderAdapter, dig


_DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
_API_URL = "https://api.anthropic.com/v1/messages"
_API_VERSION = "2023-06-01"


class AnthropicProvider(HTTPProviderAdapter):
    provider_id = ProviderId.CLAUDE

    def get_default_model(self) -> str:
        return _DEFAULT_MODEL

    def get_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": _API_VERSION,
        }

    def get_api_url(self) -> str:
        return _API_URL

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_content_from_response(self, response: Any) -> str:
        return self._require_text(dig(response, "content", 0, "text"), "Claude")
