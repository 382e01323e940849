from typing import Any

from domain.models import ProviderId
from infrastructure.ai.base import MAX_OUTPUT_TOKENS, HTTPProviderAdapter, dig


_DEFAULT_MODEL = "gpt-4o"
_API_URL = "https://api.openai.com/v1/chat/completions"
_TEMPERATURE = 0.7


def chat_completion_body(model: str, prompt: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": MAX_OUTPUT_TOKENS,
        "temperature": _TEMPERATURE,
    }


def chat_completion_text(response: Any) -> Any:
    return dig(response, "choices", 0, "message", "content")


class OpenAIProvider(HTTPProviderAdapter):
    provider_id = ProviderId.CHATGPT

    def get_default_model(self) -> str:
        return _DEFAULT_MODEL

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def get_api_url(self) -> str:
        return _API_URL

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return chat_completion_body(self.model, prompt)

    def extract_content_from_response(self, response: Any) -> str:
        return self._require_text(chat_completion_text(response), "ChatGPT")
