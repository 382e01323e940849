from typing import Any

from domain.models import ProviderId
from infrastructure.ai.base import HTTPProviderAdapter
from infrastructure.ai.openai import chat_completion_body, chat_completion_text


_DEFAULT_MODEL = "gpt-4o"
_API_URL = "https://api.githubcopilot.com/chat/completions"
_USER_AGENT = "create-pr-cli"


class CopilotProvider(HTTPProviderAdapter):
    """GitHub Copilot speaks the chat-completions dialect behind a GitHub token."""

    provider_id = ProviderId.COPILOT

    def get_default_model(self) -> str:
        return _DEFAULT_MODEL

    def get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": _USER_AGENT,
        }

    def get_api_url(self) -> str:
        return _API_URL

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        return chat_completion_body(self.model, prompt)

    def extract_content_from_response(self, response: Any) -> str:
        return self._require_text(chat_completion_text(response), "Copilot")
