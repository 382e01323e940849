from typing import Any, Protocol

from domain.models import ProviderId


class AIProvider(Protocol):
    provider_id: ProviderId
    model: str

    def get_default_model(self) -> str:
        ...

    def get_headers(self) -> dict[str, str]:
        ...

    def get_api_url(self) -> str:
        ...

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        ...

    def extract_content_from_response(self, response: Any) -> str:
        """Return the generated text or raise ContentExtractionError."""

    def generate_content(self, prompt: str) -> str:
        """Send the prompt and return the extracted text; failures raise ProviderError."""
