import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from domain.errors import (
    AuthenticationError,
    ContentExtractionError,
    GenericProviderError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitError,
    TransientServerError,
)
from domain.models import ProviderId
from infrastructure.observability.logging_utils import log_event, safe_message


DEFAULT_TIMEOUT_SECONDS = 30.0
MAX_OUTPUT_TOKENS = 4000
JSON_CONTENT_TYPE = "application/json"

logger = logging.getLogger(__name__)


def dig(payload: Any, *path: str | int) -> Any:
    """Follow a key/index path through decoded JSON, returning None when any hop is missing."""
    current = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[step] if isinstance(step, int) else current.get(step)
    return current


class HTTPProviderAdapter:
    """Shared transport for every vendor: one POST, fixed timeout, no retries."""

    provider_id: ProviderId

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.get_default_model()
        self.timeout_seconds = timeout_seconds
        self.session = session or self._build_session()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_id={self.provider_id.value!r}, model={self.model!r})"

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        # A failed provider hands control back to the fallback chain instead of retrying.
        session.mount("https://", HTTPAdapter(max_retries=0))
        return session

    def get_default_model(self) -> str:
        raise NotImplementedError

    def get_headers(self) -> dict[str, str]:
        raise NotImplementedError

    def get_api_url(self) -> str:
        raise NotImplementedError

    def build_request_body(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def extract_content_from_response(self, response: Any) -> str:
        raise NotImplementedError

    def _require_text(self, value: Any, vendor_name: str) -> str:
        if not isinstance(value, str) or not value:
            raise ContentExtractionError(
                self.provider_id,
                f"No content received from {vendor_name} API",
            )
        return value

    def generate_content(self, prompt: str) -> str:
        log_event(
            logger,
            logging.INFO,
            "ai.provider.request",
            provider=self.provider_id.value,
            model=self.model,
            prompt_length=len(prompt),
        )
        try:
            response = self.session.post(
                self.get_api_url(),
                json=self.build_request_body(prompt),
                headers={"Content-Type": JSON_CONTENT_TYPE, **self.get_headers()},
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as error:
            raise ProviderTimeoutError(
                self.provider_id,
                f"{self.provider_id.value} API timeout. Please try again.",
            ) from error
        except requests.RequestException as error:
            raise GenericProviderError(
                self.provider_id,
                safe_message(f"{self.provider_id.value} API error: {error}"),
            ) from error

        if response.status_code >= 400:
            raise self.classify_http_error(response)

        try:
            payload = response.json()
        except ValueError as error:
            raise GenericProviderError(
                self.provider_id,
                f"{self.provider_id.value} API returned a non-JSON body",
            ) from error

        return self.extract_content_from_response(payload)

    def classify_http_error(self, response: requests.Response) -> ProviderError:
        status_code = response.status_code
        name = self.provider_id.value
        if status_code == 401:
            return AuthenticationError(
                self.provider_id,
                f"Authentication failed for {name}. Please check your API key.",
            )
        if status_code == 429:
            return RateLimitError(
                self.provider_id,
                f"Rate limit exceeded for {name}. Please try again later.",
            )
        if status_code >= 500:
            return TransientServerError(
                self.provider_id,
                f"{name} API server error ({status_code}). Please try again later.",
            )
        return GenericProviderError(
            self.provider_id,
            safe_message(f"{name} API error ({status_code}): {self._error_detail(response)}"),
        )

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:200]
        message = dig(payload, "error", "message")
        return message if isinstance(message, str) else str(payload)[:200]
