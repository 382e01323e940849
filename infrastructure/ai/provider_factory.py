from typing import Callable

import requests

from application.provider_manager import ProviderManager
from domain.models import ProviderId
from infrastructure.ai.anthropic import AnthropicProvider
from infrastructure.ai.base import HTTPProviderAdapter
from infrastructure.ai.copilot import CopilotProvider
from infrastructure.ai.gemini import GeminiProvider
from infrastructure.ai.openai import OpenAIProvider
from infrastructure.config import Settings
from infrastructure.observability import observe_provider_attempt


ADAPTER_TYPES: dict[ProviderId, type[HTTPProviderAdapter]] = {
    ProviderId.CLAUDE: AnthropicProvider,
    ProviderId.CHATGPT: OpenAIProvider,
    ProviderId.GEMINI: GeminiProvider,
    ProviderId.COPILOT: CopilotProvider,
}


def build_provider_adapters(
    settings: Settings,
    *,
    session: requests.Session | None = None,
) -> dict[ProviderId, HTTPProviderAdapter]:
    adapters: dict[ProviderId, HTTPProviderAdapter] = {}
    for credentials in settings.providers:
        adapter_type = ADAPTER_TYPES[credentials.provider_id]
        adapters[credentials.provider_id] = adapter_type(
            credentials.api_key,
            credentials.model,
            timeout_seconds=settings.provider_timeout_seconds,
            session=session,
        )
    return adapters


def build_provider_manager(
    settings: Settings,
    *,
    session: requests.Session | None = None,
    choose_provider: Callable[[list[ProviderId]], ProviderId] | None = None,
) -> ProviderManager:
    extra = {"choose_provider": choose_provider} if choose_provider else {}
    return ProviderManager(
        build_provider_adapters(settings, session=session),
        priority=settings.provider_priority,
        observe_attempt=observe_provider_attempt,
        **extra,
    )
