from infrastructure.ai.anthropic import AnthropicProvider
from infrastructure.ai.base import HTTPProviderAdapter
from infrastructure.ai.copilot import CopilotProvider
from infrastructure.ai.gemini import GeminiProvider
from infrastructure.ai.openai import OpenAIProvider
from infrastructure.ai.provider_factory import build_provider_adapters, build_provider_manager

__all__ = [
    "AnthropicProvider",
    "CopilotProvider",
    "GeminiProvider",
    "HTTPProviderAdapter",
    "OpenAIProvider",
    "build_provider_adapters",
    "build_provider_manager",
]
