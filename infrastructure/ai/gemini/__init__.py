from infrastructure.ai.gemini.adapter import GeminiProvider

__all__ = ["GeminiProvider"]
