from infrastructure.ai.openai.adapter import OpenAIProvider, chat_completion_body, chat_completion_text

__all__ = ["OpenAIProvider", "chat_completion_body", "chat_completion_text"]
