from infrastructure.ai.copilot.adapter import CopilotProvider

__all__ = ["CopilotProvider"]
