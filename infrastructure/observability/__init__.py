from infrastructure.observability.logging_utils import configure_logging, log_event
from infrastructure.observability.workflow_observer import (
    observe_generated_content,
    observe_provider_attempt,
    observe_provider_failures,
    observe_workflow_step,
)

__all__ = [
    "configure_logging",
    "log_event",
    "observe_generated_content",
    "observe_provider_attempt",
    "observe_provider_failures",
    "observe_workflow_step",
]
