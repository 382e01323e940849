import logging

from domain.errors import AllProvidersFailedError
from domain.models import OFFLINE_SOURCE, GeneratedContent, ProviderId
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)


def observe_workflow_step(step: str, status: str, detail: str | None = None) -> None:
    level = logging.ERROR if status == "error" else logging.INFO
    log_event(
        logger,
        level,
        "workflow.step",
        step=step,
        status=status,
        detail=detail,
    )


def observe_provider_attempt(provider_id: ProviderId, status: str, detail: str | None = None) -> None:
    level = logging.WARNING if status == "error" else logging.INFO
    log_event(
        logger,
        level,
        "workflow.ai.provider.attempt",
        provider=provider_id.value,
        provider_name=provider_id.display_name,
        status=status,
        detail=detail,
    )


def observe_generated_content(content: GeneratedContent) -> None:
    log_event(
        logger,
        logging.INFO,
        "workflow.content.generated",
        source=content.source,
        offline=content.source == OFFLINE_SOURCE,
        title_length=len(content.title),
        body_length=len(content.body),
        has_summary=content.summary is not None,
    )


def observe_provider_failures(error: AllProvidersFailedError) -> None:
    for position, failure in enumerate(error.failures, start=1):
        log_event(
            logger,
            logging.ERROR,
            "workflow.ai.provider.failed",
            position=position,
            provider=failure.provider_id.value,
            error_type=type(failure.error).__name__,
            error=str(failure.error),
        )
    log_event(
        logger,
        logging.WARNING,
        "workflow.ai.fallback_template",
        failures_count=len(error.failures),
    )
