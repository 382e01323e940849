from pathlib import Path

from application.pr_description import PRDescriptionConfig, PRDescriptionResult
from infrastructure.config import Settings, parse_provider_id
from infrastructure.http.schemas import GenerateDescriptionRequest, GenerateDescriptionResponse


def to_pr_description_config(
    payload: GenerateDescriptionRequest,
    settings: Settings,
) -> PRDescriptionConfig:
    explicit_provider = parse_provider_id(payload.provider) if payload.provider else settings.explicit_provider
    return PRDescriptionConfig(
        ticket_key=payload.ticket_key,
        base_branch=payload.base_branch,
        repository_directory=Path(payload.repository_directory),
        pr_title=payload.title,
        explicit_provider=explicit_provider,
        ticket_base_url=settings.jira.base_url if settings.jira else None,
        dry_run=payload.dry_run,
    )


def to_generate_description_response(result: PRDescriptionResult) -> GenerateDescriptionResponse:
    return GenerateDescriptionResponse(
        status=result.status,
        message=result.message,
        title=result.title,
        body=result.body,
        summary=result.summary,
        source=result.source,
        pr_url=result.pr_url,
    )
