import logging
from pathlib import Path

from application.pr_description import PRDescriptionDependencies, PullRequestData
from infrastructure.ai import build_provider_manager
from infrastructure.config import Settings, require_jira_settings
from infrastructure.github import GitHubClient
from infrastructure.jira import JiraClient
from infrastructure.observability.logging_utils import log_event, register_sensitive_values
from infrastructure.observability.workflow_observer import (
    observe_generated_content,
    observe_provider_failures,
    observe_workflow_step,
)
from infrastructure.repo import collect_changes, load_template
from infrastructure.repo.operations import origin_repository


logger = logging.getLogger(__name__)


def _required_github_token(settings: Settings) -> str:
    if not settings.github_token:
        raise RuntimeError("Missing required environment variable: GITHUB_TOKEN")
    return settings.github_token


def _pull_request_creator(settings: Settings, repository_directory: Path):
    def create_pr(*, head: str, base: str, title: str, body: str) -> PullRequestData:
        repository = origin_repository(repository_directory)
        if repository is None:
            raise RuntimeError("Could not determine GitHub repository from the origin remote")
        owner, repo = repository
        client = GitHubClient(token=_required_github_token(settings), owner=owner, repo=repo)
        return client.create_pr(head=head, base=base, title=title, body=body)

    return create_pr


def build_pr_description_dependencies(
    settings: Settings,
    repository_directory: Path,
) -> PRDescriptionDependencies:
    register_sensitive_values(*settings.secrets())
    jira_settings = require_jira_settings(settings)
    jira_client = JiraClient(
        base_url=jira_settings.base_url,
        username=jira_settings.username,
        api_token=jira_settings.api_token,
    )
    provider_manager = build_provider_manager(settings)
    log_event(
        logger,
        logging.INFO,
        "workflow.ai.providers.configured",
        providers=[provider_id.value for provider_id in provider_manager.available_providers()],
        explicit_provider=settings.explicit_provider.value if settings.explicit_provider else None,
    )

    return PRDescriptionDependencies(
        get_ticket=jira_client.get_ticket,
        collect_changes=collect_changes,
        load_template=load_template,
        provider_manager=provider_manager,
        create_pr=_pull_request_creator(settings, repository_directory),
        observe_step=observe_workflow_step,
        observe_content=observe_generated_content,
        observe_provider_failures=observe_provider_failures,
    )
