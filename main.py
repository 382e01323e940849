import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv

from application.pr_description import PRDescriptionConfig, run_pr_description_flow
from infrastructure.config import load_settings, parse_provider_id
from infrastructure.http.workflow_factory import build_pr_description_dependencies
from infrastructure.jira import extract_ticket_key, is_valid_ticket_key
from infrastructure.observability.context import reset_request_id, set_request_id
from infrastructure.observability.logging_utils import configure_logging, log_event
from infrastructure.repo import current_branch


load_dotenv()
configure_logging()
logger = logging.getLogger(__name__)


def env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_ticket_key(repository_directory: Path) -> str:
    ticket_key = os.getenv("JIRA_TICKET")
    if not ticket_key:
        branch = current_branch(repository_directory)
        ticket_key = extract_ticket_key(branch)
        if not ticket_key:
            raise RuntimeError(
                f"Could not extract a Jira ticket from branch '{branch}'. Set JIRA_TICKET explicitly."
            )
        log_event(logger, logging.INFO, "cli.ticket.detected", branch=branch, ticket_key=ticket_key)

    ticket_key = ticket_key.strip().upper()
    if not is_valid_ticket_key(ticket_key):
        raise RuntimeError(f"Invalid Jira ticket format: {ticket_key}. Expected format: PROJ-123")
    return ticket_key


def main() -> None:
    token = set_request_id(f"cli-{uuid.uuid4().hex[:12]}")
    try:
        _run()
    finally:
        reset_request_id(token)


def _run() -> None:
    log_event(logger, logging.INFO, "cli.workflow.start")
    repository_directory = Path(os.getenv("REPOSITORY_DIRECTORY", "."))
    settings = load_settings()
    provider_override = os.getenv("AI_PROVIDER")

    flow_config = PRDescriptionConfig(
        ticket_key=resolve_ticket_key(repository_directory),
        base_branch=os.getenv("GH_BASE_BRANCH", "main"),
        repository_directory=repository_directory,
        pr_title=os.getenv("PR_TITLE") or None,
        explicit_provider=parse_provider_id(provider_override) if provider_override else None,
        ticket_base_url=settings.jira.base_url if settings.jira else None,
        dry_run=env_flag("DRY_RUN", True),
    )
    flow_dependencies = build_pr_description_dependencies(settings, repository_directory)

    try:
        result = run_pr_description_flow(flow_config, flow_dependencies)
    except Exception as error:
        log_event(logger, logging.ERROR, "cli.workflow.failed", error=str(error))
        raise

    print(f"Title: {result.title}\n")
    print(result.body)
    log_event(
        logger,
        logging.INFO,
        "cli.workflow.end",
        status=result.status,
        message=result.message,
        source=result.source,
        pr_url=result.pr_url,
    )


if __name__ == "__main__":
    main()
