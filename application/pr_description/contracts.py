from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypedDict

from application.provider_manager import ProviderManager
from domain.errors import AllProvidersFailedError
from domain.models import ChangeSet, GeneratedContent, ProviderId, PullRequestTemplate, RepoLink, Ticket


class PullRequestData(TypedDict):
    html_url: str


@dataclass(frozen=True)
class RepositorySnapshot:
    branch: str
    change_set: ChangeSet
    diff_text: str
    repo_link: RepoLink | None = None


def _noop_observe_step(_: str, __: str, detail: str | None = None) -> None:
    return None


def _noop_observe_content(_: GeneratedContent) -> None:
    return None


def _noop_observe_failures(_: AllProvidersFailedError) -> None:
    return None


@dataclass(frozen=True)
class PRDescriptionConfig:
    ticket_key: str
    base_branch: str
    repository_directory: Path
    pr_title: str | None = None
    explicit_provider: ProviderId | None = None
    ticket_base_url: str | None = None
    dry_run: bool = True


@dataclass(frozen=True)
class PRDescriptionDependencies:
    get_ticket: Callable[[str], Ticket]
    collect_changes: Callable[[str, Path], RepositorySnapshot]
    load_template: Callable[[Path], PullRequestTemplate | None]
    provider_manager: ProviderManager
    create_pr: Callable[..., PullRequestData]
    observe_step: Callable[[str, str, str | None], None] = _noop_observe_step
    observe_content: Callable[[GeneratedContent], None] = _noop_observe_content
    observe_provider_failures: Callable[[AllProvidersFailedError], None] = _noop_observe_failures


@dataclass(frozen=True)
class PRDescriptionResult:
    status: str
    message: str
    title: str | None = None
    body: str | None = None
    summary: str | None = None
    source: str | None = None
    pr_url: str | None = None
    error: str | None = None
