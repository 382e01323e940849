import logging
from pathlib import Path

from application.pr_description import RepositorySnapshot
from domain.diff import build_change_set, parse_numstat
from infrastructure.observability.logging_utils import log_event
from infrastructure.repo.operations import (
    GitCommandError,
    branch_diff,
    branch_exists,
    commit_subjects,
    current_branch,
    diff_numstat,
    has_uncommitted_changes,
    repo_link,
    truncate_diff,
)


logger = logging.getLogger(__name__)


def collect_changes(base_branch: str, repo_dir: Path) -> RepositorySnapshot:
    branch = current_branch(repo_dir)
    if branch == base_branch:
        raise GitCommandError(
            f"Cannot compare branch with itself. Current branch is '{base_branch}'. "
            "Please checkout a feature branch."
        )
    if not branch_exists(base_branch, repo_dir):
        raise GitCommandError(f"Base branch '{base_branch}' does not exist")
    if has_uncommitted_changes(repo_dir):
        log_event(logger, logging.WARNING, "repo.uncommitted_changes", branch=branch)

    diff_text = branch_diff(base_branch, repo_dir)
    change_set = build_change_set(
        parse_numstat(diff_numstat(base_branch, repo_dir)),
        diff_text,
        commit_subjects(base_branch, repo_dir),
    )
    log_event(
        logger,
        logging.INFO,
        "repo.changes.collected",
        branch=branch,
        files_count=change_set.total_files,
        insertions=change_set.total_insertions,
        deletions=change_set.total_deletions,
    )
    return RepositorySnapshot(
        branch=branch,
        change_set=change_set,
        diff_text=truncate_diff(diff_text),
        repo_link=repo_link(repo_dir, branch),
    )
