import logging
import re
import subprocess
from pathlib import Path
from typing import Sequence

from domain.models import RepoLink
from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

MAX_DIFF_LINES = 1000
DIFF_TRUNCATION_MARKER = "... (diff truncated for brevity)"
_ORIGIN_PATTERN = re.compile(r"github\.com[/:]([\w-]+)/([\w.-]+?)(?:\.git)?/?$")


class GitCommandError(RuntimeError):
    """Raised when a git command exits with a non-zero status."""


def _execute_command(command: Sequence[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(command, cwd=cwd, capture_output=True, text=True)


def run(command: Sequence[str], cwd: Path | None = None) -> str:
    log_event(logger, logging.INFO, "repo.command.run", command=list(command), cwd=str(cwd) if cwd else None)
    result = _execute_command(command, cwd=cwd)
    if result.returncode != 0:
        stderr = safe_message(result.stderr.strip()) if result.stderr else ""
        if stderr:
            log_event(logger, logging.ERROR, "repo.command.stderr", output=stderr)
        raise GitCommandError(
            safe_message(
                f"Command failed (exit_code={result.returncode}): {' '.join(command)}"
                + (f": {stderr}" if stderr else "")
            )
        )
    return result.stdout


def run_capture(
    command: Sequence[str],
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    log_event(
        logger,
        logging.INFO,
        "repo.command.run_capture",
        command=list(command),
        cwd=str(cwd) if cwd else None,
    )
    return _execute_command(command, cwd=cwd)


def current_branch(repo_dir: Path) -> str:
    return run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir).strip()


def diff_numstat(base_branch: str, repo_dir: Path) -> str:
    return run(["git", "diff", "--numstat", f"{base_branch}...HEAD"], cwd=repo_dir)


def branch_diff(base_branch: str, repo_dir: Path) -> str:
    return run(["git", "diff", f"{base_branch}...HEAD"], cwd=repo_dir)


def truncate_diff(diff_text: str, max_lines: int = MAX_DIFF_LINES) -> str:
    lines = diff_text.split("\n")
    if len(lines) <= max_lines:
        return diff_text
    return "\n".join(lines[:max_lines]) + f"\n\n{DIFF_TRUNCATION_MARKER}"


def commit_subjects(base_branch: str, repo_dir: Path) -> tuple[str, ...]:
    output = run(["git", "log", f"{base_branch}..HEAD", "--pretty=%s"], cwd=repo_dir)
    return tuple(line for line in output.splitlines() if line.strip())


def parse_origin_url(url: str) -> tuple[str, str] | None:
    match = _ORIGIN_PATTERN.search(url.strip())
    return (match.group(1), match.group(2)) if match else None


def origin_repository(repo_dir: Path) -> tuple[str, str] | None:
    result = run_capture(["git", "remote", "get-url", "origin"], cwd=repo_dir)
    if result.returncode != 0:
        return None
    return parse_origin_url(result.stdout)


def repo_link(repo_dir: Path, branch: str) -> RepoLink | None:
    repository = origin_repository(repo_dir)
    if repository is None:
        return None
    owner, repo = repository
    return RepoLink(owner=owner, repo=repo, branch=branch)


def has_uncommitted_changes(repo_dir: Path) -> bool:
    return bool(run(["git", "status", "--porcelain"], cwd=repo_dir).strip())


def branch_exists(branch: str, repo_dir: Path) -> bool:
    local = run_capture(["git", "rev-parse", "--verify", "--quiet", f"{branch}^{{commit}}"], cwd=repo_dir)
    if local.returncode == 0:
        return True
    remote = run_capture(
        ["git", "show-ref", "--verify", "--quiet", f"refs/remotes/origin/{branch}"],
        cwd=repo_dir,
    )
    return remote.returncode == 0
