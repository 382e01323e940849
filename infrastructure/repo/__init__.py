from infrastructure.repo.changes import collect_changes
from infrastructure.repo.operations import GitCommandError, current_branch, parse_origin_url
from infrastructure.repo.templates import load_template

__all__ = [
    "GitCommandError",
    "collect_changes",
    "current_branch",
    "load_template",
    "parse_origin_url",
]
