from application.pr_description.contracts import (
    PRDescriptionConfig,
    PRDescriptionDependencies,
    PRDescriptionResult,
    PullRequestData,
    RepositorySnapshot,
)
from application.pr_description.use_case import run_pr_description_flow

__all__ = [
    "PRDescriptionConfig",
    "PRDescriptionDependencies",
    "PRDescriptionResult",
    "PullRequestData",
    "RepositorySnapshot",
    "run_pr_description_flow",
]
