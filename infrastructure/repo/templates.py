from pathlib import Path

from domain.models import PullRequestTemplate


TEMPLATE_PATHS = (
    ".github/pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE.md",
    "pull_request_template.md",
    "PULL_REQUEST_TEMPLATE.md",
    ".github/PULL_REQUEST_TEMPLATE/default.md",
)
TEMPLATE_DIRECTORY = ".github/PULL_REQUEST_TEMPLATE"


def _candidates(repo_dir: Path) -> list[Path]:
    candidates = [repo_dir / relative_path for relative_path in TEMPLATE_PATHS]
    template_dir = repo_dir / TEMPLATE_DIRECTORY
    if template_dir.is_dir():
        candidates += sorted(template_dir.glob("*.md"))
    return candidates


def load_template(repo_dir: Path) -> PullRequestTemplate | None:
    for path in _candidates(repo_dir):
        if not path.is_file():
            continue
        content = path.read_text(encoding="utf-8")
        if content.strip():
            return PullRequestTemplate(name=path.name, content=content)
    return None
