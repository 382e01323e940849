import logging
from typing import Any

import requests

from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
API_VERSION = "2022-11-28"
REQUEST_TIMEOUT_SECONDS = 30.0


class GitHubAPIError(RuntimeError):
    """GitHub answered with an error status."""

    def __init__(self, action: str, status_code: int, details: str) -> None:
        super().__init__(safe_message(f"GitHub {action} failed ({status_code}): {details}"))
        self.status_code = status_code


def _error_details(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if not isinstance(payload, dict):
        return str(payload)
    return f"{payload.get('message', '')} | errors={payload.get('errors', '')}"


class GitHubClient:
    """Pull-request operations for a single repository."""

    def __init__(
        self,
        *,
        token: str,
        owner: str,
        repo: str,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.pulls_url = f"{API_ROOT}/repos/{owner}/{repo}/pulls"
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    def _checked(self, response: requests.Response, action: str) -> Any:
        if response.status_code >= 400:
            error = GitHubAPIError(action, response.status_code, _error_details(response))
            log_event(logger, logging.ERROR, "github.request.failed", action=action, error=str(error))
            raise error
        return response.json()

    def find_open_pr(self, head: str) -> dict[str, Any] | None:
        response = self.session.get(
            self.pulls_url,
            params={"head": f"{self.owner}:{head}", "state": "open"},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        pulls = self._checked(response, "pull request lookup")
        log_event(logger, logging.INFO, "github.pr.lookup", head=head, open_count=len(pulls))
        return pulls[0] if pulls else None

    def create_pr(self, head: str, base: str, title: str, body: str) -> dict[str, Any]:
        existing = self.find_open_pr(head)
        if existing is not None:
            raise RuntimeError(
                f"A pull request already exists for branch '{head}': {existing.get('html_url')}"
            )

        log_event(logger, logging.INFO, "github.pr.create", head=head, base=base, title=title)
        response = self.session.post(
            self.pulls_url,
            json={"title": title, "head": head, "base": base, "body": body},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        return self._checked(response, "PR creation")
