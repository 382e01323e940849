import unittest
from unittest.mock import Mock

import requests

from infrastructure.github import GitHubClient
from infrastructure.github.github_client import GitHubAPIError


PULLS_URL = "https://api.github.com/repos/acme/widgets/pulls"


def _response(status_code: int, payload=None) -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    response.text = ""
    return response


def _client(session: Mock) -> GitHubClient:
    session.headers = {}
    return GitHubClient(token="ghp_secret", owner="acme", repo="widgets", session=session)


class GitHubClientTests(unittest.TestCase):
    def test_sets_auth_headers_on_session(self) -> None:
        session = Mock(spec=requests.Session)
        _client(session)

        self.assertEqual(session.headers["Authorization"], "Bearer ghp_secret")
        self.assertEqual(session.headers["Accept"], "application/vnd.github+json")

    def test_find_open_pr_queries_by_owner_qualified_head(self) -> None:
        session = Mock(spec=requests.Session)
        session.get.return_value = _response(200, [{"html_url": "https://github.com/acme/widgets/pull/3"}])
        client = _client(session)

        pull = client.find_open_pr("feature/PROJ-1")

        self.assertEqual(pull["html_url"], "https://github.com/acme/widgets/pull/3")
        _, kwargs = session.get.call_args
        self.assertEqual(kwargs["params"], {"head": "acme:feature/PROJ-1", "state": "open"})

    def test_find_open_pr_returns_none_when_nothing_is_open(self) -> None:
        session = Mock(spec=requests.Session)
        session.get.return_value = _response(200, [])

        self.assertIsNone(_client(session).find_open_pr("feature/PROJ-1"))

    def test_create_pr_posts_payload(self) -> None:
        session = Mock(spec=requests.Session)
        session.get.return_value = _response(200, [])
        session.post.return_value = _response(201, {"html_url": "https://github.com/acme/widgets/pull/4"})
        client = _client(session)

        created = client.create_pr(head="feature/PROJ-1", base="main", title="Add export", body="Body")

        self.assertEqual(created["html_url"], "https://github.com/acme/widgets/pull/4")
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], PULLS_URL)
        self.assertEqual(
            kwargs["json"],
            {"title": "Add export", "head": "feature/PROJ-1", "base": "main", "body": "Body"},
        )

    def test_create_pr_refuses_when_branch_already_has_open_pr(self) -> None:
        session = Mock(spec=requests.Session)
        session.get.return_value = _response(200, [{"html_url": "https://github.com/acme/widgets/pull/3"}])
        client = _client(session)

        with self.assertRaises(RuntimeError) as context:
            client.create_pr(head="feature/PROJ-1", base="main", title="t", body="b")

        self.assertIn("pull/3", str(context.exception))
        session.post.assert_not_called()

    def test_api_error_carries_status_and_details(self) -> None:
        session = Mock(spec=requests.Session)
        session.get.return_value = _response(200, [])
        session.post.return_value = _response(
            422,
            {"message": "Validation Failed", "errors": [{"message": "No commits between main and feature"}]},
        )
        client = _client(session)

        with self.assertRaises(GitHubAPIError) as context:
            client.create_pr(head="feature/PROJ-1", base="main", title="t", body="b")

        self.assertEqual(context.exception.status_code, 422)
        self.assertIn("Validation Failed", str(context.exception))
        self.assertIn("No commits between", str(context.exception))


if __name__ == "__main__":
    unittest.main()
