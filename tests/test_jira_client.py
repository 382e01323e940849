import unittest
from unittest.mock import Mock

import requests

from infrastructure.jira import JiraClient, TicketFetchError, extract_ticket_key, is_valid_ticket_key
from infrastructure.jira.documents import adf_to_text, page_id_from_url, strip_markup, truncate_at_sentence


BASE_URL = "https://acme.atlassian.net"

ISSUE = {
    "key": "PROJ-12",
    "fields": {
        "summary": "Add export button",
        "description": {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "First paragraph."}]},
                {
                    "type": "paragraph",
                    "content": [
                        {"type": "text", "text": "Second "},
                        {"type": "text", "text": "paragraph."},
                    ],
                },
            ],
        },
        "issuetype": {"name": "Story"},
        "status": {"name": "In Progress"},
        "assignee": {"displayName": "Rui"},
        "reporter": {"displayName": "Ana"},
        "created": "2024-01-01T10:00:00.000+0000",
        "updated": "2024-01-02T10:00:00.000+0000",
        "parent": {"key": "PROJ-1"},
    },
}
PARENT = {"key": "PROJ-1", "fields": {"summary": " Reporting epic ", "issuetype": {"name": "Epic"}}}
REMOTE_LINKS = [
    {"object": {"url": f"{BASE_URL}/wiki/spaces/ENG/pages/777/Export+design"}},
    {"object": {"url": "https://example.com/not-docs"}},
]
PAGE = {"title": "Export design", "body": {"storage": {"value": "<p>Use CSV&nbsp;files.</p><p>Stream rows.</p>"}}}


def _response(status_code: int, payload=None) -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    return response


def _session(routes: dict[str, Mock]) -> Mock:
    session = Mock(spec=requests.Session)
    session.headers = {}

    def get(url: str, **_) -> Mock:
        return routes[url]

    session.get.side_effect = get
    return session


def _routes(**overrides) -> dict[str, Mock]:
    api = f"{BASE_URL}/rest/api/3"
    routes = {
        f"{api}/issue/PROJ-12": _response(200, ISSUE),
        f"{api}/issue/PROJ-1": _response(200, PARENT),
        f"{api}/issue/PROJ-12/remotelink": _response(200, REMOTE_LINKS),
        f"{BASE_URL}/wiki/rest/api/content/777": _response(200, PAGE),
    }
    routes.update(overrides)
    return routes


def _client(routes: dict[str, Mock]) -> JiraClient:
    return JiraClient(base_url=f"{BASE_URL}/", username="ana", api_token="token", session=_session(routes))


class JiraClientTests(unittest.TestCase):
    def test_ticket_fields_are_mapped(self) -> None:
        ticket = _client(_routes()).get_ticket("PROJ-12")

        self.assertEqual(ticket.key, "PROJ-12")
        self.assertEqual(ticket.summary, "Add export button")
        self.assertEqual(ticket.description, "First paragraph.\nSecond paragraph.")
        self.assertEqual((ticket.issue_type, ticket.status), ("Story", "In Progress"))
        self.assertEqual((ticket.assignee, ticket.reporter), ("Rui", "Ana"))
        self.assertEqual(ticket.parent.key, "PROJ-1")
        self.assertEqual(ticket.parent.summary, "Reporting epic")

    def test_linked_confluence_pages_become_documents(self) -> None:
        ticket = _client(_routes()).get_ticket("PROJ-12")

        self.assertEqual(len(ticket.linked_documents), 1)
        document = ticket.linked_documents[0]
        self.assertEqual(document.title, "Export design")
        self.assertEqual(document.content, "Use CSV files. Stream rows.")

    def test_epics_do_not_fetch_a_parent(self) -> None:
        epic = {"key": "PROJ-12", "fields": {**ISSUE["fields"], "issuetype": {"name": "Epic"}}}
        routes = _routes(**{f"{BASE_URL}/rest/api/3/issue/PROJ-12": _response(200, epic)})
        del routes[f"{BASE_URL}/rest/api/3/issue/PROJ-1"]

        ticket = _client(routes).get_ticket("PROJ-12")

        self.assertIsNone(ticket.parent)

    def test_missing_ticket_is_reported(self) -> None:
        routes = _routes(**{f"{BASE_URL}/rest/api/3/issue/PROJ-12": _response(404, {})})

        with self.assertRaises(TicketFetchError) as raised_error:
            _client(routes).get_ticket("PROJ-12")

        self.assertIn("not found", str(raised_error.exception))

    def test_access_denied_is_reported(self) -> None:
        for status_code in (401, 403):
            with self.subTest(status_code=status_code):
                routes = _routes(**{f"{BASE_URL}/rest/api/3/issue/PROJ-12": _response(status_code, {})})

                with self.assertRaises(TicketFetchError) as raised_error:
                    _client(routes).get_ticket("PROJ-12")

                self.assertIn("Access denied", str(raised_error.exception))


class DocumentHelpersTests(unittest.TestCase):
    def test_plain_string_descriptions_pass_through(self) -> None:
        self.assertEqual(adf_to_text("plain text"), "plain text")
        self.assertEqual(adf_to_text(None), "")

    def test_strip_markup_unescapes_and_collapses_whitespace(self) -> None:
        self.assertEqual(strip_markup("<h1>Title</h1>\n<p>a &amp; b</p>"), "Title a & b")

    def test_long_text_is_cut_at_sentence_boundary(self) -> None:
        self.assertEqual(truncate_at_sentence("One. Two. Three.", 10), "One. Two....")

    def test_page_id_is_read_from_both_url_styles(self) -> None:
        self.assertEqual(page_id_from_url("https://x/wiki/pages/viewpage.action?pageId=123"), "123")
        self.assertEqual(page_id_from_url("https://x/wiki/spaces/ENG/pages/456/Title"), "456")
        self.assertIsNone(page_id_from_url("https://x/wiki/display/ENG/Title"))


class TicketKeyTests(unittest.TestCase):
    def test_ticket_key_validation(self) -> None:
        self.assertTrue(is_valid_ticket_key("PROJ-123"))
        self.assertTrue(is_valid_ticket_key("A1-9"))
        self.assertFalse(is_valid_ticket_key("proj-123"))
        self.assertFalse(is_valid_ticket_key("PROJ123"))

    def test_ticket_key_is_extracted_from_branch_names(self) -> None:
        self.assertEqual(extract_ticket_key("feature/proj-123-login"), "PROJ-123")
        self.assertEqual(extract_ticket_key("PROJ-7"), "PROJ-7")
        self.assertEqual(extract_ticket_key("bugfix/ABC-42_fix"), "ABC-42")
        self.assertIsNone(extract_ticket_key("main"))


if __name__ == "__main__":
    unittest.main()
