import logging
from typing import Any

import requests

from domain.models import LinkedDocument, ParentTicket, Ticket
from infrastructure.jira.documents import adf_to_text, is_document_link, page_id_from_url, strip_markup
from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

TICKET_FIELDS = "summary,description,issuetype,status,assignee,reporter,created,updated,parent"
MAX_LINKED_DOCUMENTS = 5
REQUEST_TIMEOUT_SECONDS = 30.0


class TicketFetchError(RuntimeError):
    """Raised when the issue tracker cannot return a ticket."""


def _name(value: Any, key: str = "name") -> str | None:
    if isinstance(value, dict):
        return value.get(key)
    return None


class JiraClient:
    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        api_token: str,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}/rest/api/3"
        self.session = session or requests.Session()
        self.session.auth = (username, api_token)
        self.session.headers.update({"Accept": "application/json"})

    def _get(self, url: str, *, params: dict[str, str] | None = None, ticket_key: str) -> Any:
        try:
            response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as error:
            raise TicketFetchError(safe_message(f"Failed to reach Jira for {ticket_key}: {error}")) from error

        if response.status_code == 404:
            raise TicketFetchError(f"Jira ticket {ticket_key} not found")
        if response.status_code in (401, 403):
            raise TicketFetchError(
                f"Access denied to Jira ticket {ticket_key}. Please check your Jira credentials."
            )
        if response.status_code >= 400:
            log_event(
                logger,
                logging.ERROR,
                "jira.request.failed",
                ticket_key=ticket_key,
                status_code=response.status_code,
            )
            raise TicketFetchError(f"Jira request failed ({response.status_code}) for {ticket_key}")
        try:
            return response.json()
        except ValueError as error:
            raise TicketFetchError(f"Jira returned a non-JSON body for {ticket_key}") from error

    def get_ticket(self, ticket_key: str) -> Ticket:
        log_event(logger, logging.INFO, "jira.ticket.get", ticket_key=ticket_key)
        issue = self._get(
            f"{self.api_base}/issue/{ticket_key}",
            params={"fields": TICKET_FIELDS},
            ticket_key=ticket_key,
        )
        fields = issue.get("fields") or {}
        issue_type = _name(fields.get("issuetype")) or "Unknown"

        return Ticket(
            key=issue.get("key") or ticket_key,
            summary=fields.get("summary") or "",
            description=adf_to_text(fields.get("description")).strip(),
            issue_type=issue_type,
            status=_name(fields.get("status")) or "Unknown",
            assignee=_name(fields.get("assignee"), "displayName"),
            reporter=_name(fields.get("reporter"), "displayName") or "Unknown",
            created=fields.get("created"),
            updated=fields.get("updated"),
            parent=self._get_parent(fields, issue_type),
            linked_documents=tuple(self.get_linked_documents(ticket_key)),
        )

    def _get_parent(self, fields: dict[str, Any], issue_type: str) -> ParentTicket | None:
        parent = fields.get("parent")
        if not isinstance(parent, dict) or not parent.get("key") or issue_type.lower() == "epic":
            return None

        parent_key = parent["key"]
        parent_issue = self._get(
            f"{self.api_base}/issue/{parent_key}",
            params={"fields": "summary,issuetype"},
            ticket_key=parent_key,
        )
        parent_fields = parent_issue.get("fields") or {}
        summary = (parent_fields.get("summary") or "").strip()
        if not summary:
            return None
        return ParentTicket(
            key=parent_key,
            summary=summary,
            issue_type=_name(parent_fields.get("issuetype")) or "Unknown",
        )

    def get_linked_documents(self, ticket_key: str) -> list[LinkedDocument]:
        links = self._get(f"{self.api_base}/issue/{ticket_key}/remotelink", ticket_key=ticket_key)
        if not isinstance(links, list):
            return []

        urls = [
            link["object"]["url"]
            for link in links
            if isinstance(link, dict)
            and isinstance(link.get("object"), dict)
            and isinstance(link["object"].get("url"), str)
            and is_document_link(link["object"]["url"])
        ]

        documents: list[LinkedDocument] = []
        for url in urls[:MAX_LINKED_DOCUMENTS]:
            document = self._get_document(url, ticket_key)
            if document is not None:
                documents.append(document)
        return documents

    def _get_document(self, url: str, ticket_key: str) -> LinkedDocument | None:
        page_id = page_id_from_url(url)
        if page_id is None:
            log_event(logger, logging.INFO, "jira.document.skipped", ticket_key=ticket_key, url=url)
            return None
        page = self._get(
            f"{self.base_url}/wiki/rest/api/content/{page_id}",
            params={"expand": "body.storage"},
            ticket_key=ticket_key,
        )
        storage = ((page.get("body") or {}).get("storage") or {}).get("value") or ""
        return LinkedDocument(
            title=page.get("title") or "Untitled",
            url=url,
            content=strip_markup(storage),
        )
