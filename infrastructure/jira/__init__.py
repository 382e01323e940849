from infrastructure.jira.client import JiraClient, TicketFetchError
from infrastructure.jira.ticket_keys import extract_ticket_key, is_valid_ticket_key

__all__ = ["JiraClient", "TicketFetchError", "extract_ticket_key", "is_valid_ticket_key"]
