import re


TICKET_KEY_PATTERN = re.compile(r"^[A-Z][A-Z0-9]*-\d+$")
BRANCH_TICKET_PATTERN = re.compile(r"(?:^|[/\-_])([A-Z][A-Z0-9]*-\d+)(?:[/\-_]|$)", re.IGNORECASE)


def is_valid_ticket_key(value: str) -> bool:
    return bool(TICKET_KEY_PATTERN.match(value))


def extract_ticket_key(branch: str) -> str | None:
    """Pull a ticket key such as ``PROJ-123`` out of a branch name like ``feature/proj-123-login``."""
    match = BRANCH_TICKET_PATTERN.search(branch)
    return match.group(1).upper() if match else None
