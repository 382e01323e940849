from domain.models import FileChange, Ticket


_RELEVANCE_KEYWORDS = (
    "test",
    "spec",
    "specification",
    "config",
    "configuration",
    "readme",
    "documentation",
    "docs",
    "migration",
    "migrate",
    "api",
    "endpoint",
    "route",
    "component",
    "module",
    "service",
    "database",
    "db",
    "model",
    "schema",
    "ui",
    "frontend",
    "backend",
    "security",
    "auth",
    "authentication",
    "performance",
    "optimization",
    "cache",
)
_CONFIG_MARKERS = ("config", ".json", ".yaml", ".yml", ".toml")


def file_relevance(file: FileChange, ticket: Ticket) -> str:
    file_name = file.path.lower()
    ticket_summary = ticket.summary.lower()
    ticket_description = (ticket.description or "").lower()

    for keyword in _RELEVANCE_KEYWORDS:
        if keyword in file_name or keyword in ticket_summary or keyword in ticket_description:
            return f"Contains {keyword}-related changes"

    if any(marker in file_name for marker in _CONFIG_MARKERS):
        return "Configuration file changes"
    return ""
