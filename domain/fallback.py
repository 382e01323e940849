import re

from domain.models import OFFLINE_SOURCE, ChangeSet, FileChange, GeneratedContent, PromptContext, Ticket
from domain.prompt import file_relevance


MAX_PR_TITLE_LENGTH = 256
MAX_LISTED_LINES = 10
SIGNIFICANT_CHANGE_THRESHOLD = 10

_TEMPLATE_PLACEHOLDERS = {
    "ticket": re.compile(r"\{\{ticket\}\}", re.IGNORECASE),
    "summary": re.compile(r"\{\{summary\}\}", re.IGNORECASE),
    "description": re.compile(r"\{\{description\}\}", re.IGNORECASE),
}


def fallback_title(ticket: Ticket, pr_title: str | None = None) -> str:
    title = pr_title or f"{ticket.key}: {ticket.summary}"
    return title[:MAX_PR_TITLE_LENGTH]


def fallback_summary(ticket: Ticket, change_set: ChangeSet) -> str:
    return (
        f"{ticket.summary.rstrip('.')}. This change touches {change_set.total_files} file(s) "
        f"with {change_set.total_insertions} insertion(s) and "
        f"{change_set.total_deletions} deletion(s)."
    )


def _ticket_reference(ticket: Ticket, ticket_base_url: str | None) -> str:
    if ticket_base_url:
        return f"[{ticket.key}]({ticket_base_url.rstrip('/')}/browse/{ticket.key})"
    return ticket.key


def _listed_lines(label: str, line_numbers: tuple[int, ...]) -> str:
    shown = ", ".join(str(number) for number in line_numbers[:MAX_LISTED_LINES])
    hidden = len(line_numbers) - MAX_LISTED_LINES
    suffix = f" (and {hidden} more)" if hidden > 0 else ""
    return f"- **{label}:** {shown}{suffix}"


def _file_section(file: FileChange, ticket: Ticket) -> list[str]:
    lines = [
        f"#### `{file.path}` ({file.status.value})",
        f"- **Changes:** +{file.insertions} insertions, -{file.deletions} deletions",
    ]
    if file.line_numbers:
        if file.line_numbers.added:
            lines.append(_listed_lines("Added lines", file.line_numbers.added))
        if file.line_numbers.removed:
            lines.append(_listed_lines("Removed lines", file.line_numbers.removed))
    relevance = file_relevance(file, ticket)
    if relevance:
        lines.append(f"- **Relevance:** {relevance}")
    lines.append("")
    return lines


def _fill_template(template_content: str, ticket: Ticket, summary: str) -> str:
    values = {
        "ticket": ticket.key,
        "summary": summary,
        "description": ticket.description or "No description provided",
    }
    filled = template_content
    for name, pattern in _TEMPLATE_PLACEHOLDERS.items():
        filled = pattern.sub(lambda _: values[name], filled)
    return filled


def _default_layout(ticket: Ticket, change_set: ChangeSet) -> list[str]:
    lines = [f"**Ticket Summary:** {ticket.summary}", ""]
    if ticket.description:
        lines.extend([f"**Ticket Description:** {ticket.description}", ""])

    lines.extend(
        [
            "## Changes",
            "",
            f"- **Files changed:** {change_set.total_files}",
            f"- **Insertions:** +{change_set.total_insertions}",
            f"- **Deletions:** -{change_set.total_deletions}",
            "",
            "### File-by-File Changes:",
            "",
        ]
    )
    for file in change_set.files:
        lines.extend(_file_section(file, ticket))

    if change_set.commits:
        lines.extend(["## Commit History", ""])
        lines.extend(f"- {commit}" for commit in change_set.commits)
        lines.append("")

    significant_files = [
        file for file in change_set.files if file.changes > SIGNIFICANT_CHANGE_THRESHOLD
    ]
    if significant_files:
        lines.extend(["## Key Implementation Areas", ""])
        lines.extend(f"- `{file.path}` ({file.changes} lines changed)" for file in significant_files)
        lines.append("")
    return lines


def generate_fallback_description(
    context: PromptContext,
    *,
    ticket_base_url: str | None = None,
) -> GeneratedContent:
    """Deterministic description used when every provider failed."""
    ticket = context.ticket
    summary = fallback_summary(ticket, context.change_set)

    body_lines = [_ticket_reference(ticket, ticket_base_url), "", "## Summary", "", summary, ""]
    if context.template and context.template.content:
        body_lines.append(_fill_template(context.template.content, ticket, summary))
    else:
        body_lines.extend(_default_layout(ticket, context.change_set))

    return GeneratedContent(
        title=fallback_title(ticket, context.pr_title),
        body="\n".join(body_lines).rstrip() + "\n",
        summary=summary,
        source=OFFLINE_SOURCE,
    )
