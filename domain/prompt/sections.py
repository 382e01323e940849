from domain.diff import extract_diff_summary
from domain.models import ChangeSet, FileChange, LinkedDocument, PromptContext, RepoLink, Ticket
from domain.prompt.relevance import file_relevance


INLINE_DIFF_LIMIT = 4000
DESCRIPTION_PREVIEW_LENGTH = 500
DOCUMENT_PREVIEW_LENGTH = 200
MAX_LINE_LINKS = 10


def truncate(text: str, limit: int, marker: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + marker


def ticket_section(ticket: Ticket, *, description_limit: int | None = None) -> list[str]:
    lines = [
        "## Ticket Information:",
        f"- **Ticket**: {ticket.key}",
        f"- **Summary**: {ticket.summary}",
        f"- **Type**: {ticket.issue_type}",
        f"- **Status**: {ticket.status}",
        f"- **Assignee**: {ticket.assignee or 'Unassigned'}",
        f"- **Reporter**: {ticket.reporter}",
    ]
    if ticket.description:
        description = ticket.description
        if description_limit is not None:
            description = truncate(description, description_limit)
        lines.append(f"- **Description**: {description}")
    if ticket.parent:
        lines.append(f"- **Parent Ticket**: {ticket.parent.key} - {ticket.parent.summary}")
    return lines


def linked_documents_section(documents: tuple[LinkedDocument, ...]) -> list[str]:
    if not documents:
        return []
    lines = ["", "## Related Documentation:"]
    for document in documents:
        excerpt = document.content[:DOCUMENT_PREVIEW_LENGTH]
        lines.append(f"- **{document.title}**: {excerpt}...")
        lines.append(f"  Source: {document.url}")
    return lines


def change_statistics_section(change_set: ChangeSet) -> list[str]:
    lines = [
        "",
        "## Code Changes:",
        f"- **Total Files Changed**: {change_set.total_files}",
        f"- **Total Insertions**: {change_set.total_insertions}",
        f"- **Total Deletions**: {change_set.total_deletions}",
    ]
    if change_set.commits:
        lines.append(f"- **Commits**: {', '.join(change_set.commits)}")
    return lines


def line_links(repo_link: RepoLink, path: str, line_numbers: tuple[int, ...]) -> str:
    return ", ".join(
        repo_link.line_url(path, line_number) for line_number in line_numbers[:MAX_LINE_LINKS]
    )


def file_breakdown_section(context: PromptContext) -> list[str]:
    lines = ["", "## Files Modified:"]
    for file in context.change_set.files:
        lines.extend(_file_lines(file, context))
    return lines


def _file_lines(file: FileChange, context: PromptContext) -> list[str]:
    lines = [
        f"- **{file.path}** ({file.status.value})",
        f"  - Changes: {file.changes} lines",
        f"  - Insertions: {file.insertions}",
        f"  - Deletions: {file.deletions}",
    ]
    repo_link = context.repo_link
    if repo_link and file.line_numbers:
        lines.append(f"  - File: {repo_link.file_url(file.path)}")
        if file.line_numbers.added:
            lines.append(f"  - Added lines: {line_links(repo_link, file.path, file.line_numbers.added)}")
        if file.line_numbers.removed:
            lines.append(
                f"  - Removed lines: {line_links(repo_link, file.path, file.line_numbers.removed)}"
            )
    relevance = file_relevance(file, context.ticket)
    if relevance:
        lines.append(f"  - Relevance: {relevance}")
    return lines


def diff_section(diff_text: str | None) -> list[str]:
    if not diff_text:
        return []
    if len(diff_text) < INLINE_DIFF_LIMIT:
        return ["", "## Code Diff:", "```diff", diff_text, "```"]
    return ["", "## Code Diff Summary:", *extract_diff_summary(diff_text)]
