from domain.diff import extract_diff_summary
from domain.models import FileChange, PromptContext
from domain.prompt.builder import template_section
from domain.prompt.sections import (
    DESCRIPTION_PREVIEW_LENGTH,
    change_statistics_section,
    linked_documents_section,
    ticket_section,
    truncate,
)


MAX_FILE_DIFF_LENGTH = 2000
MAX_OVERALL_DIFF_LENGTH = 3000
_KEY_LINE_COUNT = 3

_SUMMARY_REQUIREMENTS = """
## Summary Requirements:
Analyze the diff content carefully and describe the actual code changes.
Provide a structured markdown summary with these sections:
- Ticket URLs at the very top
- Overview (what changes and why, tied to the ticket requirements)
- File Changes (one entry per file, linking files and key lines when URLs are provided)
- Technical Implementation Details
- Review Focus Areas
Do NOT include checklists or "- [ ]" items in the summary.
Return the response as JSON with a single "summary" field, for example:
{"summary": "## Overview\\n...\\n\\n## File Changes\\n..."}
CRITICAL: Return ONLY the raw JSON object. Do NOT wrap it in markdown code blocks. Do NOT include any text before or after the JSON.
""".strip()


def _file_summary_lines(file: FileChange, context: PromptContext) -> list[str]:
    lines = [
        "",
        f"**{file.path}** ({file.status.value}):",
        f"- Changes: +{file.insertions} insertions, -{file.deletions} deletions",
    ]
    repo_link = context.repo_link
    if repo_link:
        lines.append(f"- GitHub URL: {repo_link.file_url(file.path)}")
        if file.line_numbers and file.line_numbers.added:
            key_lines = file.line_numbers.added[:_KEY_LINE_COUNT]
            links = ", ".join(repo_link.line_url(file.path, number) for number in key_lines)
            lines.append(f"- Key changes at lines: {links}")

    if file.diff:
        truncated = truncate(file.diff, MAX_FILE_DIFF_LENGTH, "\n... (diff truncated for brevity)")
        lines.extend(["- Code diff:", "```diff", truncated, "```"])
    else:
        lines.append("- No detailed diff available for this file")
    return lines


def build_summary_prompt(context: PromptContext) -> str:
    """First-pass prompt: ask the model for a structured summary only."""
    lines = [
        "Generate a detailed summary of this pull request with file links and explanations "
        "based on the following information:",
        "",
    ]
    lines.extend(ticket_section(context.ticket, description_limit=DESCRIPTION_PREVIEW_LENGTH))
    lines.extend(linked_documents_section(context.ticket.linked_documents))

    if context.template:
        lines.extend(template_section(context.template.content))
        lines.append("Make sure the summary fits the sections of this template.")

    lines.extend(change_statistics_section(context.change_set))
    lines.extend(["", "### Specific File Changes:"])
    for file in context.change_set.files:
        lines.extend(_file_summary_lines(file, context))

    lines.extend(["", "## Overall Code Changes:"])
    if context.diff_text:
        overall = truncate(
            context.diff_text,
            MAX_OVERALL_DIFF_LENGTH,
            "\n... (overall diff truncated for brevity)",
        )
        lines.extend(["```diff", overall, "```"])
        patterns = extract_diff_summary(context.diff_text)
        if patterns:
            lines.extend(["", "### High-level code change patterns:"])
            lines.extend(f"- {pattern}" for pattern in patterns)
    else:
        lines.append("Overall diff content not available. Analysis based on file-level changes above.")

    lines.extend(["", _SUMMARY_REQUIREMENTS])
    return "\n".join(lines) + "\n"
