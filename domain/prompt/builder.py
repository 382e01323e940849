from domain.models import PromptContext
from domain.prompt.sections import (
    change_statistics_section,
    diff_section,
    file_breakdown_section,
    linked_documents_section,
    ticket_section,
)


_INTRO = (
    "You are an expert software engineer helping to create a comprehensive pull request "
    "description. Please analyze the following information and generate a well-structured "
    "pull request description."
)

_INSTRUCTIONS = """
## Instructions:
Please generate a comprehensive pull request description that includes:
1. A clear, descriptive title
2. A detailed description explaining what changes were made and why
3. Any relevant context from the ticket and documentation
4. Testing considerations
5. Any breaking changes or migration notes
""".strip()

_OUTPUT_CONTRACT = """
## Output Format:
Respond with a single JSON object with the following fields:
{
  "title": "Clear and descriptive PR title",
  "description": "Detailed description of changes (markdown allowed)",
  "summary": "Brief summary of the changes (optional)"
}
The "body" key is accepted as an alias of "description".
CRITICAL: Return ONLY the raw JSON object. Do NOT wrap it in markdown code blocks. Do NOT include any text before or after the JSON.
""".strip()


def template_section(template_content: str) -> list[str]:
    return [
        "",
        "## PR Template:",
        "The description MUST follow this template exactly. Do NOT alter its structure, "
        "headings, order or checkboxes; only fill in the content.",
        "```",
        template_content,
        "```",
    ]


def build_prompt(context: PromptContext, prior_summary: str | None = None) -> str:
    lines = [_INTRO, ""]
    lines.extend(ticket_section(context.ticket))
    lines.extend(linked_documents_section(context.ticket.linked_documents))
    lines.extend(change_statistics_section(context.change_set))
    lines.extend(file_breakdown_section(context))
    lines.extend(diff_section(context.diff_text))

    if context.template:
        lines.extend(template_section(context.template.content))

    if prior_summary:
        lines.extend(["", "## Generated Summary:", prior_summary])

    if context.pr_title:
        lines.extend(["", "## Requested Title:", f"Use this title for the pull request: {context.pr_title}"])

    lines.extend(["", _INSTRUCTIONS, "", _OUTPUT_CONTRACT])
    return "\n".join(lines) + "\n"
