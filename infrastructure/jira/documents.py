import html
import re
from typing import Any


MAX_DOCUMENT_LENGTH = 5000
MAX_HTML_INPUT_LENGTH = 100_000

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_SENTENCE_PATTERN = re.compile(r"[^.!?]*[.!?]+")
_PAGE_ID_PATTERN = re.compile(r"pageId=(\d+)")
_PAGE_PATH_PATTERN = re.compile(r"/pages/(\d+)(?:/|$)")


def adf_to_text(node: Any) -> str:
    """Flatten an Atlassian Document Format tree (or a plain string) into text."""
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, list):
        return "".join(adf_to_text(child) for child in node)
    if not isinstance(node, dict):
        return ""

    if node.get("type") == "text":
        return node.get("text") or ""
    if node.get("type") == "hardBreak":
        return "\n"

    text = adf_to_text(node.get("content"))
    if node.get("type") in {"paragraph", "heading", "listItem", "codeBlock", "blockquote"}:
        return text.rstrip("\n") + "\n"
    return text


def truncate_at_sentence(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    result = ""
    for sentence in _SENTENCE_PATTERN.findall(text):
        if len(result) + len(sentence) > limit:
            break
        result += sentence
    # Sem fronteira de frase util: corta seco.
    if not result:
        result = text[:limit]
    return result.strip() + "..."


def strip_markup(content: str, *, limit: int = MAX_DOCUMENT_LENGTH) -> str:
    if not content:
        return ""
    text = _TAG_PATTERN.sub(" ", content[:MAX_HTML_INPUT_LENGTH])
    text = _WHITESPACE_PATTERN.sub(" ", html.unescape(text)).strip()
    return truncate_at_sentence(text, limit)


def is_document_link(url: str) -> bool:
    return "confluence" in url or "wiki" in url


def page_id_from_url(url: str) -> str | None:
    match = _PAGE_ID_PATTERN.search(url) or _PAGE_PATH_PATTERN.search(url)
    return match.group(1) if match else None
