from typing import Any, Protocol

from jsonschema import ValidationError, validate

from domain.models import GeneratedContent
from domain.response.cleaner import load_json_candidate, strip_code_fences
from domain.response.heuristics import derive_title, extract_summary


_OPTIONAL_TEXT = {"type": ["string", "null"]}

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": _OPTIONAL_TEXT,
        "description": _OPTIONAL_TEXT,
        "body": _OPTIONAL_TEXT,
        "summary": _OPTIONAL_TEXT,
    },
}
SUMMARY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["summary"],
    "properties": {"summary": {"type": "string", "minLength": 1}},
}


def _matches_schema(payload: Any, schema: dict[str, Any]) -> bool:
    try:
        validate(instance=payload, schema=schema)
    except ValidationError:
        return False
    return True


class ContentExtractor(Protocol):
    def extract_content_from_response(self, response: Any) -> str:
        ...


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _extract_from_text(content: str) -> GeneratedContent:
    return GeneratedContent(
        title=derive_title(content),
        body=content,
        summary=extract_summary(content),
    )


def parse_response_content(content: str) -> GeneratedContent:
    """Normalize raw model text into a title/body/summary triple. Never raises."""
    if not isinstance(content, str):
        content = "" if content is None else str(content)

    payload = load_json_candidate(content)
    if payload is None or not _matches_schema(payload, RESPONSE_SCHEMA):
        return _extract_from_text(content)

    title = _non_blank(payload.get("title"))
    body = _non_blank(payload.get("description")) or _non_blank(payload.get("body"))
    return GeneratedContent(
        title=title.strip() if title else derive_title(body or content),
        body=body or content,
        summary=_non_blank(payload.get("summary")),
    )


def parse_ai_response(response: Any, extractor: ContentExtractor) -> GeneratedContent:
    """Pull the vendor text out of a raw response body, then normalize it.

    ContentExtractionError from the extractor propagates; only the text parsing is total.
    """
    return parse_response_content(extractor.extract_content_from_response(response))


def parse_summary_response(content: str) -> str:
    payload = load_json_candidate(content)
    if payload is not None and _matches_schema(payload, SUMMARY_SCHEMA):
        return payload["summary"].strip()
    return strip_code_fences(content)

