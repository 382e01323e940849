from domain.response.heuristics import (
    PLACEHOLDER_TITLE,
    SUMMARY_MAX_LENGTH,
    SUMMARY_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    extract_summary,
    extract_title,
)
from domain.response.parser import (
    ContentExtractor,
    parse_ai_response,
    parse_response_content,
    parse_summary_response,
)

__all__ = [
    "ContentExtractor",
    "PLACEHOLDER_TITLE",
    "SUMMARY_MAX_LENGTH",
    "SUMMARY_MIN_LENGTH",
    "TITLE_MAX_LENGTH",
    "TITLE_MIN_LENGTH",
    "extract_summary",
    "extract_title",
    "parse_ai_response",
    "parse_response_content",
    "parse_summary_response",
]
