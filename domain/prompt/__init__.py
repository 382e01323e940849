from domain.prompt.builder import build_prompt
from domain.prompt.relevance import file_relevance
from domain.prompt.sections import (
    DESCRIPTION_PREVIEW_LENGTH,
    DOCUMENT_PREVIEW_LENGTH,
    INLINE_DIFF_LIMIT,
    MAX_LINE_LINKS,
)
from domain.prompt.summary_prompt import build_summary_prompt

__all__ = [
    "DESCRIPTION_PREVIEW_LENGTH",
    "DOCUMENT_PREVIEW_LENGTH",
    "INLINE_DIFF_LIMIT",
    "MAX_LINE_LINKS",
    "build_prompt",
    "build_summary_prompt",
    "file_relevance",
]
