import re


# Length bounds are exclusive on both ends.
TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 100
SUMMARY_MIN_LENGTH = 20
SUMMARY_MAX_LENGTH = 200

PLACEHOLDER_TITLE = "Pull Request"

# First match wins.
TITLE_PATTERNS = (
    re.compile(r"^#[ \t]+(.+)$", re.MULTILINE),
    re.compile(r"^Title:[ \t]*(.+)$", re.MULTILINE | re.IGNORECASE),
    re.compile(r"^##[ \t]+(.+)$", re.MULTILINE),
    re.compile(r"^###[ \t]+(.+)$", re.MULTILINE),
)

SUMMARY_PATTERNS = (
    re.compile(r"^Summary:[ \t]*(.+)$", re.MULTILINE | re.IGNORECASE),
    re.compile(r"^## Summary\s*\n(.+)$", re.MULTILINE | re.IGNORECASE),
    re.compile(r"^### Summary\s*\n(.+)$", re.MULTILINE | re.IGNORECASE),
)


def _first_pattern_match(patterns: tuple[re.Pattern[str], ...], text: str) -> str | None:
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = match.group(1).strip()
            if value:
                return value
    return None


def extract_title(text: str) -> str | None:
    title = _first_pattern_match(TITLE_PATTERNS, text)
    if title:
        return title

    for line in text.split("\n"):
        candidate = line.strip()
        if TITLE_MIN_LENGTH < len(candidate) < TITLE_MAX_LENGTH:
            return candidate
    return None


def first_meaningful_line(text: str) -> str | None:
    for line in text.split("\n"):
        candidate = line.strip().lstrip("#").strip()
        if candidate:
            return candidate[:TITLE_MAX_LENGTH]
    return None


def derive_title(text: str) -> str:
    return extract_title(text) or first_meaningful_line(text) or PLACEHOLDER_TITLE


def extract_summary(text: str) -> str | None:
    summary = _first_pattern_match(SUMMARY_PATTERNS, text)
    if summary:
        return summary

    first_paragraph = text.split("\n\n")[0].strip()
    if SUMMARY_MIN_LENGTH < len(first_paragraph) < SUMMARY_MAX_LENGTH:
        return first_paragraph
    return None
