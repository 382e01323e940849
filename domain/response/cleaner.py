import json
import re
from typing import Any


_JSON_FENCE_PATTERN = re.compile(r"```json\s*")
_FENCE_PATTERN = re.compile(r"```\s*")
_GREEDY_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    cleaned = _JSON_FENCE_PATTERN.sub("", text)
    cleaned = _FENCE_PATTERN.sub("", cleaned)
    return cleaned.strip()


def isolate_json_candidate(text: str) -> str:
    """Return the outermost {...} span of the fence-stripped text, or the text itself."""
    cleaned = strip_code_fences(text)
    match = _GREEDY_OBJECT_PATTERN.search(cleaned)
    return match.group(0) if match else cleaned


def load_json_candidate(text: str) -> Any | None:
    try:
        return json.loads(isolate_json_candidate(text))
    except (ValueError, RecursionError):
        return None
