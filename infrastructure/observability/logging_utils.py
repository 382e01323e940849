import logging
import os
import re
from typing import Any

from infrastructure.observability.context import get_request_id


LOG_FORMAT = "%(asctime)s %(levelname)s [request_id=%(request_id)s] %(name)s - %(message)s"
MAX_FIELD_LENGTH = 500
REDACTED = "[REDACTED]"

# (pattern, replacement): header-style secrets keep their prefix, bare tokens vanish entirely.
_SECRET_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(Bearer\s+)[A-Za-z0-9_\-.]+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(x-(?:goog-)?api-key[\"']?\s*[:=]\s*[\"']?)[^\s\"',}]+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9_]+\b"), REDACTED),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]+\b"), REDACTED),
    (re.compile(r"\bsk-ant-[A-Za-z0-9_\-]+\b"), REDACTED),
    (re.compile(r"\bsk-[A-Za-z0-9_\-]{16,}\b"), REDACTED),
    (re.compile(r"\bAIza[0-9A-Za-z_\-]{20,}\b"), REDACTED),
)
# Credentials loaded at runtime (Jira token, provider keys) that match no known shape.
_registered_secrets: set[str] = set()


def register_sensitive_values(*values: str | None) -> None:
    _registered_secrets.update(value for value in values if value)


def redact_secrets(text: str) -> str:
    # Longest first so a secret containing another registered secret is fully masked.
    for secret in sorted(_registered_secrets, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def safe_message(message: str) -> str:
    return redact_secrets(message)


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: int | str | None = None) -> None:
    """Idempotent: installs the request-id aware format and record factory once per process."""
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_resolve_level(level), format=LOG_FORMAT)

    previous_factory = logging.getLogRecordFactory()
    if getattr(previous_factory, "_injects_request_id", False):
        return

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = previous_factory(*args, **kwargs)
        record.request_id = get_request_id()
        return record

    record_factory._injects_request_id = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(record_factory)


def _format_field_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = safe_message(value if isinstance(value, str) else repr(value))
    if len(text) > MAX_FIELD_LENGTH:
        text = f"{text[:MAX_FIELD_LENGTH]}...(+{len(text) - MAX_FIELD_LENGTH} chars)"
    return text


def structured_message(event: str, **fields: Any) -> str:
    """Render ``event=<name> key="value" ...``; None fields are dropped."""
    rendered = [f"event={safe_message(event)}"]
    rendered.extend(
        '{}="{}"'.format(key, _format_field_value(value).replace('"', '\\"'))
        for key, value in fields.items()
        if value is not None
    )
    return " ".join(rendered)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, structured_message(event, **fields))
