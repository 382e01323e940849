MAX_SUMMARY_FILES = 20
_UNKNOWN_FILE = "unknown"


def _file_from_header(header_line: str) -> str:
    tokens = header_line.split(" ")
    return tokens[3] if len(tokens) > 3 and tokens[3] else _UNKNOWN_FILE


def extract_diff_summary(diff_text: str) -> list[str]:
    summary: list[str] = []
    current_file = ""
    added_lines = 0
    removed_lines = 0

    def flush() -> None:
        if current_file and (added_lines > 0 or removed_lines > 0):
            summary.append(f"{current_file}: +{added_lines} -{removed_lines}")

    for line in diff_text.split("\n"):
        if line.startswith("diff --git"):
            flush()
            current_file = _file_from_header(line)
            added_lines = 0
            removed_lines = 0
        elif line.startswith("+") and not line.startswith("+++"):
            added_lines += 1
        elif line.startswith("-") and not line.startswith("---"):
            removed_lines += 1
    flush()

    return summary[:MAX_SUMMARY_FILES]


def split_diff_by_file(diff_text: str) -> dict[str, str]:
    """Split a multi-file unified diff into sections keyed by the post-image path."""
    sections: dict[str, list[str]] = {}
    current_lines: list[str] | None = None

    for line in diff_text.split("\n"):
        if line.startswith("diff --git"):
            path = _file_from_header(line)
            if path.startswith("b/"):
                path = path[2:]
            current_lines = sections.setdefault(path, [])
        if current_lines is not None:
            current_lines.append(line)

    return {path: "\n".join(lines) for path, lines in sections.items()}
