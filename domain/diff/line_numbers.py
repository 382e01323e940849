import re

from domain.models import LineNumbers


HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")
_STRUCTURAL_PREFIXES = ("diff --git", "index ", "+++", "---")


def extract_line_numbers(diff_text: str) -> LineNumbers:
    added: list[int] = []
    removed: list[int] = []
    old_line = 0
    new_line = 0
    # Linhas antes do primeiro hunk (ou diffs binarios) nunca emitem numeros.
    inside_hunk = False

    for line in diff_text.split("\n"):
        header_match = HUNK_HEADER_PATTERN.match(line)
        if header_match:
            old_line = int(header_match.group(1)) - 1
            new_line = int(header_match.group(2)) - 1
            inside_hunk = True
            continue

        if line.startswith(_STRUCTURAL_PREFIXES):
            if line.startswith("diff --git"):
                inside_hunk = False
            continue

        if not inside_hunk:
            continue

        if line.startswith("+"):
            new_line += 1
            added.append(new_line)
        elif line.startswith("-"):
            old_line += 1
            removed.append(old_line)
        elif line.startswith(" "):
            old_line += 1
            new_line += 1

    return LineNumbers(added=tuple(added), removed=tuple(removed))


def cap_line_numbers(line_numbers: LineNumbers, insertions: int, deletions: int) -> LineNumbers:
    """Keep the arrays within the insertion/deletion counts reported by numstat."""
    return LineNumbers(
        added=line_numbers.added[: max(insertions, 0)],
        removed=line_numbers.removed[: max(deletions, 0)],
    )
