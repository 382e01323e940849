import re
from dataclasses import dataclass
from typing import Iterable

from domain.diff.line_numbers import cap_line_numbers, extract_line_numbers
from domain.diff.status import RENAME_DELIMITER, map_status
from domain.diff.summary import split_diff_by_file
from domain.models import ChangeSet, FileChange


_BRACED_RENAME_PATTERN = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


@dataclass(frozen=True)
class NumstatEntry:
    path: str
    insertions: int
    deletions: int
    binary: bool = False


def parse_numstat(numstat_output: str) -> list[NumstatEntry]:
    entries: list[NumstatEntry] = []
    for raw_line in numstat_output.splitlines():
        parts = raw_line.split("\t", 2)
        if len(parts) != 3:
            continue
        raw_insertions, raw_deletions, path = parts
        # Binary files are reported as "-\t-\tpath".
        binary = raw_insertions == "-" and raw_deletions == "-"
        entries.append(
            NumstatEntry(
                path=path,
                insertions=0 if binary else int(raw_insertions),
                deletions=0 if binary else int(raw_deletions),
                binary=binary,
            )
        )
    return entries


def resolve_new_path(path: str) -> str:
    """Turn numstat rename notation ("a/{old => new}/f", "old => new") into the new path."""
    if RENAME_DELIMITER not in path:
        return path
    if _BRACED_RENAME_PATTERN.search(path):
        resolved = _BRACED_RENAME_PATTERN.sub(lambda match: match.group(2), path)
        return resolved.replace("//", "/").lstrip("/")
    return path.split(RENAME_DELIMITER, 1)[1]


def build_change_set(
    entries: Iterable[NumstatEntry],
    diff_text: str = "",
    commits: Iterable[str] = (),
) -> ChangeSet:
    diff_sections = split_diff_by_file(diff_text) if diff_text else {}
    files: list[FileChange] = []

    for entry in entries:
        section = diff_sections.get(resolve_new_path(entry.path))
        line_numbers = None
        if section is not None:
            line_numbers = cap_line_numbers(
                extract_line_numbers(section),
                entry.insertions,
                entry.deletions,
            )
        files.append(
            FileChange(
                path=entry.path,
                status=map_status(
                    entry.path,
                    entry.insertions,
                    entry.deletions,
                    binary=entry.binary,
                ),
                insertions=entry.insertions,
                deletions=entry.deletions,
                binary=entry.binary,
                diff=section,
                line_numbers=line_numbers,
            )
        )

    return ChangeSet(
        files=tuple(files),
        total_insertions=sum(file.insertions for file in files),
        total_deletions=sum(file.deletions for file in files),
        commits=tuple(commits),
    )
