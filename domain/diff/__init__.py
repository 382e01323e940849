from domain.diff.change_set import NumstatEntry, build_change_set, parse_numstat, resolve_new_path
from domain.diff.line_numbers import cap_line_numbers, extract_line_numbers
from domain.diff.status import map_status
from domain.diff.summary import MAX_SUMMARY_FILES, extract_diff_summary, split_diff_by_file

__all__ = [
    "MAX_SUMMARY_FILES",
    "NumstatEntry",
    "build_change_set",
    "cap_line_numbers",
    "extract_diff_summary",
    "extract_line_numbers",
    "map_status",
    "parse_numstat",
    "resolve_new_path",
    "split_diff_by_file",
]
