from domain.models import FileStatus


RENAME_DELIMITER = " => "


def map_status(
    path: str,
    insertions: int,
    deletions: int,
    *,
    binary: bool = False,
) -> FileStatus:
    # Rename wins over the counts: numstat reports renames as "old => new".
    if RENAME_DELIMITER in path:
        return FileStatus.RENAMED
    if binary:
        return FileStatus.MODIFIED
    if insertions > 0 and deletions == 0:
        return FileStatus.ADDED
    if deletions > 0 and insertions == 0:
        return FileStatus.DELETED
    return FileStatus.MODIFIED
