"""Classification of diff entries into change kinds."""

from .models import ChangeKind, DiffEntry


def classify(entry: DiffEntry) -> ChangeKind:
    """Classify a diff entry from its flags.

    GitLab sets at most one flag per entry; should several be set anyway,
    new beats deleted beats renamed. No flag means the file was modified.
    """
    if entry.new_file:
        return ChangeKind.ADDED
    if entry.deleted_file:
        return ChangeKind.DELETED
    if entry.renamed_file:
        return ChangeKind.RENAMED
    return ChangeKind.MODIFIED
