"""
Merging and removal of submitted entries.

Both helpers are pure: they return new lists/mappings and never modify
their arguments.  Stage checks and input validation are the caller's
job (see ``SubmissionService``).
"""

from typing import Dict, List, Sequence

from ..schemas.entry import Entry


def reconcile_submissions(existing: Sequence[Entry], incoming: Sequence[Entry]) -> List[Entry]:
    """Append incoming entries that the participant has not submitted yet.

    The order of ``existing`` is kept and new entries follow in the
    order they arrived.  When there is nothing to merge against the
    incoming entries are taken as they are, so duplicates sent within a
    single call are kept; only repeats across calls are dropped.
    """
    if not existing:
        return list(incoming)

    merged = list(existing)
    for entry in incoming:
        if entry not in merged:
            merged.append(entry)
    return merged


def delete_entries(
    all_submissions: Dict[str, List[Entry]], to_delete: Sequence[Entry]
) -> Dict[str, List[Entry]]:
    """Remove every entry equal to one of ``to_delete`` from all participants.

    Participants left without entries are dropped from the result.
    """
    submissions: Dict[str, List[Entry]] = {}
    for name, entries in all_submissions.items():
        kept = [entry for entry in entries if entry not in to_delete]
        if kept:
            submissions[name] = kept
    return submissions
