"""
Line alignment.

Walks the old and new sequences with one cursor each and classifies
every line as unchanged, added or removed. When two lines differ the
aligner either pairs them as a modification (similar enough) or looks
ahead in the old sequence for an exact copy of the new line.

The strategy is greedy: the first exact match wins and no attempt is
made to find a minimal edit script.
"""

from __future__ import annotations

from typing import Optional, Sequence

from linediff.core.diff.similarity import calculate_similarity
from linediff.core.models import DiffLine, DiffLineType


# Pairs scoring strictly above this are shown as a modified line
DEFAULT_SIMILARITY_THRESHOLD = 0.5


def find_best_match(
    target: str,
    old_lines: Sequence[str],
    start: int
) -> Optional[int]:
    """
    Find the first old line at or after `start` equal to `target`.

    Returns the absolute index into `old_lines`, or None.
    """
    for index in range(start, len(old_lines)):
        if old_lines[index] == target:
            return index
    return None


def compute_diff(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> list[DiffLine]:
    """
    Align two line sequences.

    Args:
        old_lines: Lines of the original text
        new_lines: Lines of the new text
        similarity_threshold: Pairs scoring above this are a modification

    Returns:
        Classified lines in display order
    """
    result: list[DiffLine] = []
    old_count = len(old_lines)
    new_count = len(new_lines)
    old_index = 0
    new_index = 0

    while old_index < old_count or new_index < new_count:
        if old_index >= old_count:
            # Only new lines remain
            result.append(_added(new_lines, new_index))
            new_index += 1
            continue

        if new_index >= new_count:
            # Only old lines remain
            result.append(_removed(old_lines, old_index))
            old_index += 1
            continue

        old_line = old_lines[old_index]
        new_line = new_lines[new_index]

        if old_line == new_line:
            result.append(DiffLine(
                line_type=DiffLineType.UNCHANGED,
                content=old_line,
                old_line_number=old_index + 1,
                new_line_number=new_index + 1
            ))
            old_index += 1
            new_index += 1
            continue

        if calculate_similarity(old_line, new_line) > similarity_threshold:
            # Modification: old line out, new line in
            result.append(_removed(old_lines, old_index))
            result.append(_added(new_lines, new_index))
            old_index += 1
            new_index += 1
            continue

        match_index = find_best_match(new_line, old_lines, old_index)

        if match_index is None:
            # Old cursor stays put; the old line may still match later
            result.append(_added(new_lines, new_index))
            new_index += 1
            continue

        while old_index < match_index:
            result.append(_removed(old_lines, old_index))
            old_index += 1

        result.append(DiffLine(
            line_type=DiffLineType.UNCHANGED,
            content=new_line,
            old_line_number=match_index + 1,
            new_line_number=new_index + 1
        ))
        old_index = match_index + 1
        new_index += 1

    return result


def _added(new_lines: Sequence[str], index: int) -> DiffLine:
    return DiffLine(
        line_type=DiffLineType.ADDED,
        content=new_lines[index],
        old_line_number=None,
        new_line_number=index + 1
    )


def _removed(old_lines: Sequence[str], index: int) -> DiffLine:
    return DiffLine(
        line_type=DiffLineType.REMOVED,
        content=old_lines[index],
        old_line_number=index + 1,
        new_line_number=None
    )
