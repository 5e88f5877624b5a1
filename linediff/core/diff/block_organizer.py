"""
Arranges classified lines into display items.

Runs of unchanged lines long enough to be worth hiding are folded into
a single collapsible block; everything else stays a flat line item.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from linediff.core.models import (
    CollapsibleBlock,
    DiffItem,
    DiffLine,
    DiffLineType,
)


DEFAULT_MIN_UNCHANGED_LINES = 3


def organize_diff_items(
    diff_lines: Iterable[Union[DiffLine, DiffItem]],
    min_unchanged_lines: int = DEFAULT_MIN_UNCHANGED_LINES
) -> list[DiffItem]:
    """
    Group consecutive unchanged lines into collapsible blocks.

    Args:
        diff_lines: Classified lines, or items from a previous call.
            Block items are passed through untouched and end any run
            being collected; line items are treated as their line.
        min_unchanged_lines: Shortest run that becomes a block

    Returns:
        Items in the same order as the input lines
    """
    min_unchanged_lines = max(1, min_unchanged_lines)
    result: list[DiffItem] = []
    pending: list[DiffLine] = []

    for entry in diff_lines:
        if isinstance(entry, DiffItem):
            if entry.is_block:
                _flush(pending, result, min_unchanged_lines)
                result.append(entry)
                continue
            entry = entry.line

        if entry.line_type == DiffLineType.UNCHANGED:
            pending.append(entry)
        else:
            _flush(pending, result, min_unchanged_lines)
            result.append(DiffItem.from_line(entry))

    # Trailing unchanged run
    _flush(pending, result, min_unchanged_lines)

    return result


def flat_diff_items(diff_lines: Iterable[DiffLine]) -> list[DiffItem]:
    """Wrap every line as its own item (collapsing disabled)."""
    return [DiffItem.from_line(line) for line in diff_lines]


def plain_text_items(lines: Sequence[str]) -> list[DiffItem]:
    """
    Items for showing one side on its own.

    Every line is unchanged and numbered the same on both sides.
    """
    return [
        DiffItem.from_line(DiffLine(
            line_type=DiffLineType.UNCHANGED,
            content=content,
            old_line_number=index + 1,
            new_line_number=index + 1
        ))
        for index, content in enumerate(lines)
    ]


def _flush(
    pending: list[DiffLine],
    result: list[DiffItem],
    min_unchanged_lines: int
) -> None:
    """Emit the collected unchanged run and clear it."""
    if not pending:
        return

    if len(pending) >= min_unchanged_lines:
        first = pending[0].old_line_number
        last = pending[-1].old_line_number
        result.append(DiffItem.from_block(CollapsibleBlock(
            lines=tuple(pending),
            start_line_number=first if first is not None else 1,
            end_line_number=last if last is not None else 1,
            is_collapsed=True
        )))
    else:
        result.extend(DiffItem.from_line(line) for line in pending)

    pending.clear()
