"""
Text diff engine.

Ties the pipeline together:
- Line alignment with similarity-based modification detection
- Folding of long unchanged runs into collapsible blocks
- Statistics over the aligned output
- Items for the diff, original and modified views
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from linediff.core.diff.block_organizer import (
    DEFAULT_MIN_UNCHANGED_LINES,
    flat_diff_items,
    organize_diff_items,
    plain_text_items,
)
from linediff.core.diff.line_aligner import (
    DEFAULT_SIMILARITY_THRESHOLD,
    compute_diff,
)
from linediff.core.models import (
    DiffItem,
    DiffLine,
    DiffLineType,
    DiffResult,
    DiffStatistics,
    DiffViewMode,
)


@dataclass(frozen=True)
class TextCompareOptions:
    """Options for text comparison."""
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    min_unchanged_lines: int = DEFAULT_MIN_UNCHANGED_LINES
    enable_collapsing: bool = True


class TextDiffEngine:
    """
    Engine for comparing sequences of text lines.

    Holds only its options; every call to `compare` is independent, so
    one engine can be shared between threads.
    """

    def __init__(self, options: Optional[TextCompareOptions] = None):
        self.options = options or TextCompareOptions()

    def compare(
        self,
        old_lines: Sequence[str],
        new_lines: Sequence[str],
        old_label: str = "old",
        new_label: str = "new"
    ) -> DiffResult:
        """
        Compare two sequences of lines.

        Args:
            old_lines: Lines from the original text, without line endings
            new_lines: Lines from the new text, without line endings
            old_label: Label for the original text
            new_label: Label for the new text

        Returns:
            DiffResult containing aligned lines, display items and statistics
        """
        lines = compute_diff(old_lines, new_lines, self.options.similarity_threshold)
        items = self.organize(lines)
        stats = self._calculate_statistics(lines, len(old_lines), len(new_lines))

        logging.debug(
            f"TextDiffEngine - {old_label} vs {new_label}: {stats}, "
            f"{len(items)} items"
        )

        return DiffResult(
            lines=lines,
            items=items,
            statistics=stats,
            old_label=old_label,
            new_label=new_label
        )

    def organize(self, lines: Sequence[DiffLine]) -> list[DiffItem]:
        """Arrange aligned lines into items according to the options."""
        if not self.options.enable_collapsing:
            return flat_diff_items(lines)
        return organize_diff_items(lines, self.options.min_unchanged_lines)

    def view_items(
        self,
        result: DiffResult,
        mode: DiffViewMode,
        old_lines: Sequence[str] = (),
        new_lines: Sequence[str] = ()
    ) -> list[DiffItem]:
        """
        Items for the requested view.

        The diff view reuses the result; the original and modified views
        show one side's lines as plain unchanged text.
        """
        if mode == DiffViewMode.ORIGINAL:
            return plain_text_items(old_lines)
        if mode == DiffViewMode.MODIFIED:
            return plain_text_items(new_lines)
        return result.items

    def _calculate_statistics(
        self,
        lines: Sequence[DiffLine],
        total_old: int,
        total_new: int
    ) -> DiffStatistics:
        """Calculate diff statistics from lines."""
        stats = DiffStatistics(
            total_lines_old=total_old,
            total_lines_new=total_new
        )

        for line in lines:
            if line.line_type == DiffLineType.UNCHANGED:
                stats.unchanged_lines += 1
            elif line.line_type == DiffLineType.ADDED:
                stats.added_lines += 1
            elif line.line_type == DiffLineType.REMOVED:
                stats.removed_lines += 1

        return stats
