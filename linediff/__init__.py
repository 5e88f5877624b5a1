"""
linediff - heuristic line diff engine.

Compares two sequences of text lines, classifies each line as unchanged,
added or removed, and folds long unchanged runs into collapsible blocks.

    >>> from linediff import compute_diff, organize_diff_items
    >>> lines = compute_diff(["a", "b", "c"], ["a", "x", "c"])
    >>> items = organize_diff_items(lines, min_unchanged_lines=3)
"""

from linediff.core.diff import compute_diff, organize_diff_items
from linediff.core.models import (
    CollapsibleBlock,
    DiffItem,
    DiffItemKind,
    DiffLine,
    DiffLineType,
    DiffResult,
    DiffStatistics,
    DiffViewMode,
)

__version__ = "1.0.0"

__all__ = [
    'compute_diff',
    'organize_diff_items',
    'CollapsibleBlock',
    'DiffItem',
    'DiffItemKind',
    'DiffLine',
    'DiffLineType',
    'DiffResult',
    'DiffStatistics',
    'DiffViewMode',
]
