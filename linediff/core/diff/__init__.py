"""
Diff module for line-based text comparison.

Provides:
- Line alignment with similarity-based change detection
- Edit distance scoring
- Grouping of unchanged runs into collapsible blocks
- Plain-text rendering of the result
"""

from linediff.core.diff.similarity import (
    calculate_similarity,
    levenshtein_distance,
)
from linediff.core.diff.line_aligner import (
    compute_diff,
    find_best_match,
)
from linediff.core.diff.block_organizer import (
    flat_diff_items,
    organize_diff_items,
    plain_text_items,
)
from linediff.core.diff.text_diff import (
    TextDiffEngine,
    TextCompareOptions,
)
from linediff.core.diff.formatter import (
    PlainTextFormatter,
)

__all__ = [
    # Scoring
    'calculate_similarity',
    'levenshtein_distance',
    # Alignment
    'compute_diff',
    'find_best_match',
    # Grouping
    'flat_diff_items',
    'organize_diff_items',
    'plain_text_items',
    # Engine
    'TextDiffEngine',
    'TextCompareOptions',
    # Output
    'PlainTextFormatter',
]
