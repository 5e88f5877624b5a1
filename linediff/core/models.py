"""
Core data models for the line diff engine.

This module defines the values produced by the engine:
- Classified diff lines
- Collapsible blocks of unchanged lines
- The line/block item union handed to renderers
- Diff statistics and the complete result

All models are UI-agnostic and immutable. State that a view needs to
change (such as whether a block is folded) is changed by copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterator, Optional


# =============================================================================
# Enumerations
# =============================================================================

class DiffLineType(Enum):
    """Type of line in a diff result."""
    UNCHANGED = auto()  # Line exists in both sequences, identical
    ADDED = auto()      # Line exists only in the new sequence
    REMOVED = auto()    # Line exists only in the old sequence
    MODIFIED = auto()   # Line changed between sequences


class DiffItemKind(Enum):
    """Which member of the item union is populated."""
    LINE = auto()
    COLLAPSIBLE_BLOCK = auto()


class DiffViewMode(Enum):
    """Which text a consumer is looking at."""
    DIFF = auto()       # Aligned comparison of both sequences
    ORIGINAL = auto()   # Old sequence only
    MODIFIED = auto()   # New sequence only

    @classmethod
    def from_string(cls, value: str) -> 'DiffViewMode':
        """Create from a case-insensitive name, defaulting to DIFF."""
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return cls.DIFF


# =============================================================================
# Diff Models
# =============================================================================

@dataclass(frozen=True)
class DiffLine:
    """
    A single classified line in a diff result.

    Unchanged lines carry both line numbers, added lines only the new
    one and removed lines only the old one. Numbers are 1-based.
    """
    line_type: DiffLineType
    content: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None

    @property
    def line_number(self) -> Optional[int]:
        """Get the applicable line number, preferring the old side."""
        if self.old_line_number is not None:
            return self.old_line_number
        return self.new_line_number

    @property
    def is_unchanged(self) -> bool:
        return self.line_type == DiffLineType.UNCHANGED

    @property
    def prefix(self) -> str:
        """Get the diff prefix character."""
        prefixes = {
            DiffLineType.UNCHANGED: ' ',
            DiffLineType.ADDED: '+',
            DiffLineType.REMOVED: '-',
            DiffLineType.MODIFIED: '!',
        }
        return prefixes.get(self.line_type, ' ')


@dataclass(frozen=True)
class CollapsibleBlock:
    """
    A run of consecutive unchanged lines that can be folded in a view.

    Start and end numbers use old-side numbering. Blocks are only built
    by the organizer from runs that reach the configured minimum length.
    """
    lines: tuple[DiffLine, ...]
    start_line_number: int
    end_line_number: int
    is_collapsed: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, 'lines', tuple(self.lines))

    @property
    def line_count(self) -> int:
        """Number of lines folded into the block."""
        return len(self.lines)

    def toggled(self) -> CollapsibleBlock:
        """Return a copy with the collapsed flag flipped."""
        return replace(self, is_collapsed=not self.is_collapsed)

    def __iter__(self) -> Iterator[DiffLine]:
        return iter(self.lines)


@dataclass(frozen=True)
class DiffItem:
    """
    One renderable entry: either a single line or a collapsible block.

    Build with `from_line` or `from_block`; exactly one payload is set.
    """
    kind: DiffItemKind
    line: Optional[DiffLine] = None
    block: Optional[CollapsibleBlock] = None

    @classmethod
    def from_line(cls, line: DiffLine) -> DiffItem:
        return cls(kind=DiffItemKind.LINE, line=line)

    @classmethod
    def from_block(cls, block: CollapsibleBlock) -> DiffItem:
        return cls(kind=DiffItemKind.COLLAPSIBLE_BLOCK, block=block)

    @property
    def is_block(self) -> bool:
        return self.kind == DiffItemKind.COLLAPSIBLE_BLOCK

    def iter_lines(self) -> Iterator[DiffLine]:
        """Iterate over the lines this item covers."""
        if self.is_block:
            yield from self.block.lines
        else:
            yield self.line


@dataclass
class DiffStatistics:
    """Statistics about a diff result."""
    total_lines_old: int = 0
    total_lines_new: int = 0
    added_lines: int = 0
    removed_lines: int = 0
    unchanged_lines: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added_lines + self.removed_lines

    @property
    def similarity_ratio(self) -> float:
        """
        Calculate similarity ratio (0.0 to 1.0).

        1.0 means identical, 0.0 means completely different.
        """
        total = max(self.total_lines_old, self.total_lines_new)
        if total == 0:
            return 1.0
        return self.unchanged_lines / total

    def __str__(self) -> str:
        return f"+{self.added_lines} -{self.removed_lines} ={self.unchanged_lines}"


@dataclass
class DiffResult:
    """
    Complete result of comparing two line sequences.

    `lines` is the flat aligned output, `items` the same lines arranged
    for display (grouped into blocks when collapsing is enabled).
    """
    lines: list[DiffLine]
    items: list[DiffItem]
    statistics: DiffStatistics = field(default_factory=DiffStatistics)
    old_label: str = "old"
    new_label: str = "new"

    @property
    def is_identical(self) -> bool:
        """True when nothing was added or removed."""
        return self.statistics.total_changes == 0

    @property
    def block_count(self) -> int:
        return sum(1 for item in self.items if item.is_block)

    def iter_changes(self) -> Iterator[DiffLine]:
        """Iterate over only the changed lines."""
        for line in self.lines:
            if not line.is_unchanged:
                yield line
