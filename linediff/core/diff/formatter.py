"""Plain-text rendering of diff items for terminals and logs."""

from __future__ import annotations

from typing import Iterable, Iterator

from linediff.core.models import CollapsibleBlock, DiffItem, DiffLine, DiffResult


class PlainTextFormatter:
    """
    Format diff items as text rows.

    Each line becomes `old new prefix content`; a collapsed block
    becomes a single summary row.
    """

    def __init__(
        self,
        show_line_numbers: bool = True,
        expand_blocks: bool = False,
        number_width: int = 4,
        tab_size: int = 4
    ):
        self.show_line_numbers = show_line_numbers
        self.expand_blocks = expand_blocks
        self.number_width = number_width
        self.tab_size = tab_size

    def format(self, result: DiffResult) -> Iterator[str]:
        """Yield rows for a complete result."""
        yield from self.format_items(result.items)

    def format_items(self, items: Iterable[DiffItem]) -> Iterator[str]:
        for item in items:
            if not item.is_block:
                yield self._format_line(item.line)
                continue

            block = item.block
            if self.expand_blocks or not block.is_collapsed:
                for line in block.lines:
                    yield self._format_line(line)
            else:
                yield self._format_block(block)

    def _format_line(self, line: DiffLine) -> str:
        content = line.content.replace('\t', ' ' * self.tab_size)

        if not self.show_line_numbers:
            return f"{line.prefix} {content}"

        old_no = self._number(line.old_line_number)
        new_no = self._number(line.new_line_number)
        return f"{old_no} {new_no} {line.prefix} {content}"

    def _format_block(self, block: CollapsibleBlock) -> str:
        summary = (
            f"... {block.line_count} unchanged lines "
            f"({block.start_line_number}-{block.end_line_number}) ..."
        )
        if not self.show_line_numbers:
            return summary
        gutter = ' ' * (self.number_width * 2 + 1)
        return f"{gutter}   {summary}"

    def _number(self, value) -> str:
        if value is None:
            return ' ' * self.number_width
        return f"{value:>{self.number_width}d}"
