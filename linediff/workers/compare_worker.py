"""
Workers for running text comparisons off the UI thread.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject

from linediff.core.diff.text_diff import TextDiffEngine, TextCompareOptions
from linediff.core.models import DiffResult
from linediff.services.file_io import FileIOService, split_text_lines
from linediff.workers.base_worker import BaseWorker


class TextCompareWorker(BaseWorker):
    """
    Worker for comparing text files.

    Reads both files and runs the diff engine in a background thread.
    """

    def __init__(
        self,
        old_path: str | Path,
        new_path: str | Path,
        options: Optional[TextCompareOptions] = None,
        encoding: Optional[str] = None,
        file_io: Optional[FileIOService] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.old_path = Path(old_path)
        self.new_path = Path(new_path)
        self.options = options or TextCompareOptions()
        self.encoding = encoding
        self.file_io = file_io or FileIOService()
        self.old_lines: list[str] = []
        self.new_lines: list[str] = []

    def do_work(self) -> DiffResult:
        """Perform text comparison."""
        self.report_status(f"Comparing {self.old_path.name}...")

        self.report_progress(0, 3, "Reading old file...")
        self.old_lines = self._read_lines(self.old_path, "old")
        self.check_cancelled()

        self.report_progress(1, 3, "Reading new file...")
        self.new_lines = self._read_lines(self.new_path, "new")
        self.check_cancelled()

        self.report_progress(2, 3, "Computing differences...")
        engine = TextDiffEngine(self.options)
        result = engine.compare(
            self.old_lines,
            self.new_lines,
            str(self.old_path),
            str(self.new_path)
        )

        self.report_progress(3, 3, "Complete")
        self.report_status("Complete")
        return result

    def _read_lines(self, path: Path, side: str) -> list[str]:
        read_result = self.file_io.read_file(path, encoding=self.encoding)

        if not read_result.success:
            if read_result.is_binary:
                raise IOError(f"File appears to be binary and cannot be compared as text: {path}")
            raise IOError(f"Failed to read {side} file: {read_result.error}")

        return read_result.content.lines if read_result.content else []


class TextCompareWorkerFromContent(BaseWorker):
    """
    Worker for comparing text content directly.

    Useful when content is already in memory.
    """

    def __init__(
        self,
        old_content: str,
        new_content: str,
        old_label: str = "old",
        new_label: str = "new",
        options: Optional[TextCompareOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.old_content = old_content
        self.new_content = new_content
        self.old_label = old_label
        self.new_label = new_label
        self.options = options or TextCompareOptions()

    def do_work(self) -> DiffResult:
        """Perform text comparison."""
        self.report_status("Computing differences...")

        engine = TextDiffEngine(self.options)
        return engine.compare(
            split_text_lines(self.old_content),
            split_text_lines(self.new_content),
            self.old_label,
            self.new_label
        )
