"""
File I/O service for turning files into line sequences.

Handles:
- Encoding detection
- Binary file rejection
- Line ending detection
- Splitting text into lines for the diff engine
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import chardet


# \r\n must come first so a Windows line ending counts once
_NEWLINE_PATTERN = re.compile(r'\r\n|\r|\n')


def split_text_lines(text: str) -> list[str]:
    """
    Split text into lines without their line endings.

    Empty text has no lines at all. A trailing line ending produces a
    final empty line, the same as splitting on the separator would.
    """
    if not text:
        return []
    return _NEWLINE_PATTERN.split(text)


class LineEnding(Enum):
    """Line ending style."""
    LF = auto()      # Unix: \n
    CRLF = auto()    # Windows: \r\n
    CR = auto()      # Old Mac: \r
    MIXED = auto()   # Mixed endings
    NONE = auto()    # No line endings (single line or empty)


@dataclass
class FileContent:
    """Container for file content with metadata."""
    content: str
    lines: list[str]
    encoding: str
    line_ending: LineEnding
    bom: bool
    size: int

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    content: Optional[FileContent] = None
    error: Optional[str] = None
    is_binary: bool = False


class FileIOService:
    """Service for reading text files as line sequences."""

    # Binary file signatures (magic bytes)
    BINARY_SIGNATURES = [
        b'\x89PNG',        # PNG
        b'\xff\xd8\xff',   # JPEG
        b'GIF8',           # GIF
        b'PK\x03\x04',     # ZIP
        b'\x1f\x8b',       # GZIP
        b'%PDF',           # PDF
        b'\x7fELF',        # ELF
    ]

    # Byte order marks and the codec that consumes them
    BOMS = [
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    ]

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1',
        binary_check_size: int = 8192,
        max_text_size: int = 50 * 1024 * 1024
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding
        self.binary_check_size = binary_check_size
        self.max_text_size = max_text_size

    def read_file(
        self,
        path: Path | str,
        encoding: Optional[str] = None
    ) -> ReadResult:
        """
        Read a text file with automatic encoding detection.

        Args:
            path: Path to the file
            encoding: Force specific encoding (auto-detect if None)

        Returns:
            ReadResult with content or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            file_size = path.stat().st_size
            if file_size > self.max_text_size:
                return ReadResult(
                    success=False,
                    error=f"File too large for text comparison ({file_size / 1024 / 1024:.2f} MB). "
                          f"Max size is {self.max_text_size / 1024 / 1024:.2f} MB."
                )

            raw_content = path.read_bytes()
        except PermissionError:
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logging.error(f"FileIOService - Failed to read {path}: {e}")
            return ReadResult(success=False, error=f"OS error: {e}")

        if self._is_binary(raw_content):
            return ReadResult(success=False, is_binary=True,
                              error="File appears to be binary")

        content, detected_encoding, bom = self.decode(raw_content, encoding)

        return ReadResult(
            success=True,
            content=FileContent(
                content=content,
                lines=split_text_lines(content),
                encoding=detected_encoding,
                line_ending=self._detect_line_ending(content),
                bom=bom,
                size=len(raw_content)
            )
        )

    def decode(
        self,
        raw_content: bytes,
        encoding: Optional[str] = None
    ) -> tuple[str, str, bool]:
        """
        Decode bytes to text.

        Returns:
            Tuple of (text, encoding used, whether a BOM was present)
        """
        bom = False
        detected_encoding = encoding

        for marker, codec in self.BOMS:
            if raw_content.startswith(marker):
                bom = True
                detected_encoding = detected_encoding or codec
                break

        detected_encoding = detected_encoding or self._detect_encoding(raw_content)

        try:
            content = raw_content.decode(detected_encoding)
        except (UnicodeDecodeError, LookupError):
            logging.warning(
                f"FileIOService - Could not decode as {detected_encoding}, "
                f"falling back to {self.fallback_encoding}"
            )
            content = raw_content.decode(self.fallback_encoding, errors='replace')
            detected_encoding = self.fallback_encoding

        # utf-8 with an explicit encoding leaves the BOM character behind
        if bom and content.startswith('\ufeff'):
            content = content[1:]

        return content, detected_encoding, bom

    def _is_binary(self, raw_content: bytes) -> bool:
        """Check whether content looks like a binary file."""
        chunk = raw_content[:self.binary_check_size]

        if not chunk:
            return False

        # UTF-16 text is full of null bytes but is still text
        if chunk.startswith(b'\xff\xfe') or chunk.startswith(b'\xfe\xff'):
            return False

        for sig in self.BINARY_SIGNATURES:
            if chunk.startswith(sig):
                return True

        if b'\x00' in chunk:
            return True

        # Check ratio of non-text bytes
        non_text = sum(1 for b in chunk if b < 9 or (13 < b < 32))
        return non_text / len(chunk) > 0.3

    def _detect_encoding(self, content: bytes) -> str:
        """Detect encoding of content."""
        if not content:
            return self.default_encoding

        result = chardet.detect(content)

        if result['confidence'] > 0.7 and result['encoding']:
            encoding = result['encoding'].lower()
            if encoding == 'ascii':
                return 'utf-8'  # ASCII is subset of UTF-8
            return encoding

        return self.default_encoding

    def _detect_line_ending(self, content: str) -> LineEnding:
        """Detect line ending style in content."""
        crlf_count = content.count('\r\n')
        lf_count = content.count('\n') - crlf_count
        cr_count = content.count('\r') - crlf_count

        total = crlf_count + lf_count + cr_count

        if total == 0:
            return LineEnding.NONE

        if crlf_count == total:
            return LineEnding.CRLF
        elif lf_count == total:
            return LineEnding.LF
        elif cr_count == total:
            return LineEnding.CR
        else:
            return LineEnding.MIXED
