"""
Command line interface for linediff.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading and command line overrides
- Running the comparison and printing the report
- Exception handling
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, TextIO

from linediff import __version__
from linediff.core.diff.formatter import PlainTextFormatter
from linediff.core.diff.text_diff import TextDiffEngine
from linediff.core.models import DiffViewMode
from linediff.services.settings import ApplicationSettings, SettingsManager
from linediff.workers.compare_worker import TextCompareWorker


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "linediff"
APP_VERSION = __version__

EXIT_OK = 0
EXIT_FAILED = 1


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments. None means "use the settings file"."""
    old_path: str = ""
    new_path: str = ""
    min_unchanged_lines: Optional[int] = None
    similarity_threshold: Optional[float] = None
    enable_collapsing: Optional[bool] = None
    expand_blocks: bool = False
    view_mode: Optional[DiffViewMode] = None
    show_line_numbers: Optional[bool] = None
    encoding: Optional[str] = None
    config_file: Optional[str] = None
    log_level: Optional[str] = None
    log_file: Optional[str] = None
    show_stats: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Optional[TextIO] = None):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr so the report on stdout stays clean.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True, stream=sys.stderr))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """Global handler that logs unhandled exceptions."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )


# =============================================================================
# Argument Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Line-based text comparison with collapsible unchanged blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt                   Compare two files
  %(prog)s old.txt new.txt --expand          Show unchanged blocks in full
  %(prog)s old.txt new.txt --min-unchanged 5 Only fold runs of 5+ lines
  %(prog)s old.txt new.txt --view original   Show the old file with numbers
        """
    )

    parser.add_argument('old', help='Original file')
    parser.add_argument('new', help='New file')

    # Comparison options
    parser.add_argument(
        '--min-unchanged',
        type=int,
        default=None,
        metavar='N',
        help='Fold runs of at least N unchanged lines (default 3)'
    )
    parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        metavar='F',
        help='Similarity above which a changed pair counts as modified (default 0.5)'
    )
    parser.add_argument(
        '--no-collapse',
        action='store_true',
        help='Do not fold unchanged lines'
    )
    parser.add_argument(
        '--encoding',
        default=None,
        help='Force file encoding (auto-detected by default)'
    )

    # Display options
    parser.add_argument(
        '--view',
        choices=['diff', 'original', 'modified'],
        default=None,
        help='Which text to show'
    )
    parser.add_argument(
        '--expand',
        action='store_true',
        help='Print folded blocks line by line'
    )
    parser.add_argument(
        '--no-line-numbers',
        action='store_true',
        help='Hide line numbers'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print change statistics after the report'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path'
    )

    # Logging
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=None,
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write log messages to this file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.old_path = parsed.old
    result.new_path = parsed.new
    result.min_unchanged_lines = parsed.min_unchanged
    result.similarity_threshold = parsed.threshold
    result.enable_collapsing = False if parsed.no_collapse else None
    result.expand_blocks = parsed.expand
    result.show_line_numbers = False if parsed.no_line_numbers else None
    result.encoding = parsed.encoding
    result.config_file = parsed.config
    result.log_level = parsed.log_level
    result.log_file = parsed.log_file
    result.show_stats = parsed.stats

    if parsed.view:
        result.view_mode = DiffViewMode.from_string(parsed.view)

    return result


# =============================================================================
# Settings
# =============================================================================

def setup_settings(args: CommandLineArgs) -> ApplicationSettings:
    """Load settings and apply command line overrides."""
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    settings = manager.settings
    diff = settings.diff

    if args.min_unchanged_lines is not None:
        diff.min_unchanged_lines = args.min_unchanged_lines
    if args.similarity_threshold is not None:
        diff.similarity_threshold = args.similarity_threshold
    if args.enable_collapsing is not None:
        diff.enable_collapsing = args.enable_collapsing
    if args.show_line_numbers is not None:
        diff.show_line_numbers = args.show_line_numbers
    if args.view_mode is not None:
        diff.view_mode = args.view_mode
    if args.encoding:
        diff.encoding = args.encoding

    if args.log_level:
        settings.logging.level = args.log_level
    if args.log_file:
        settings.logging.log_file = args.log_file

    return settings


# =============================================================================
# Comparison
# =============================================================================

def run_comparison(
    args: CommandLineArgs,
    settings: ApplicationSettings,
    logger: logging.Logger,
    out: Optional[TextIO] = None
) -> int:
    """
    Compare the two files and print the report.

    The worker runs on the calling thread; its signals still report
    status and errors the same way they would on a background thread.

    Returns:
        Exit code
    """
    out = out or sys.stdout
    diff_settings = settings.diff

    worker = TextCompareWorker(
        args.old_path,
        args.new_path,
        options=diff_settings.to_options(),
        encoding=diff_settings.encoding
    )
    worker.signals.status.connect(lambda message: logger.debug(message))
    worker.signals.error.connect(
        lambda error_type, message: logger.error(f"{error_type}: {message}")
    )
    worker.run()

    if worker.error is not None:
        return EXIT_FAILED

    result = worker.result
    engine = TextDiffEngine(diff_settings.to_options())
    items = engine.view_items(
        result,
        diff_settings.view_mode,
        worker.old_lines,
        worker.new_lines
    )

    formatter = PlainTextFormatter(
        show_line_numbers=diff_settings.show_line_numbers,
        expand_blocks=args.expand_blocks
    )
    for row in formatter.format_items(items):
        print(row, file=out)

    if args.show_stats:
        stats = result.statistics
        print(f"{stats} (similarity {stats.similarity_ratio:.0%})", file=out)

    logger.info(f"Compared {args.old_path} and {args.new_path}: {result.statistics}")
    return EXIT_OK


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_arguments(argv)

    # Settings load warnings go through the console handler
    setup_logging(args.log_level or "INFO")
    settings = setup_settings(args)

    log_file = Path(settings.logging.log_file) if settings.logging.log_file else None
    logger = setup_logging(settings.logging.level, log_file)
    logger.debug(f"Starting {APP_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    return run_comparison(args, settings, logger)
