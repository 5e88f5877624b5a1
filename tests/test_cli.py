import json
import logging
import sys

import pytest

from linediff import cli
from linediff.core.models import DiffViewMode


pytestmark = pytest.mark.usefixtures("qt_core_app")


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    excepthook = sys.excepthook
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    sys.excepthook = excepthook


@pytest.fixture
def files(tmp_path):
    old_path = tmp_path / "old.txt"
    new_path = tmp_path / "new.txt"
    old_path.write_text("a\nb\nc\nd\ne\n", encoding="utf-8")
    new_path.write_text("a\nb\nc\nd\nX\n", encoding="utf-8")
    return str(old_path), str(new_path)


@pytest.fixture
def config(tmp_path):
    return str(tmp_path / "settings.json")


def run_main(argv, capsys):
    code = cli.main(argv)
    return code, capsys.readouterr().out.splitlines()


class TestParseArguments:
    def test_defaults(self):
        args = cli.parse_arguments(["old.txt", "new.txt"])

        assert args.old_path == "old.txt"
        assert args.new_path == "new.txt"
        assert args.min_unchanged_lines is None
        assert args.enable_collapsing is None
        assert args.view_mode is None
        assert not args.expand_blocks
        assert not args.show_stats

    def test_options(self):
        args = cli.parse_arguments([
            "old.txt", "new.txt",
            "--min-unchanged", "5",
            "--threshold", "0.8",
            "--no-collapse",
            "--view", "modified",
            "--no-line-numbers",
            "--encoding", "latin-1",
            "--log-level", "DEBUG",
        ])

        assert args.min_unchanged_lines == 5
        assert args.similarity_threshold == 0.8
        assert args.enable_collapsing is False
        assert args.view_mode == DiffViewMode.MODIFIED
        assert args.show_line_numbers is False
        assert args.encoding == "latin-1"
        assert args.log_level == "DEBUG"

    def test_missing_paths_exit(self):
        with pytest.raises(SystemExit):
            cli.parse_arguments(["only-one.txt"])


class TestSetupSettings:
    def test_overrides_settings_file(self, config):
        with open(config, "w", encoding="utf-8") as f:
            json.dump({"diff": {"min_unchanged_lines": 8, "show_line_numbers": False}}, f)

        args = cli.parse_arguments(["a", "b", "-c", config, "--min-unchanged", "2"])
        settings = cli.setup_settings(args)

        assert settings.diff.min_unchanged_lines == 2
        assert settings.diff.show_line_numbers is False

    def test_file_values_kept_without_flags(self, config):
        with open(config, "w", encoding="utf-8") as f:
            json.dump({"diff": {"view_mode": "ORIGINAL"}}, f)

        settings = cli.setup_settings(cli.parse_arguments(["a", "b", "-c", config]))
        assert settings.diff.view_mode == DiffViewMode.ORIGINAL


class TestMain:
    def test_report(self, files, config, capsys):
        code, rows = run_main([*files, "-c", config], capsys)

        assert code == cli.EXIT_OK
        assert rows == [
            "            ... 4 unchanged lines (1-4) ...",
            "        5 + X",
            "   5      - e",
            "   6    6   ",
        ]

    def test_stats(self, files, config, capsys):
        code, rows = run_main([*files, "-c", config, "--stats"], capsys)

        assert code == cli.EXIT_OK
        assert rows[-1] == "+1 -1 =5 (similarity 83%)"

    def test_expand(self, files, config, capsys):
        _, rows = run_main([*files, "-c", config, "--expand"], capsys)
        assert rows[0] == "   1    1   a"
        assert len(rows) == 7

    def test_no_collapse_without_numbers(self, files, config, capsys):
        _, rows = run_main([*files, "-c", config, "--no-collapse", "--no-line-numbers"], capsys)
        assert rows == ["  a", "  b", "  c", "  d", "+ X", "- e", "  "]

    def test_original_view(self, files, config, capsys):
        _, rows = run_main([*files, "-c", config, "--view", "original"], capsys)
        assert rows[4] == "   5    5   e"
        assert len(rows) == 6

    def test_missing_file(self, tmp_path, files, config, capsys):
        code, rows = run_main([str(tmp_path / "nope.txt"), files[1], "-c", config], capsys)

        assert code == cli.EXIT_FAILED
        assert rows == []

    def test_missing_file_is_logged(self, tmp_path, files, config, capsys):
        cli.main([str(tmp_path / "nope.txt"), files[1], "-c", config])
        err = capsys.readouterr().err
        assert "OSError: Failed to read old file: File not found" in err

    def test_log_file(self, tmp_path, files, config, capsys):
        log_file = tmp_path / "logs" / "linediff.log"
        code, _ = run_main([*files, "-c", config, "--log-file", str(log_file)], capsys)

        assert code == cli.EXIT_OK
        assert "Compared" in log_file.read_text(encoding="utf-8")

    def test_corrupt_settings_warning_uses_console_format(self, files, config, capsys):
        with open(config, "w", encoding="utf-8") as f:
            f.write("{not json")

        code = cli.main([*files, "-c", config])
        err = capsys.readouterr().err

        assert code == cli.EXIT_OK
        assert "| WARNING  | root | SettingsManager - Ignoring unreadable settings" in err


class TestExceptionHandler:
    def test_traceback_logged_once(self, caplog):
        handler = cli.ExceptionHandler(logging.getLogger("linediff.test"))
        try:
            raise RuntimeError("exploded")
        except RuntimeError:
            exc_info = sys.exc_info()

        with caplog.at_level(logging.DEBUG, logger="linediff.test"):
            handler.handle_exception(*exc_info)

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.CRITICAL
        assert record.exc_info[1] is exc_info[1]
        assert caplog.text.count("RuntimeError: exploded") == 1


class TestEntryPoints:
    def test_console_script_targets_package(self):
        import linediff.__main__ as package_main

        assert package_main.main is cli.main

    def test_source_checkout_launcher(self):
        import main as launcher

        assert launcher.main is cli.main
