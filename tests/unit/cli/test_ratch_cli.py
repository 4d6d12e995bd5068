"""CLI argument parsing and startup behavior tests.

Verifies how ``ratch.cli.main`` splits flags from the watched command and
which failures exit before the interactive loop starts.
"""

from __future__ import annotations

import io
import unittest
from unittest import mock

from ratch import cli
from ratch.config import WatchDefaults
from ratch.runtime import WatchOptions


class CliTests(unittest.TestCase):
    def _main(self, argv: list[str], *, tty: bool = True, defaults: WatchDefaults | None = None):
        stderr = io.StringIO()
        with mock.patch("ratch.cli.load_watch_defaults", return_value=defaults or WatchDefaults()), mock.patch(
            "ratch.cli._stdin_is_tty", return_value=tty
        ), mock.patch("ratch.cli.setup_logger") as setup_logger, mock.patch(
            "ratch.cli.run_watch"
        ) as run_watch, mock.patch("sys.stderr", stderr):
            cli.main(argv)
        return run_watch, setup_logger, stderr

    def _exit_code(self, argv: list[str]) -> tuple[object, str]:
        stderr = io.StringIO()
        with mock.patch("ratch.cli.load_watch_defaults", return_value=WatchDefaults()), mock.patch(
            "ratch.cli._stdin_is_tty", return_value=True
        ), mock.patch("ratch.cli.run_watch") as run_watch, mock.patch("sys.stderr", stderr):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(argv)
        run_watch.assert_not_called()
        return ctx.exception.code, stderr.getvalue()

    def test_defaults_and_command_arguments(self) -> None:
        run_watch, setup_logger, _stderr = self._main(["ls", "-l"])

        run_watch.assert_called_once_with(
            WatchOptions(command=("ls", "-l"), interval=2.0, constrain=True, max_in_flight=8, status_seconds=2.0)
        )
        setup_logger.assert_called_once_with(False)

    def test_flags_after_command_belong_to_command(self) -> None:
        run_watch, _setup_logger, _stderr = self._main(["-n", "0.5", "-u", "grep", "-n", "-u", "x"])

        options = run_watch.call_args.args[0]
        self.assertEqual(options.command, ("grep", "-n", "-u", "x"))
        self.assertEqual(options.interval, 0.5)
        self.assertFalse(options.constrain)

    def test_long_options_and_double_dash_separator(self) -> None:
        run_watch, _setup_logger, _stderr = self._main(["--interval", "3", "--unconstrain", "--", "df", "-h"])

        options = run_watch.call_args.args[0]
        self.assertEqual(options.command, ("df", "-h"))
        self.assertEqual(options.interval, 3.0)
        self.assertFalse(options.constrain)

    def test_config_defaults_apply_when_flags_are_missing(self) -> None:
        defaults = WatchDefaults(interval=5.0, constrain=False, max_in_flight=3, status_seconds=1.0)

        run_watch, _setup_logger, _stderr = self._main(["uptime"], defaults=defaults)

        self.assertEqual(
            run_watch.call_args.args[0],
            WatchOptions(command=("uptime",), interval=5.0, constrain=False, max_in_flight=3, status_seconds=1.0),
        )

    def test_debug_prints_startup_diagnostics(self) -> None:
        _run_watch, setup_logger, stderr = self._main(["-d", "-n", "0.5", "date"])

        report = stderr.getvalue()
        self.assertIn("Interval: 0.5s", report)
        self.assertIn("Command: date", report)
        self.assertIn("Constrained: yes", report)
        setup_logger.assert_called_once_with(True)

    def test_missing_command_exits_with_usage_error(self) -> None:
        code, stderr = self._exit_code(["-n", "1"])

        self.assertEqual(code, 2)
        self.assertIn("missing command", stderr)

    def test_non_numeric_interval_exits_with_usage_error(self) -> None:
        code, stderr = self._exit_code(["-n", "soon", "ls"])

        self.assertEqual(code, 2)
        self.assertIn("could not take 'soon' as a float value", stderr)

    def test_non_positive_interval_is_rejected(self) -> None:
        for value in ("0", "-1", "nan", "inf"):
            with self.subTest(value=value):
                code, _stderr = self._exit_code([f"--interval={value}", "ls"])
                self.assertEqual(code, 2)

    def test_non_tty_stdin_exits_before_loop(self) -> None:
        with mock.patch("ratch.cli.load_watch_defaults", return_value=WatchDefaults()), mock.patch(
            "ratch.cli._stdin_is_tty", return_value=False
        ), mock.patch("ratch.cli.run_watch") as run_watch:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["ls"])

        run_watch.assert_not_called()
        self.assertIn("not a terminal", str(ctx.exception.code))


if __name__ == "__main__":
    unittest.main()
