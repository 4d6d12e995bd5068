from __future__ import annotations

import unittest
from unittest import mock

from ratch.runtime import WatchOptions, run_watch


class RunWatchTests(unittest.TestCase):
    def test_wires_state_executor_and_timing_from_options(self) -> None:
        options = WatchOptions(command=("ls", "-l"), interval=0.5, constrain=False, max_in_flight=3, status_seconds=1.0)

        with mock.patch("ratch.runtime.app.TtyTerminal") as terminal_cls, mock.patch(
            "ratch.runtime.app.run_main_loop"
        ) as run_main_loop:
            run_watch(options, stdin_fd=5, stdout_fd=6)

        terminal_cls.assert_called_once_with(5, 6)
        kwargs = run_main_loop.call_args.kwargs
        self.assertFalse(kwargs["state"].constrain)
        self.assertEqual(kwargs["state"].generation, 0)
        self.assertEqual(kwargs["executor"].command, ("ls", "-l"))
        self.assertEqual(kwargs["executor"].max_in_flight, 3)
        self.assertEqual(kwargs["timing"].interval, 0.5)
        self.assertEqual(kwargs["timing"].status_seconds, 1.0)
        self.assertEqual(kwargs["summary"], "every 0.5s: ls -l")


if __name__ == "__main__":
    unittest.main()
