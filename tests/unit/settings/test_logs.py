from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from ratch.logs import LOGGER_NAME, reset_logger, setup_logger


class SetupLoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        reset_logger()
        self.addCleanup(reset_logger)

    def test_without_debug_records_are_dropped(self) -> None:
        logger = setup_logger(debug=False)

        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_debug_writes_child_logger_records_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "ratch.log"
            setup_logger(debug=True, log_path=log_path)

            logging.getLogger(f"{LOGGER_NAME}.refresh.executor").debug("dispatching generation %d", 4)
            reset_logger()

            text = log_path.read_text(encoding="utf-8")
        self.assertIn("| DEBUG | ratch.refresh.executor | dispatching generation 4", text)

    def test_setup_is_idempotent(self) -> None:
        first = setup_logger(debug=False)
        second = setup_logger(debug=True)
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), 1)


if __name__ == "__main__":
    unittest.main()
