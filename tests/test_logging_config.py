"""Logging Configuration Tests.

Tests for the dungeon logger tree and its line format.
"""

import logging
import os
import shutil
import tempfile
import unittest

from dungeon_core.logging_config import DungeonFormatter, get_logger, setup_logging


class LoggingConfigTest(unittest.TestCase):

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self) -> None:
        setup_logging(level="WARNING", console_output=True, file_output=False)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_get_logger_prefixes_names(self) -> None:
        self.assertEqual(get_logger("encounter").name, "dungeon.encounter")
        self.assertIs(get_logger("dungeon.encounter"), get_logger("encounter"))

    def test_formatter_drops_tree_prefix(self) -> None:
        record = logging.LogRecord("dungeon.sinks", logging.ERROR, __file__, 1, "write failed", None, None)

        line = DungeonFormatter(use_colors=False, include_timestamp=False).format(record)

        self.assertEqual(line, "ERROR    [sinks] write failed")

    def test_file_output(self) -> None:
        setup_logging(level="INFO", log_dir=self.temp_dir, console_output=False, file_output=True)

        get_logger("population").info("Loaded 3 entities")
        for handler in logging.getLogger("dungeon").handlers:
            handler.flush()

        with open(os.path.join(self.temp_dir, "dungeon.log"), "r", encoding="utf-8") as f:
            text = f.read()
        self.assertIn("INFO     [population] Loaded 3 entities", text)


if __name__ == "__main__":
    unittest.main()
