# tests/test_config.py
import logging
import os
import tempfile
import unittest

import strapkit
from strapkit.config import DEFAULTS, Config, get_config


class TestConfig(unittest.TestCase):
    def setUp(self):
        Config.reset()

    def tearDown(self):
        Config.reset()

    def test_singleton(self):
        self.assertIs(get_config(), Config())

    def test_defaults(self):
        cfg = get_config()
        self.assertIsNone(cfg.source)
        self.assertEqual(cfg.get_nested("pager.items_per_page"), 5)
        self.assertEqual(cfg.get_nested("form.id_prefix"), "c")
        self.assertEqual(cfg.get_nested("missing.key", "fallback"), "fallback")

    def test_set_nested(self):
        cfg = get_config()
        cfg.set_nested("pager.items_per_page", 10)
        self.assertEqual(cfg.get_nested("pager.items_per_page"), 10)
        # the module defaults are never mutated
        self.assertEqual(DEFAULTS["pager"]["items_per_page"], 5)

    def test_load_file_merges_over_defaults(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
            fh.write("pager:\n  items_per_page: 3\nform:\n  title: Custom\n")
            path = fh.name
        try:
            cfg = get_config()
            cfg.load_file(path)
            self.assertEqual(cfg.source, "file")
            self.assertEqual(cfg.get_nested("pager.items_per_page"), 3)
            self.assertEqual(cfg.get_nested("form.title"), "Custom")
            self.assertEqual(cfg.get_nested("pager.label_next"), "&raquo;")
        finally:
            os.unlink(path)

    def test_load_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            get_config().load_file("/nonexistent/strapkit.yaml")


class TestConfigureLogging(unittest.TestCase):
    def setUp(self):
        Config.reset()

    def tearDown(self):
        logger = logging.getLogger("strapkit")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        Config.reset()

    def test_single_handler(self):
        strapkit.configure_logging("DEBUG")
        logger = strapkit.configure_logging("INFO")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

    def test_level_from_config(self):
        get_config().set_nested("logging.level", "ERROR")
        logger = strapkit.configure_logging()
        self.assertEqual(logger.level, logging.ERROR)


if __name__ == "__main__":
    unittest.main()
