"""
Tests for the logging setup
"""

import unittest
import logging
import tempfile
from datetime import date
from pathlib import Path
from logutil import log_file, log_config, setup_logger, shutdown_logger


class TestLogUtil(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        shutdown_logger()
        self.tmp.cleanup()

    def test_log_file_is_dated(self):
        self.assertEqual(self.dir / 'objload_2026-03-01.log',
                         log_file(self.dir, date(2026, 3, 1)))

    def test_stdout_level(self):
        config = log_config(self.dir / 'objload.log', 'DEBUG')
        self.assertEqual('DEBUG', config['handlers']['stdout']['level'])
        self.assertEqual('WARNING', config['handlers']['file']['level'])
        self.assertTrue(config['handlers']['file']['delay'])

    def test_only_warnings_reach_the_file(self):
        logfile = setup_logger(self.dir / 'logs')
        logger = logging.getLogger('wavefront.loader')

        logger.info('Loaded tiles/floor.obj')
        self.assertFalse(logfile.exists())

        logger.warning('tiles/stone.png: cannot identify image file')
        shutdown_logger()
        text = logfile.read_text(encoding='utf8')
        self.assertIn('WARNING|wavefront.loader|', text)
        self.assertIn('tiles/stone.png', text)
        self.assertNotIn('Loaded tiles/floor.obj', text)


if __name__ == '__main__':
    unittest.main()
