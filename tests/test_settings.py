"""
Tests for configuration loading, the data models and logging setup.

Run with:
    python -m pytest tests/test_settings.py
"""
import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from game_troubleshooter.utils.data_model import DeleteTempFiles, GameEntry, HelperConfig
from game_troubleshooter.utils.errors import ConfigError
from game_troubleshooter.utils.monitoring import resolve_level, setup_logging
from game_troubleshooter.utils.settings import (
    CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME, find_config_path, load_config
)


# ===========================================================================
# load_config / find_config_path
# ===========================================================================

class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.root = Path(self.tmpdir.name)

    def _write(self, payload):
        path = self.root / DEFAULT_CONFIG_NAME
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding='utf-8')
        return path

    def test_defaults(self):
        config = load_config(None)
        self.assertEqual(config.log_level, 'INFO')
        self.assertEqual(config.prompt, '>> ')
        self.assertIsNone(config.catalog_path)
        self.assertFalse(config.console_log)

    def test_relative_paths_resolve_against_config_dir(self):
        path = self._write({'log_level': 'debug', 'log_file': 'logs/app.log', 'catalog_path': 'games.json'})
        config = load_config(path)
        self.assertEqual(config.log_level, 'DEBUG')
        self.assertEqual(config.log_file, self.root / 'logs' / 'app.log')
        self.assertEqual(config.catalog_path, self.root / 'games.json')

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(self.root / 'missing.json')

    def test_invalid_json(self):
        with self.assertRaises(ConfigError):
            load_config(self._write('{"log_level": '))

    def test_not_an_object(self):
        with self.assertRaises(ConfigError):
            load_config(self._write([1, 2]))

    def test_unknown_key(self):
        with self.assertRaises(ConfigError):
            load_config(self._write({'dry_run': True}))

    def test_invalid_values(self):
        with self.assertRaises(ConfigError):
            load_config(self._write({'log_level': 'loud'}))
        with self.assertRaises(ConfigError):
            load_config(self._write({'process_timeout': 0}))

    def test_find_config_path_prefers_environment(self):
        with patch.dict(os.environ, {CONFIG_ENV_VAR: '/etc/troubleshooter.json'}):
            self.assertEqual(find_config_path(self.root), Path('/etc/troubleshooter.json'))

    def test_find_config_path_in_working_directory(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(find_config_path(self.root))
            path = self._write({})
            self.assertEqual(find_config_path(self.root), path)


# ===========================================================================
# Data models
# ===========================================================================

class TestDataModel(unittest.TestCase):

    def test_action_descriptions(self):
        action = DeleteTempFiles(directory='${TEMP}')
        self.assertEqual(action.pattern, '*')
        self.assertEqual(action.describe(), 'Deleting * in ${TEMP}')

    def test_game_entry_is_frozen(self):
        entry = GameEntry(advice={'lag': ['Restart the router.']})
        with self.assertRaises(ValidationError):
            entry.crash_fix = []

    def test_game_entry_parses_tagged_actions(self):
        entry = GameEntry(crash_fix=[
            {'kind': 'log', 'text': 'Closing...'},
            {'kind': 'stop_process', 'process_name': 'cod.exe'},
        ])
        self.assertEqual([a.kind for a in entry.crash_fix], ['log', 'stop_process'])

    def test_helper_config_rejects_bad_level(self):
        with self.assertRaises(ValidationError):
            HelperConfig(log_level='chatty')


# ===========================================================================
# Logging
# ===========================================================================

class TestLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        def restore():
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
        self.addCleanup(restore)

    def test_resolve_level(self):
        self.assertEqual(resolve_level('debug'), logging.DEBUG)
        self.assertEqual(resolve_level(logging.WARNING), logging.WARNING)
        with self.assertRaises(ValueError):
            resolve_level('chatty')

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / 'logs' / 'troubleshooter.log'
            setup_logging('INFO', log_file=log_file, console=False)
            logging.getLogger('game_troubleshooter.test').info('hello log')
            for handler in logging.getLogger().handlers:
                handler.flush()
                handler.close()
            logging.getLogger().handlers.clear()

            self.assertIn('hello log', log_file.read_text(encoding='utf-8'))

    def test_console_only(self):
        setup_logging(logging.DEBUG, console=True)
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)


if __name__ == '__main__':
    unittest.main()
