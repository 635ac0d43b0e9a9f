"""
Unit tests for srpmimport.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path
from unittest.mock import patch

from srpmimport.config import (
    load_config,
    get_default_config,
    get_config_path,
    merge_configs,
    configure_logging,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        self.env = patch.dict(os.environ, {'HOME': self.temp_dir}, clear=False)
        self.env.start()
        for key in [k for k in os.environ if k.startswith('SRPMIMPORT_')]:
            del os.environ[key]
        self.config_dir = Path(self.temp_dir) / '.srpmimport'
        self.config_dir.mkdir()

    def tearDown(self):
        """Clean up test environment"""
        self.env.stop()
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertEqual(config['tools']['rpm2cpio'], 'rpm2cpio')
        self.assertEqual(config['tools']['rpm'], 'rpm')
        self.assertIsNone(config['tools']['timeout_seconds'])
        self.assertIn('user_name', config['git'])
        self.assertIn('level', config['logging'])

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_load_config_json_file(self):
        """Test loading config from JSON file"""
        with open(self.config_dir / 'config.json', 'w') as f:
            json.dump({'tools': {'rpm2cpio': '/opt/bin/rpm2cpio'}, 'logging': {'level': 'DEBUG'}}, f)

        config = load_config()

        self.assertEqual(config['tools']['rpm2cpio'], '/opt/bin/rpm2cpio')
        self.assertEqual(config['tools']['rpm'], 'rpm')  # default kept
        self.assertEqual(config['logging']['level'], 'DEBUG')

    def test_load_config_toml_file(self):
        """Test loading config from TOML file"""
        (self.config_dir / 'config.toml').write_text(
            '[git]\nuser_name = "Release Bot"\nuser_email = "bot@example.com"\n'
        )

        config = load_config()

        self.assertEqual(config['git']['user_name'], 'Release Bot')
        self.assertEqual(config['git']['timeout_seconds'], 60)

    def test_load_config_yaml_file(self):
        """Test loading config from YAML file"""
        (self.config_dir / 'config.yaml').write_text(
            'tools:\n  timeout_seconds: 120\n'
        )

        config = load_config()

        self.assertEqual(config['tools']['timeout_seconds'], 120)

    def test_invalid_file_falls_back_to_defaults(self):
        """A malformed config file is logged and ignored"""
        (self.config_dir / 'config.json').write_text('{not json at all')

        with self.assertLogs('srpmimport', level='ERROR'):
            config = load_config()

        self.assertEqual(config, get_default_config())

    def test_config_env_path(self):
        """SRPMIMPORT_CONFIG points at an explicit file"""
        custom = Path(self.temp_dir) / 'custom.json'
        custom.write_text(json.dumps({'tools': {'rpm': '/usr/local/bin/rpm'}}))

        with patch.dict(os.environ, {'SRPMIMPORT_CONFIG': str(custom)}):
            self.assertEqual(get_config_path(), custom)
            self.assertEqual(load_config()['tools']['rpm'], '/usr/local/bin/rpm')

    @patch.dict(os.environ, {'SRPMIMPORT_TOOLS_RPM2CPIO': '/srv/rpm2cpio'})
    def test_environment_override(self):
        """Test environment variable override"""
        self.assertEqual(load_config()['tools']['rpm2cpio'], '/srv/rpm2cpio')

    @patch.dict(os.environ, {'SRPMIMPORT_GIT_USER_EMAIL': 'ci@example.com',
                             'SRPMIMPORT_TOOLS_TIMEOUT_SECONDS': '300'})
    def test_multi_part_key_override(self):
        """Keys containing underscores are matched as a whole"""
        config = load_config()
        self.assertEqual(config['git']['user_email'], 'ci@example.com')
        self.assertEqual(config['tools']['timeout_seconds'], 300)

    def test_merge_configs(self):
        merged = merge_configs({'a': {'b': 1, 'c': 2}}, {'a': {'c': 3}, 'd': 4})
        self.assertEqual(merged, {'a': {'b': 1, 'c': 3}, 'd': 4})


class TestConfigureLogging(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger('srpmimport')
        self.original_level = self.logger.level

    def tearDown(self):
        self.logger.setLevel(self.original_level)

    def test_level_from_config(self):
        configure_logging({'logging': {'level': 'warning'}})
        self.assertEqual(self.logger.level, logging.WARNING)

    def test_unknown_level(self):
        configure_logging({'logging': {'level': 'LOUD'}})
        self.assertEqual(self.logger.level, logging.INFO)

    def test_debug_flag(self):
        configure_logging({}, debug=True)
        self.assertEqual(self.logger.level, logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
