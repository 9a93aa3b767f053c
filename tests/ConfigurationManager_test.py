"""
=========================
ConfigManagerTest
=========================

Last update: October 2026

ConfigManagerTest class.
"""

import json
import os
import tempfile
import unittest

from overlaysim.ConfigurationManager import ConfigManager
from overlaysim.Exceptions import InvalidConfigurationError

class ConfigManagerTest(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'config.json')

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_defaults(self):
        config = ConfigManager()
        self.assertEqual(config.get('wiring.topology'), 'KOUT')
        self.assertEqual(config.get_wiring_params(), {'k': 4})
        config.validate()

    def test_set_unknown_key(self):
        with self.assertRaises(KeyError):
            ConfigManager().set('wiring.degree', 3)

    def test_load_nested_file(self):
        with open(self.path, 'w') as file:
            json.dump({'network': {'size': 12, 'seed': 9},
                       'wiring': {'topology': 'WS', 'k': 6, 'p': 0.25}}, file)

        config = ConfigManager(self.path)

        self.assertEqual(config.get('network.size'), 12)
        self.assertEqual(config.get('network.seed'), 9)
        self.assertEqual(config.get_wiring_params(), {'k': 6, 'p': 0.25})

    def test_save_and_load(self):
        config = ConfigManager()
        config.set('wiring.topology', 'WIRELESS')
        config.set('wiring.range', 25)
        config.save_to_file(self.path)

        loaded = ConfigManager(self.path)
        self.assertEqual(loaded.params, config.params)
        self.assertEqual(loaded.get_wiring_params(),
                         {'k': 4, 'xregion': 100, 'yregion': 100, 'range': 25})

    def test_validate(self):
        for key, value in (('wiring.k', -1), ('wiring.p', 2.0), ('network.size', 0),
                           ('wiring.topology', 'MESH'), ('wiring.range', -5)):
            config = ConfigManager()
            config.set(key, value)
            with self.assertRaises(InvalidConfigurationError):
                config.validate()


if __name__ == '__main__':
    unittest.main()
