"""
=========================
ConfigManager
=========================

Last update: October 2026

ConfigManager class. Holds the network and wiring parameters, with defaults, and
reads/writes them as JSON. Keys are dotted ('wiring.k'); files may use either dotted
keys or nested objects.
"""

import json
from typing import Any, Dict

from overlaysim.Log import log
from overlaysim.Exceptions import InvalidConfigurationError
from overlaysim.Network import Network

# Parameters each topology reads, besides 'k' where it applies
TOPOLOGY_PARAMS = {
    'RING': ['k'],
    'STAR': [],
    'TREE': ['k'],
    'HYPERCUBE': [],
    'WS': ['k', 'p'],
    'KOUT': ['k'],
    'KOUT_UND': ['k'],
    'BA': ['k'],
    'WIRELESS': ['k', 'xregion', 'yregion', 'range'],
}

class ConfigManager:
    def __init__(self, config_file: str = None):
        # default params
        self.params = {
            "network.size": 100,
            "network.seed": None,
            "wiring.topology": "KOUT",
            "wiring.k": 4,
            "wiring.p": 0.1,
            "wiring.undirected": False,
            "wiring.xregion": 100,
            "wiring.yregion": 100,
            "wiring.range": 10,
        }

        if config_file:
            self.load_from_file(config_file)

    def __repr__(self):
        return '[ConfigManager: %s]' % self.params

    def get(self, key: str) -> Any:
        return self.params[key]

    def set(self, key: str, value: Any):
        if key in self.params:
            self.params[key] = value
        else:
            raise KeyError(f"Key '{key}' not found in configuration parameters.")

    def get_wiring_params(self) -> Dict[str, Any]:
        topology = self.params["wiring.topology"]
        return {name: self.params["wiring." + name] for name in TOPOLOGY_PARAMS[topology]}

    def validate(self):
        if self.params["network.size"] <= 0:
            raise InvalidConfigurationError(f"network.size must be positive, got {self.params['network.size']}")
        if self.params["wiring.topology"] not in Network.topologies:
            raise InvalidConfigurationError(f"unknown topology {self.params['wiring.topology']!r}")
        if self.params["wiring.k"] < 0:
            raise InvalidConfigurationError(f"wiring.k must be non-negative, got {self.params['wiring.k']}")
        if not 0.0 <= self.params["wiring.p"] <= 1.0:
            raise InvalidConfigurationError(f"wiring.p must be in [0, 1], got {self.params['wiring.p']}")
        if self.params["wiring.range"] < 0:
            raise InvalidConfigurationError(f"wiring.range must be non-negative, got {self.params['wiring.range']}")
        if self.params["wiring.xregion"] <= 0 or self.params["wiring.yregion"] <= 0:
            raise InvalidConfigurationError("wiring.xregion and wiring.yregion must be positive")
        return self

    @staticmethod
    def _flatten(data, prefix=""):
        flat = {}
        for key, value in data.items():
            name = prefix + key
            if isinstance(value, dict):
                flat.update(ConfigManager._flatten(value, name + "."))
            else:
                flat[name] = value
        return flat

    def load_from_file(self, config_file: str):
        with open(config_file, 'r') as file:
            data = json.load(file)
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"{config_file} must contain a JSON object")

        for key, value in self._flatten(data).items():
            if key in self.params:
                self.params[key] = value
            else:
                log.config.warning('Ignoring unknown configuration key %s in %s.', key, config_file)
        log.config.info('Loaded configuration from %s.', config_file)

    def save_to_file(self, config_file: str):
        with open(config_file, 'w') as file:
            json.dump(self.params, file, indent=4)
        log.config.info('Saved configuration to %s.', config_file)
