"""
================================================
Simulator
================================================

Last update: October 2026

The following class contains command line (CLI) interface for the overlay simulator.
It builds a network of nodes, wires an overlay topology over it, runs one cycle of
every protocol and reports the resulting degree distribution.

Logging levels and verbosity levels (higher includes lower):
0 - No output!
1 - CRITICAL
2 - ERROR
3 - WARNING
4 - INFO
5 - DEBUG
"""

import argparse
import time

import numpy as np

from overlaysim.Log import log
from overlaysim.Network import Network
from overlaysim.Protocol import Linkable, CycleCounter
from overlaysim.RandomSource import RandomSource
from overlaysim.ConfigurationManager import ConfigManager

VERBOSITY_DEFAULT = 4
LINKABLE_PID = 0

class Simulator:
    '''
    Command line (CLI) interface for the simulator.
    '''

    def __init__(self, config=None, verbosity=VERBOSITY_DEFAULT, **kvargs):

        self._verbosity = verbosity
        self._config = config if config is not None else ConfigManager()
        self._network = None

        self._set_logging()

        # Total elapsed time doesn't include initialization!
        self.timeStart = time.time()

    @property
    def verbosity(self):
        return self._verbosity

    @property
    def config(self):
        return self._config

    @property
    def network(self):
        return self._network

    def _set_logging(self):
        # Setting logger and verbosity level
        log.set_verbosity(self._verbosity)

    def run(self):
        config = self._config.validate()
        topology = config.get('wiring.topology')

        log.simulator.info('Started simulation with verbosity level %s, %s nodes, topology %s.',
                           self._verbosity, config.get('network.size'), topology)

        self._network = Network.from_config(config, [Linkable(), CycleCounter()])
        rng = RandomSource(config.get('network.seed'))

        self._network.wire(topology, LINKABLE_PID,
                           undirected=config.get('wiring.undirected'),
                           rng=rng,
                           **config.get_wiring_params())

        for node in self._network:
            if not node.is_up():
                continue
            for pid in range(node.protocol_size()):
                node.get_protocol(pid).step(node, pid)

        degrees = self._network.degrees(LINKABLE_PID)
        summary = {
            'topology': topology,
            'nodes': len(self._network),
            'links': int(degrees.sum()),
            'min_degree': int(degrees.min()),
            'mean_degree': float(np.mean(degrees)),
            'max_degree': int(degrees.max()),
        }

        log.simulator.info('Degree summary: %s', summary)
        log.simulator.info('Simulation finished in %.3f seconds.', time.time() - self.timeStart)
        return summary


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate an overlay topology over a population of simulated peers.")
    parser.add_argument("--verbosity", "-v", type=int, default=VERBOSITY_DEFAULT, choices=range(6),
                        help="Verbosity level (0-5).")
    parser.add_argument("--config", "-c", type=str, default=None, help="JSON configuration file.")
    parser.add_argument("--nodes", "-n", type=int, default=None, help="Number of nodes.")
    parser.add_argument("--topology", "-t", type=str, default=None, choices=Network.topologies, help="Topology to wire.")
    parser.add_argument("--k", type=int, default=None, help="Degree parameter.")
    parser.add_argument("--p", type=float, default=None, help="Rewiring probability (WS).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--undirected", action="store_true", help="Store every link in both directions.")
    parser.add_argument("--log-file", type=str, default=None, help="Export the logs to this file.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = ConfigManager(args.config)
    overrides = {
        'network.size': args.nodes,
        'network.seed': args.seed,
        'wiring.topology': args.topology,
        'wiring.k': args.k,
        'wiring.p': args.p,
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)
    if args.undirected:
        config.set('wiring.undirected', True)

    simulator = Simulator(config=config, verbosity=args.verbosity)
    summary = simulator.run()

    if args.log_file:
        log.export_logs_to_txt(args.log_file)
    return summary


if __name__=='__main__':
    main()
