"""
=========================
Network
=========================

Last update: October 2026

Network class. Registry of the live nodes of a simulation, plus the wiring drivers
that generate an overlay topology over the registry and copy it into the nodes'
Linkable protocol.
"""
import numpy as np

from overlaysim.Log import log
from overlaysim.Node import Node, IdCounter, FailState, INDEX_INVALID
from overlaysim.Graph import Graph, UndirectedGraph
from overlaysim.Topology import Topology
from overlaysim.Protocol import Linkable
from overlaysim.RandomSource import RandomSource
from overlaysim.Exceptions import InvalidConfigurationError

class Network():

    topologies = ['RING', 'STAR', 'TREE', 'HYPERCUBE', 'WS', 'KOUT', 'KOUT_UND', 'BA', 'WIRELESS']

    def __init__(self, prototype_protocols, size=0, id_counter=None):
        self._id_counter = id_counter if id_counter is not None else IdCounter()
        self._prototype = Node(prototype_protocols, self._id_counter)
        self._nodes = []

        self.grow(size)

        log.network.info('Initialized network with %s nodes, protocols=%s.', size, prototype_protocols)

    @classmethod
    def from_config(cls, config, prototype_protocols):
        return cls(prototype_protocols, size=config.get('network.size'))

    def __repr__(self):
        return '[Network: size=%s]' % len(self._nodes)

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    @property
    def nodes(self):
        return list(self._nodes)

    def size(self):
        return len(self._nodes)

    def get(self, index):
        return self._nodes[index]

    def add(self, node):
        node.set_index(len(self._nodes))
        self._nodes.append(node)
        log.network.debug('Added node %s at index %s.', node.id, node.index)

    def grow(self, count):
        """
        Appends `count` clones of the prototype node.
        """
        for _ in range(count):
            self.add(self._prototype.clone())

    def remove(self, index):
        """
        Removes the node at `index` by moving the last node into its place. A DEAD
        node keeps its invalid index when it is moved.
        """
        node = self._nodes[index]
        last = self._nodes.pop()
        if last is not node:
            self._nodes[index] = last
            if last.fail_state is not FailState.DEAD:
                last.set_index(index)
        if node.fail_state is not FailState.DEAD:
            node.set_index(INDEX_INVALID)

        log.network.debug('Removed node %s from index %s.', node.id, index)
        return node

    def kill(self, index):
        node = self._nodes[index]
        node.set_fail_state(FailState.DEAD)
        return self.remove(index)

    def graph(self):
        return Graph(len(self._nodes))

    def _place_nodes(self, rng, xregion, yregion, radius):
        positions = np.zeros((len(self._nodes), 2), dtype=int)
        for i, node in enumerate(self._nodes):
            x = rng.next_int(xregion)
            y = rng.next_int(yregion)
            node.set_position(x, y)
            node.set_range(radius)
            positions[i] = (x, y)
        return positions

    def wire(self, topology, pid, undirected=False, rng=None, **params):
        """
        Generates `topology` over the current nodes and adds every edge (i, j) as a link
        from node i to node j in the Linkable protocol at slot `pid`.

        params: k, p (WS), xregion, yregion, range (WIRELESS). Missing randomness is
        replaced by an unseeded RandomSource.
        """
        if topology not in self.topologies:
            raise InvalidConfigurationError(f"unknown topology {topology!r}, expected one of {self.topologies}")
        for node in self._nodes:
            if not isinstance(node.get_protocol(pid), Linkable):
                raise InvalidConfigurationError(f"protocol slot {pid} of node {node.id} is not Linkable")

        rng = rng if rng is not None else RandomSource()
        graph = self.graph()
        target = UndirectedGraph(graph) if undirected else graph
        k = params.get('k', 0)

        log.network.info('Wiring %s nodes as %s (undirected=%s), params=%s.',
                         len(self._nodes), topology, undirected, params)

        match topology:
            case 'RING':
                Topology.ring_lattice(target, k)
            case 'STAR':
                Topology.star(target)
            case 'TREE':
                Topology.regular_rooted_tree(target, k)
            case 'HYPERCUBE':
                Topology.hypercube(target)
            case 'WS':
                Topology.watts_strogatz(target, k, params.get('p', 0.0), rng)
            case 'KOUT':
                Topology.k_out_directed(target, k, rng)
            case 'KOUT_UND':
                _, off_target = Topology.k_out_undirected(target, k, rng)
                if off_target:
                    log.network.warning('%s nodes did not reach degree %s.', off_target, k)
            case 'BA':
                Topology.scale_free_ba(target, k, rng)
            case 'WIRELESS':
                radius = params.get('range', 0)
                if radius < 0:
                    raise InvalidConfigurationError(f"range must be non-negative, got {radius}")
                positions = self._place_nodes(rng, params.get('xregion', 1), params.get('yregion', 1), radius)
                Topology.wireless_range(target, positions, radius, k=params.get('k'))

        for i, j in graph.edges():
            self._nodes[i].get_protocol(pid).add_neighbour(self._nodes[j])

        log.network.info('Wired %s links.', graph.number_of_edges())
        return graph

    def degrees(self, pid):
        return np.array([node.get_protocol(pid).degree() for node in self._nodes], dtype=int)
