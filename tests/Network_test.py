"""
=========================
NetworkTest
=========================

Last update: October 2026

NetworkTest class.
"""

import unittest

from overlaysim.Log import log
from overlaysim.Network import Network
from overlaysim.Node import FailState, INDEX_INVALID
from overlaysim.Protocol import Linkable, CycleCounter
from overlaysim.RandomSource import RandomSource
from overlaysim.Exceptions import InvalidConfigurationError

class NetworkTest(unittest.TestCase):

    def setUp(self):
        self.network = Network([Linkable(), CycleCounter()], size=10)

    def test_nodes_are_indexed(self):
        self.assertEqual(len(self.network), 10)
        for i, node in enumerate(self.network):
            self.assertEqual(node.index, i)

        ids = [node.id for node in self.network]
        self.assertEqual(ids, sorted(set(ids)))

    def test_grow_uses_fresh_ids(self):
        before = max(node.id for node in self.network)
        self.network.grow(5)
        self.assertEqual(self.network.size(), 15)
        self.assertTrue(all(node.id > before for node in self.network.nodes[10:]))
        self.assertEqual(self.network.get(14).index, 14)

    def test_remove_compacts_with_last_node(self):
        removed = self.network.get(2)
        last = self.network.get(9)

        self.assertIs(self.network.remove(2), removed)

        self.assertEqual(len(self.network), 9)
        self.assertIs(self.network.get(2), last)
        self.assertEqual(last.index, 2)
        self.assertEqual(removed.index, INDEX_INVALID)

    def test_remove_with_dead_last_node(self):
        network = Network([Linkable()], size=3)
        removed = network.get(0)
        dead = network.get(2)
        dead.set_fail_state(FailState.DEAD)

        self.assertIs(network.remove(0), removed)

        self.assertEqual(len(network), 2)
        self.assertIs(network.get(0), dead)
        self.assertEqual(dead.index, INDEX_INVALID)
        self.assertEqual(removed.index, INDEX_INVALID)
        self.assertEqual(network.get(1).index, 1)

    def test_remove_last_node(self):
        last = self.network.get(9)
        self.network.remove(9)
        self.assertEqual(len(self.network), 9)
        self.assertNotIn(last, self.network.nodes)

    def test_kill(self):
        node = self.network.get(0)
        self.network.get(0).get_protocol(0).add_neighbour(self.network.get(1))

        self.network.kill(0)

        self.assertEqual(node.get_fail_state(), FailState.DEAD)
        self.assertEqual(node.index, INDEX_INVALID)
        self.assertEqual(node.get_protocol(0).degree(), 0)
        self.assertNotIn(node, self.network.nodes)

    def test_wire_kout(self):
        graph = self.network.wire('KOUT', 0, rng=RandomSource(3), k=3)
        for i, node in enumerate(self.network):
            linkable = node.get_protocol(0)
            log.test.debug('Node %s, neighbours = %s', node.id, linkable.neighbours)
            self.assertEqual(linkable.degree(), 3)
            self.assertFalse(linkable.contains(node))
            self.assertEqual([n.index for n in linkable.neighbours], graph.neighbours(i))

    def test_wire_undirected_ring(self):
        self.network.wire('RING', 0, undirected=True, k=2)
        for node in self.network:
            for neighbour in node.get_protocol(0).neighbours:
                self.assertTrue(neighbour.get_protocol(0).contains(node))

    def test_wire_kout_undirected(self):
        self.network.wire('KOUT_UND', 0, rng=RandomSource(11), k=4)
        degrees = self.network.degrees(0)
        self.assertTrue((degrees <= 4).all())
        for node in self.network:
            for neighbour in node.get_protocol(0).neighbours:
                self.assertTrue(neighbour.get_protocol(0).contains(node))

    def test_wire_wireless_places_nodes(self):
        self.network.wire('WIRELESS', 0, rng=RandomSource(5), xregion=10, yregion=10, range=100)
        for node in self.network:
            x, y = node.get_position()
            self.assertTrue(0 <= x < 10 and 0 <= y < 10)
            self.assertEqual(node.get_range(), 100)
            self.assertEqual(node.get_protocol(0).degree(), 9)

    def test_wire_unknown_topology(self):
        with self.assertRaises(InvalidConfigurationError):
            self.network.wire('MESH', 0)

    def test_wire_requires_linkable_slot(self):
        with self.assertRaises(InvalidConfigurationError):
            self.network.wire('STAR', 1)
        self.assertEqual(self.network.degrees(0).sum(), 0)

    def test_wire_negative_k(self):
        with self.assertRaises(InvalidConfigurationError):
            self.network.wire('TREE', 0, k=-2)
        self.assertEqual(self.network.degrees(0).sum(), 0)


if __name__ == '__main__':
    unittest.main()
