"""
=========================
GraphTest
=========================

Last update: October 2026

GraphTest and RandomSourceTest classes.
"""

import unittest

from overlaysim.Graph import Graph, UndirectedGraph
from overlaysim.RandomSource import RandomSource

class GraphTest(unittest.TestCase):

    def setUp(self):
        self.graph = Graph(4)

    def test_set_edge_is_idempotent(self):
        self.assertTrue(self.graph.set_edge(0, 1))
        self.assertFalse(self.graph.set_edge(0, 1))
        self.assertEqual(self.graph.number_of_edges(), 1)
        self.assertTrue(self.graph.is_edge(0, 1))
        self.assertFalse(self.graph.is_edge(1, 0))

    def test_out_of_range(self):
        with self.assertRaises(IndexError):
            self.graph.set_edge(0, 4)
        with self.assertRaises(IndexError):
            self.graph.neighbours(-1)

    def test_neighbours_are_sorted(self):
        for j in (3, 1, 2):
            self.graph.set_edge(0, j)
        self.assertEqual(self.graph.neighbours(0), [1, 2, 3])
        self.assertEqual(self.graph.degree(0), 3)
        self.assertEqual(self.graph.in_neighbours(2), [0])

    def test_to_networkx_is_a_copy(self):
        self.graph.set_edge(0, 1)
        exported = self.graph.to_networkx()
        exported.add_edge(2, 3)
        self.assertEqual(exported.number_of_nodes(), 4)
        self.assertFalse(self.graph.is_edge(2, 3))

    def test_undirected_view(self):
        view = UndirectedGraph(self.graph)
        self.assertTrue(view.set_edge(0, 2))
        self.assertFalse(view.set_edge(2, 0))
        self.assertTrue(self.graph.is_edge(0, 2))
        self.assertTrue(self.graph.is_edge(2, 0))
        self.assertEqual(view.size(), 4)

        self.graph.set_edge(3, 1)
        self.assertTrue(view.is_edge(1, 3))
        self.assertEqual(view.neighbours(1), [3])
        self.assertEqual(view.degree(0), 1)


class RandomSourceTest(unittest.TestCase):

    def test_same_seed_same_sequence(self):
        first = RandomSource(123)
        second = RandomSource(123)
        self.assertEqual([first.next_int(100) for _ in range(20)],
                         [second.next_int(100) for _ in range(20)])
        self.assertEqual(first.next_double(), second.next_double())
        self.assertEqual(first.seed, 123)

    def test_bounds(self):
        rng = RandomSource(1)
        for _ in range(200):
            self.assertTrue(0 <= rng.next_int(3) < 3)
            self.assertTrue(0.0 <= rng.next_double() < 1.0)
        self.assertEqual(rng.next_int(1), 0)

    def test_non_positive_bound(self):
        with self.assertRaises(ValueError):
            RandomSource(1).next_int(0)


if __name__ == '__main__':
    unittest.main()
