"""
=========================
Graph
=========================

Last update: October 2026

Graph classes. A fixed-size directed adjacency structure over the integer
indices 0..n-1, backed by a networkx DiGraph. Generators only ever add edges to it.
"""
import networkx as nx

from overlaysim.Log import log

class Graph():

    def __init__(self, n):
        assert n >= 0

        self._n = n
        self._graph = nx.DiGraph()
        self._graph.add_nodes_from(range(n))

        log.graph.debug('Initialized empty graph with %s nodes.', n)

    def __repr__(self):
        return '[Graph: nodes=%s, edges=%s]' % (self._n, self._graph.number_of_edges())

    def _check(self, i):
        if not 0 <= i < self._n:
            raise IndexError(f"node index {i} outside [0, {self._n})")

    def size(self):
        return self._n

    def set_edge(self, i, j):
        """
        Adds the directed edge i -> j. Returns True only if the edge is new.
        """
        self._check(i)
        self._check(j)
        if self._graph.has_edge(i, j):
            return False
        self._graph.add_edge(i, j)
        return True

    def is_edge(self, i, j):
        self._check(i)
        self._check(j)
        return self._graph.has_edge(i, j)

    def neighbours(self, i):
        self._check(i)
        return sorted(self._graph.successors(i))

    def in_neighbours(self, i):
        self._check(i)
        return sorted(self._graph.predecessors(i))

    def degree(self, i):
        self._check(i)
        return self._graph.out_degree(i)

    def edges(self):
        return sorted(self._graph.edges())

    def number_of_edges(self):
        return self._graph.number_of_edges()

    def to_networkx(self):
        # Copy, so that analysis code can't add edges behind our back
        return self._graph.copy()


class UndirectedGraph():
    """
    Undirected view over a Graph. Every edge set through the view is stored in both
    directions in the wrapped graph, so any generator run against the view
    produces a symmetric result.
    """

    def __init__(self, graph):
        self.graph = graph

    def __repr__(self):
        return '[UndirectedGraph over %s]' % self.graph

    def size(self):
        return self.graph.size()

    def set_edge(self, i, j):
        added = self.graph.set_edge(i, j)
        added_back = self.graph.set_edge(j, i)
        return added or added_back

    def is_edge(self, i, j):
        return self.graph.is_edge(i, j) or self.graph.is_edge(j, i)

    def neighbours(self, i):
        return sorted(set(self.graph.neighbours(i)) | set(self.graph.in_neighbours(i)))

    def degree(self, i):
        return len(self.neighbours(i))

    def edges(self):
        return self.graph.edges()

    def number_of_edges(self):
        return self.graph.number_of_edges()

    def to_networkx(self):
        return self.graph.to_networkx().to_undirected()
