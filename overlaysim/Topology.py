"""
=========================
Topology
=========================

Last update: October 2026

Topology class. Static wiring methods that add edges to a graph over the node
indices 0..n-1. The general contract of every method is that it accepts any graph,
including one that already has edges, only adds edges to it, and returns it.

Randomized methods draw from a RandomSource in a fixed order, so the same seed
always produces the same graph.

References:

[1] D. J. Watts and S. H. Strogatz, Collective dynamics of 'small-world' networks, Nature 393 (1998)
[2] R. Albert and A.-L. Barabasi, Statistical mechanics of complex networks, http://arxiv.org/abs/cond-mat/0106096
"""
import numpy as np

from overlaysim.Log import log
from overlaysim.Exceptions import InvalidConfigurationError

class Topology():

    @staticmethod
    def _check_degree(k):
        if k < 0:
            raise InvalidConfigurationError(f"degree parameter k must be non-negative, got {k}")

    @staticmethod
    def _clamp_degree(n, k):
        # Sampling generators can't draw more distinct targets than there are other nodes
        if n <= k:
            log.topology.info('Clamping k=%s to %s for a graph of %s nodes.', k, n - 1, n)
            return n - 1
        return k

    @classmethod
    def ring_lattice(cls, g, k):
        """
        Ring lattice. Node i is linked to i-pred, ..., i+succ (but not to itself), where
        pred = k // 2 and succ = k - pred, all taken mod n. For odd k there is one
        more successor than predecessors.
        """
        cls._check_degree(k)
        n = g.size()
        pred = k // 2
        succ = k - pred

        log.topology.debug('Wiring ring lattice, n=%s, k=%s, pred=%s, succ=%s.', n, k, pred, succ)

        for i in range(n):
            for j in range(-pred, succ + 1):
                if j == 0:
                    continue
                g.set_edge(i, (i + j + n) % n)
        return g

    @classmethod
    def star(cls, g):
        """
        Sink star. Every node other than 0 is linked to 0.
        """
        n = g.size()
        log.topology.debug('Wiring star, n=%s.', n)

        for i in range(1, n):
            g.set_edge(i, 0)
        return g

    @classmethod
    def regular_rooted_tree(cls, g, k):
        """
        Regular rooted tree with root 0. Children are handed out breadth first, so node
        i is linked to i*k+1, ..., i*k+k. Leaves have no links and at most one node
        has fewer than k children.
        """
        cls._check_degree(k)
        if k == 0:
            return g

        n = g.size()
        log.topology.debug('Wiring regular rooted tree, n=%s, k=%s.', n, k)

        parent = 0
        child = 1  # Next node without a parent
        while child < n:
            for _ in range(k):
                if child >= n:
                    break
                g.set_edge(parent, child)
                child += 1
            parent += 1
        return g

    @classmethod
    def hypercube(cls, g):
        """
        Hypercube. Node i is linked to i xor 2^b for every bit b up to the highest one
        of n-1, as long as the result is a valid index. Exact when n is a power of two.
        """
        n = g.size()
        if n <= 1:
            return g

        highest_one = 1 << ((n - 1).bit_length() - 1)
        log.topology.debug('Wiring hypercube, n=%s, highest bit=%s.', n, highest_one)

        for i in range(n):
            mask = highest_one
            while mask > 0:
                j = i ^ mask
                if j < n:
                    g.set_edge(i, j)
                mask >>= 1
        return g

    @classmethod
    def watts_strogatz(cls, g, k, p, rng):
        """
        Directed variant of the Watts-Strogatz model [1]. Every link of the ring lattice
        with offsets -k/2..k/2 is rewired with probability p to a uniformly random
        other node. Rewiring is done with replacement, so two links of the same node may
        end up pointing at the same target.
        """
        cls._check_degree(k)
        if not 0.0 <= p <= 1.0:
            raise InvalidConfigurationError(f"rewiring probability p must be in [0, 1], got {p}")

        n = g.size()
        if n < 2:
            return g

        log.topology.debug('Wiring Watts-Strogatz, n=%s, k=%s, p=%s.', n, k, p)

        half = k // 2
        for i in range(n):
            for j in range(-half, half + 1):
                if j == 0:
                    continue
                target = (i + j + n) % n
                if rng.next_double() < p:
                    target = rng.next_int(n - 1)
                    if target >= i:
                        target += 1  # Random node other than i
                g.set_edge(i, target)
        return g

    @classmethod
    def k_out_directed(cls, g, k, rng):
        """
        Random graph with k out-links per node. Targets are drawn without replacement
        from all nodes other than the source, so there are no loops and no duplicate
        targets. With k >= n-1 the result is the complete digraph.
        """
        cls._check_degree(k)
        n = g.size()
        if n < 2:
            return g
        k = cls._clamp_degree(n, k)

        log.topology.debug('Wiring k-out, n=%s, k=%s.', n, k)

        # Working permutation, shared between source nodes
        nodes = list(range(n))
        for i in range(n):
            j = 0
            while j < k:
                pick = j + rng.next_int(n - j)
                nodes[j], nodes[pick] = nodes[pick], nodes[j]
                if nodes[j] != i:
                    g.set_edge(i, nodes[j])
                    j += 1
        return g

    @classmethod
    def scale_free_ba(cls, g, k, rng):
        """
        Barabasi-Albert growth [2]. Nodes 0..k-1 start without links, node k links to
        all of them, and every later node adds k links to distinct targets picked with
        probability proportional to their current degree. Targets are only kept
        distinct within one node's batch, so the graph may already hold edges.
        """
        cls._check_degree(k)
        n = g.size()
        if n <= k:
            return g

        log.topology.debug('Wiring scale-free BA, n=%s, k=%s.', n, k)

        # Edge e has the endpoints (ends[2*e], ends[2*e+1])
        ends = [0] * (2 * k * (n - k))
        for i in range(k):
            g.set_edge(k, i)
            ends[2 * i] = k
            ends[2 * i + 1] = i

        filled = 2 * k
        for i in range(k + 1, n):
            for j in range(k):
                batch = ends[filled + 1:filled + 2 * j:2]
                while True:
                    target = ends[rng.next_int(filled)]
                    if target not in batch:
                        break
                g.set_edge(i, target)
                ends[filled + 2 * j] = i
                ends[filled + 2 * j + 1] = target
            filled += 2 * k
        return g

    @staticmethod
    def _find_split(matrix, current, candidate):
        """
        Lowest neighbour of candidate that could be handed over to current: linked to
        candidate but neither equal nor linked to current. None if candidate and
        current are already linked or there is no such neighbour.

        Node 0 is never a split target. If it is the lowest such neighbour, there is
        no split at all, the search does not move on to the next one.
        """
        if matrix[current, candidate]:
            return None
        for split in np.flatnonzero(matrix[candidate]):
            if split != current and not matrix[current, split]:
                return int(split) if split > 0 else None
        return None

    @classmethod
    def k_out_undirected(cls, g, k, rng):
        """
        Undirected random graph where almost every node has exactly k links.

        Nodes are processed in a random order. Each one draws candidates without
        replacement from all other nodes and links to those that still have room.
        When a candidate is already full, one of its links (candidate, split) is
        broken and replaced by (candidate, current) and (current, split), which gives
        current two links and leaves both candidate and split with their degree. The
        first candidate each node draws only ever gets a direct link.

        The graph is built on a private adjacency matrix and only written to g at the
        end, as symmetric pairs of edges. Exact regularity is not forced.

        Returns the graph and the number of nodes whose degree ended up different
        from k.
        """
        cls._check_degree(k)
        n = g.size()
        if n < 2:
            return g, 0
        k = cls._clamp_degree(n, k)

        log.topology.debug('Wiring undirected k-out, n=%s, k=%s.', n, k)

        matrix = np.zeros((n, n), dtype=bool)
        degree = np.zeros(n, dtype=int)

        def link(a, b):
            matrix[a, b] = matrix[b, a] = True

        order = list(range(n))
        for i in range(n):
            s = rng.next_int(n)
            order[i], order[s] = order[s], order[i]

        for current in order:
            # Candidate pool, the first `active` entries are still available
            pool = [c for c in range(n) if c != current]
            active = n - 1
            first_draw = True

            while degree[current] < k and active > 0:
                slot = rng.next_int(active)
                candidate = pool[slot]

                # The first candidate a node draws is never split
                split = None
                if not first_draw and degree[candidate] == k and degree[current] + 2 <= k:
                    split = cls._find_split(matrix, current, candidate)
                first_draw = False

                if split is not None:
                    matrix[candidate, split] = matrix[split, candidate] = False
                    link(candidate, current)
                    link(current, split)
                    degree[current] += 2
                    log.topology.debug('Node %s: split link (%s, %s).', current, candidate, split)
                elif degree[candidate] < k and not matrix[current, candidate]:
                    link(current, candidate)
                    degree[current] += 1
                    degree[candidate] += 1

                active -= 1
                pool[slot], pool[active] = pool[active], pool[slot]

        for i, j in np.argwhere(np.triu(matrix)):
            g.set_edge(int(i), int(j))
            g.set_edge(int(j), int(i))

        off_target = int(np.count_nonzero(matrix.sum(axis=1) != k))
        log.topology.info('Undirected k-out done, %s of %s nodes have degree other than %s.',
                          off_target, n, k)
        return g, off_target

    @classmethod
    def wireless_range(cls, g, positions, radius, k=None):
        """
        Links every node to the other nodes within Euclidean distance `radius` of it.
        If k is given, only the k nearest of them are linked (ties broken by index).
        `positions` holds one (x, y) row per node.
        """
        if radius < 0:
            raise InvalidConfigurationError(f"range must be non-negative, got {radius}")
        if k is not None:
            cls._check_degree(k)

        n = g.size()
        positions = np.asarray(positions, dtype=float).reshape(-1, 2)
        if len(positions) != n:
            raise InvalidConfigurationError(f"expected {n} positions, got {len(positions)}")

        log.topology.debug('Wiring wireless range, n=%s, range=%s, k=%s.', n, radius, k)

        diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        distances = np.hypot(diff[..., 0], diff[..., 1])

        for i in range(n):
            in_range = [int(j) for j in np.flatnonzero(distances[i] <= radius) if j != i]
            if k is not None:
                in_range = sorted(in_range, key=lambda j: (distances[i, j], j))[:k]
            for j in in_range:
                g.set_edge(i, j)
        return g
