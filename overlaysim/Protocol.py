"""
=========================
Protocol
=========================

Last update: October 2026

Protocol classes. A node holds one protocol instance per configured slot. Instances
are cloned from a prototype, so every protocol has to be deep-copyable.

Capabilities are queried explicitly: a protocol that wants to release state when its
node dies mixes in Cleanable, and the node checks is_cleanable() instead of
inspecting the type.
"""
import copy

from overlaysim.Log import log

class Protocol():

    def __repr__(self):
        return '[%s]' % self.__class__.__name__

    def step(self, node, pid):
        """
        Called once per cycle by the scheduler driving the simulation. Does nothing by
        default.
        """
        return

    def clone(self):
        return copy.deepcopy(self)

    def is_cleanable(self):
        return False


class Cleanable():

    def is_cleanable(self):
        return True

    def on_kill(self):
        raise NotImplementedError


class Linkable(Cleanable, Protocol):
    """
    Neighbour list of a node. The wiring drivers fill it from a generated graph.
    """

    def __init__(self, capacity=None):
        self.capacity = capacity
        self._neighbours = []

    def __repr__(self):
        return '[Linkable: degree=%s]' % len(self._neighbours)

    @property
    def neighbours(self):
        return tuple(self._neighbours)

    def clone(self):
        # Links belong to a particular node, a clone starts with an empty list
        return Linkable(capacity=self.capacity)

    def degree(self):
        return len(self._neighbours)

    def get_neighbour(self, i):
        return self._neighbours[i]

    def contains(self, node):
        return node in self._neighbours

    def add_neighbour(self, node):
        if node in self._neighbours:
            return False
        if self.capacity is not None and len(self._neighbours) >= self.capacity:
            log.protocol.warning('Linkable full (capacity=%s), dropping link to %s.', self.capacity, node)
            return False
        self._neighbours.append(node)
        return True

    def on_kill(self):
        log.protocol.debug('Dropping %s links.', len(self._neighbours))
        self._neighbours = []


class CycleCounter(Protocol):

    def __init__(self):
        self.cycles = 0

    def __repr__(self):
        return '[CycleCounter: cycles=%s]' % self.cycles

    def step(self, node, pid):
        self.cycles += 1
