"""
=========================
Node
=========================

Last update: October 2026

Node class. A simulated peer: a durable id, a mutable index into the network
registry, one protocol instance per slot, an optional position and transmission
range, and a fail state.

Fail states:
    OK   <-> DOWN   freely reversible
    OK | DOWN -> DEAD   irreversible, invalidates the index and runs the cleanup hook
                        of every cleanable protocol, in slot order
"""
import enum

from overlaysim.Log import log
from overlaysim.Exceptions import InvalidTransitionError

INDEX_INVALID = -1
RANGE_UNSET = -1


class FailState(enum.Enum):
    OK = 0
    DOWN = 1
    DEAD = 2

    @classmethod
    def from_value(cls, value):
        """Accepts a FailState, its integer value or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"failState={value!r}")

    def __repr__(self):
        return self.name


class IdCounter():
    """
    Source of node ids. Ids are strictly increasing and never reused. Not thread safe:
    nodes are created by a single thread.
    """

    def __init__(self, start=0):
        self._next = start

    def __repr__(self):
        return '[IdCounter: next=%s]' % self._next

    def next_id(self):
        node_id = self._next
        self._next += 1
        return node_id


class Node():

    def __init__(self, protocols, id_counter):
        self._id_counter = id_counter
        self._id = id_counter.next_id()
        self._protocols = [prototype.clone() for prototype in protocols]
        self._index = INDEX_INVALID
        self._fail_state = FailState.OK
        self._position = (0, 0)
        self._range = RANGE_UNSET

        log.node.debug('Initialized node %s with protocols %s.', self._id, self._protocols)

    def __repr__(self):
        return '[Node: id=%s, index=%s, position=%s, range=%s, state=%s, protocols=%s]' % (
            self._id, self._index, self._position, self._range, self._fail_state.name, self._protocols)

    def __eq__(self, other):
        return isinstance(other, Node) and self._id == other._id

    # Hashable so that nodes can be stored in sets or used as dictionary keys
    def __hash__(self):
        return hash(self._id)

    def clone(self):
        """
        New node with a fresh id and a deep copy of every protocol. Position and range
        are reset, the index is kept until the registry assigns a new one.
        """
        result = Node.__new__(Node)
        result._id_counter = self._id_counter
        result._id = self._id_counter.next_id()
        result._protocols = [protocol.clone() for protocol in self._protocols]
        result._index = self._index
        result._fail_state = FailState.OK
        result._position = (0, 0)
        result._range = RANGE_UNSET

        log.node.debug('Cloned node %s into node %s.', self._id, result._id)
        return result

    @property
    def id(self):
        return self._id

    @property
    def index(self):
        return self._index

    @property
    def fail_state(self):
        return self._fail_state

    def _check_alive(self):
        if self._fail_state is FailState.DEAD:
            raise InvalidTransitionError(f"node {self._id} is DEAD and can't be modified")

    def get_index(self):
        return self._index

    def set_index(self, index):
        self._check_alive()
        self._index = index

    def get_fail_state(self):
        return self._fail_state

    def set_fail_state(self, fail_state):
        fail_state = FailState.from_value(fail_state)

        if self._fail_state is FailState.DEAD:
            if fail_state is FailState.DEAD:
                return
            raise InvalidTransitionError(
                f"cannot change fail state of node {self._id} to {fail_state.name}: node is already DEAD")

        match fail_state:
            case FailState.OK | FailState.DOWN:
                self._fail_state = fail_state
            case FailState.DEAD:
                self._index = INDEX_INVALID
                self._fail_state = FailState.DEAD
                for protocol in self._protocols:
                    if protocol.is_cleanable():
                        protocol.on_kill()

        log.node.info('Node %s fail state set to %s.', self._id, self._fail_state.name)

    def is_up(self):
        return self._fail_state is FailState.OK

    def get_protocol(self, i):
        return self._protocols[i]

    def protocol_size(self):
        return len(self._protocols)

    def get_position(self):
        return self._position

    def set_position(self, x, y):
        self._check_alive()
        self._position = (x, y)

    def get_range(self):
        return self._range

    def set_range(self, radius):
        self._check_alive()
        self._range = radius
