"""
=========================
RandomSource
=========================

Last update: October 2026

RandomSource class. Seeded source of uniform integers and doubles consumed by the
randomized generators. Call order matters: the same seed and the same sequence of
calls always produce the same graph.
"""
import numpy as np

from overlaysim.Log import log

class RandomSource:

    def __init__(self, seed=None):
        self._seed = seed
        self._rng = np.random.default_rng(seed)

        log.topology.debug('Initialized random source with seed=%s.', seed)

    def __repr__(self):
        return '[RandomSource: seed=%s]' % self._seed

    @property
    def seed(self):
        return self._seed

    def next_int(self, bound):
        """
        Uniform integer in [0, bound).
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return int(self._rng.integers(bound))

    def next_double(self):
        """
        Uniform float in [0, 1).
        """
        return float(self._rng.random())
