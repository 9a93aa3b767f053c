"""
=========================
Exceptions
=========================

Last update: October 2026

Errors raised by the topology generators and the node lifecycle.
"""


class OverlayError(Exception):
    """Base class for all errors raised by overlaysim."""


class InvalidConfigurationError(OverlayError, ValueError):
    """A wiring parameter is negative, out of range or structurally impossible."""


class InvalidTransitionError(OverlayError, RuntimeError):
    """A node was asked to leave the DEAD state, or a dead node was mutated."""
