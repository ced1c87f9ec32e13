"""Marble GA exception hierarchy.

Every failure raised by the engine derives from ``MarbleError`` so a driver
can stop a run on any engine fault with a single ``except`` clause.
"""


class MarbleError(Exception):
    """Root of all marble GA exceptions."""


class ConfigurationError(MarbleError):
    """Invalid or missing configuration."""


class SimulationError(MarbleError):
    """Errors raised by the arena or the tick loop driving it."""


class GeneticsError(MarbleError):
    """Invalid gene values or a fitness that cannot be computed."""


class SelectionError(MarbleError):
    """A population or fitness vector that parents cannot be drawn from."""


class LifecycleError(MarbleError):
    """An operation was called out of order or on a destroyed object."""
