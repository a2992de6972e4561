"""
Error taxonomy for the circuit solver.

Every failure raised by the core derives from CircuitError so callers can
recover from any of them with a single except clause.
"""


class CircuitError(Exception):
    """Base class for all circuit solver errors."""
    pass


class InvalidArgument(CircuitError):
    """Malformed component definition or node name."""
    pass


class InvalidState(CircuitError):
    """Operation not possible in the current circuit state (empty, ungrounded, unsolved)."""
    pass


class SingularMatrix(CircuitError):
    """Gaussian elimination found no usable pivot."""
    pass


class IOFailure(CircuitError):
    """A circuit file could not be opened for reading or writing."""
    pass
