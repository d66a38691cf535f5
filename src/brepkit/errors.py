"""Exception types raised by the brepkit assembly kernel.

Every kernel error is a :class:`ValueError` subclass carrying an optional
``details`` dictionary with whatever context was available where the
error was detected.
"""


class BrepError(ValueError):
    """Base class for brepkit kernel errors."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class SequencingError(BrepError):
    """A builder call was made out of order.

    Raised for ``loop``/``edge`` before any ``face``, and for ``edge`` or
    ``last_half_edge`` when no loop is open.
    """


class RegistryConsistencyError(BrepError):
    """The directed-edge registry holds an inconsistent or degenerate pair."""


class GeometricDegeneracyError(BrepError):
    """Surface synthesis received degenerate input."""


class ShellClosureError(BrepError):
    """A finished shell violates the closure invariant."""


__all__ = [
    'BrepError',
    'SequencingError',
    'RegistryConsistencyError',
    'GeometricDegeneracyError',
    'ShellClosureError',
]
