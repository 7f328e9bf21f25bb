"""Domain-level exceptions.

Every rule or contract violation in the promotion engine is a subclass of
DomainException so the CLI layer can catch them uniformly and display a
user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidArgumentError(DomainException):
    """A value failed validation (e.g. a negative price)."""


class ValidationError(InvalidArgumentError):
    """Input to a use case broke one of its rules."""


class InvalidStateError(DomainException):
    """An operation was attempted on an object in the wrong state."""


class DivisionByZeroError(DomainException):
    """A percentage was computed against a zero amount."""
