"""Domain-level exceptions.

Every failure the core can produce is a subclass of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateError(DomainException):
    """A status value is not one of the known order states."""


class OrderLockedError(DomainException):
    """Content mutation attempted on an order in a terminal state."""


class PersistenceError(DomainException):
    """The underlying store failed; the transaction was rolled back."""
