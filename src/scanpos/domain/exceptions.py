"""Domain-level exceptions.

Every failure the core can report is a subclass of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InterchangeFormatError(DomainException):
    """A catalog payload could not be parsed into products."""


class CorruptCatalogError(DomainException):
    """Persisted catalog data exists but is malformed."""


class PersistenceError(DomainException):
    """Writing the catalog to durable storage failed."""


class ScannerError(DomainException):
    """The scanner device could not be acquired or read."""
