"""Domain-level exceptions.

All failures the store signals are subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
Missing records are not errors: lookups return ``None`` or ``False``.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A record field was given a value it cannot hold."""


class PersistenceError(DomainException):
    """Reading or writing a persisted inventory file failed."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path
