"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InputValidationError(ValidationError):
    """One or more form fields were rejected before any mutation ran.

    ``errors`` maps the field name to a human readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid input ({detail})")


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """Serializing or writing to the underlying store failed."""


class CorruptedDataError(StorageError):
    """A stored value exists but cannot be read back."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Stored data under '{key}' is corrupted: {reason}")


class ConfigurationError(DomainException):
    """Settings could not be resolved."""
