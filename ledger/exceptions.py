"""Domain-specific exceptions for the ledger core."""

class ValidationError(ValueError):
    """Raised when submitted transaction fields do not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when a transaction cannot be located by id."""


class PersistenceError(IOError):
    """Raised when the storage layer encounters unrecoverable issues."""
