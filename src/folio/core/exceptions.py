"""
Folio exception hierarchy.

All folio exceptions inherit from FolioError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class FolioError(Exception):
    """Base exception class for all folio errors."""


class ConfigurationError(FolioError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvestmentError(FolioError):
    """Base class for persistence failures on investment records."""


class TransportFailure(InvestmentError):
    """Raised when the backing store cannot be reached."""


class ValidationRejected(InvestmentError):
    """Raised when the backing store rejects a payload.

    ``errors`` holds the individual messages reported by the store.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFound(InvestmentError):
    """Raised when the target record no longer exists."""


class SerializationFailure(InvestmentError):
    """Raised for malformed stored or received investment data."""


class FormValidationError(FolioError):
    """Raised when form input fails local validation.

    ``errors`` maps field name to a user-facing message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid investment form ({summary})")
