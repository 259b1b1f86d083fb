"""Domain Exceptions

Errors raised by pure domain logic. Use cases translate them into
Result errors; they never reach HTTP callers directly.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for invoicing domain errors"""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(DomainError):
    """A monetary input is out of its allowed range"""

    code = "INVALID_AMOUNT"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ValidationError(DomainError):
    """Invoice input failed validation; carries the offending field path"""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class InvalidState(DomainError):
    """Operation not allowed for the invoice's current status"""

    code = "INVALID_STATE"


class PersistenceError(DomainError):
    """The store rejected or failed a write; nothing was committed"""

    code = "PERSISTENCE_ERROR"


class RenderError(DomainError):
    """A document could not be produced for the given invoice"""

    code = "RENDER_ERROR"
