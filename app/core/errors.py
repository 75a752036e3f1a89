"""Pipeboard — Domain Errors."""


class PipeboardError(Exception):
    """Base class for all Pipeboard errors."""


class AuthenticationError(PipeboardError):
    """Raised when a login attempt cannot be resolved to a user."""


class UserNotFoundError(AuthenticationError):
    """The email is neither the admin identity nor a roster member."""


class InvalidCredentialsError(AuthenticationError):
    """The email is known but the password does not match."""


class ValidationError(PipeboardError):
    """Raised by form-level checks (password confirmation, minimum length)."""


class SaleNotFoundError(PipeboardError):
    """Raised when a sale id is not present in the user's list."""

    def __init__(self, sale_id: str):
        self.sale_id = sale_id
        super().__init__(f"Sale not found: {sale_id}")


class InsightServiceError(PipeboardError):
    """Raised when an AI provider fails to produce a narrative."""

    def __init__(self, message: str, provider: str = ""):
        self.provider = provider
        super().__init__(message)


class StoreUnavailableError(PipeboardError):
    """Raised when the record store cannot be read."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        super().__init__(f"Record store unavailable reading {key}: {reason}")
