"""Custom exceptions for compare_api domain.

This module defines the error taxonomy shared by the provider gateway,
the HTTP routes and the dashboard client.
"""


class CompareAPIError(Exception):
    """Base exception for all compare_api errors."""

    pass


# ============================================================================
# Data errors
# ============================================================================


class DataError(CompareAPIError):
    """Base class for data-related errors."""

    pass


class DataNotFoundError(DataError):
    """Raised when an entity cannot be found.

    Examples:
    - Unknown ticker on /company/{symbol}
    - No historical series for a symbol
    """

    def __init__(self, message: str, resource: str | None = None):
        super().__init__(message)
        self.resource = resource


# ============================================================================
# External service errors
# ============================================================================


class ExternalServiceError(CompareAPIError):
    """Base class for external service errors."""

    def __init__(self, message: str, service: str):
        super().__init__(message)
        self.service = service


class RateLimitError(ExternalServiceError):
    """Raised when an API responds with HTTP 429.

    Never retried automatically; the UI shows a dedicated message.
    """

    def __init__(self, message: str, service: str, path: str | None = None):
        super().__init__(message, service)
        self.path = path


class DatasetUnavailableError(ExternalServiceError):
    """Raised when the provider responds with HTTP 402.

    The dataset is restricted on the current plan. Callers treat this as
    "no data" rather than a failure.
    """

    def __init__(self, message: str, service: str, path: str | None = None):
        super().__init__(message, service)
        self.path = path


class UpstreamError(ExternalServiceError):
    """Raised for any other non-2xx response or transport failure.

    Examples:
    - FMP returns 500
    - Connection timeout talking to the Compare API
    """

    def __init__(
        self,
        message: str,
        service: str,
        status_code: int | None = None,
        path: str | None = None,
    ):
        super().__init__(message, service)
        self.status_code = status_code
        self.path = path
