"""Custom exception classes for API error handling."""

from __future__ import annotations


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail or message


class ValidationError(APIError):
    """Raised when request validation fails."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message, status_code=400, detail=detail)


class CatalogUnavailableError(APIError):
    """Raised when the catalog failed to load at startup."""

    def __init__(self, message: str = "Catalog unavailable", detail: str | None = None):
        super().__init__(message, status_code=503, detail=detail)
