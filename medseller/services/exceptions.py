"""
Service Exceptions - Production error handling.
===============================================
Custom exceptions for proper error propagation instead of silent failures.
"""

from __future__ import annotations


class ServiceUnavailableError(Exception):
    """Raised when a collaborator (dataset, chat proxy) is unavailable."""

    def __init__(self, service_name: str, message: str | None = None):
        self.service_name = service_name
        self.message = message or f"{service_name} is unavailable"
        super().__init__(self.message)


class NoDataError(ServiceUnavailableError):
    """Raised when the catalog has no product data to load.

    Fatal for the session: every later query would be answered from an
    empty catalog.
    """

    def __init__(self, message: str | None = None):
        super().__init__("catalog", message or "No product data available")


class DatasetFormatError(ValueError):
    """Raised when a dataset file is readable but is not a list of product records."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid dataset {path}: {reason}")


class RemoteFallbackError(ServiceUnavailableError):
    """Raised when the chat proxy fails (status, body or transport)."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__("chat_proxy", message or "Chat proxy request failed")
