from __future__ import annotations


class NewsServiceError(Exception):
    """Base error for the news service. ``status_code`` is used by the HTTP layer."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(NewsServiceError):
    """A required request input is missing or empty."""

    status_code = 400


class ProviderError(NewsServiceError):
    """The live search/extraction provider failed or returned nothing."""

    status_code = 502


class StoreError(NewsServiceError):
    """The article store backend failed to read or write."""

    status_code = 503


class StartupConfigError(NewsServiceError):
    """Required configuration is missing; the process must not serve requests."""
