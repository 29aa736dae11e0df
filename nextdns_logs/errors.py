from __future__ import annotations


class NextDnsLogsError(RuntimeError):
    """Base error for a failed download or stream run."""


class ConfigError(NextDnsLogsError):
    """Raised when the API key or profile is missing or a setting is malformed."""


class ApiError(NextDnsLogsError):
    """Raised on transport failures and non-success HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(NextDnsLogsError):
    """Raised when a response body or stream frame is not the expected JSON shape."""


class SinkWriteError(NextDnsLogsError):
    """Raised when the output file cannot be written."""


class InvalidTimeExpression(ValueError):
    """Raised when a start/end argument is not a relative offset, "now" or a date."""
