"""Custom exception hierarchy for paintgen."""

from __future__ import annotations

from typing import Any


class PaintgenError(Exception):
    """Base exception for all paintgen errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(PaintgenError):
    """Missing or invalid configuration (e.g. no API key)."""


class DecodeError(PaintgenError):
    """Source bytes could not be read as an image.

    Recovered at the batch level by keeping the original file.
    """

    def __init__(self, message: str = "", image_name: str = "") -> None:
        super().__init__(message)
        self.image_name = image_name


class TransientError(PaintgenError):
    """Transient error: safe to retry with backoff.

    Examples: 429 rate limit, 500/502/503 server error, timeout, connection error.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "server_error",
        http_status: int | None = None,
        retry_after: float | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status
        self.retry_after = retry_after
        self.original = original


class TerminalError(PaintgenError):
    """Terminal error: retrying the same request will not help.

    Examples: 401 auth failure, 404 model not found, bad input, empty response.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "auth_failure",
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status


class DispatchError(TerminalError):
    """The retry budget ran out; carries the last underlying failure."""

    def __init__(
        self,
        message: str = "",
        attempts: int = 0,
        error_type: str = "dispatch_failed",
        http_status: int | None = None,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(message, error_type=error_type, http_status=http_status)
        self.attempts = attempts
        self.original = original


class CancellationError(PaintgenError):
    """Work was superseded or cancelled by the user. Never retried."""


class ParseError(PaintgenError):
    """Generated text could not be turned into the requested artifact."""

    def __init__(self, message: str = "", raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
