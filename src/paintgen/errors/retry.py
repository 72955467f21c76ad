"""Classification of generation-service failures."""

from __future__ import annotations

import contextlib

import openai

from paintgen.errors.exceptions import (
    PaintgenError,
    TerminalError,
    TransientError,
)


def classify_openai_error(exc: Exception) -> PaintgenError:
    """Convert an openai exception to our exception hierarchy."""
    if isinstance(exc, openai.RateLimitError):
        retry_after = None
        if hasattr(exc, "response") and exc.response:
            retry_after_str = exc.response.headers.get("retry-after")
            if retry_after_str:
                with contextlib.suppress(ValueError):
                    retry_after = float(retry_after_str)
        return TransientError(
            str(exc),
            error_type="rate_limit",
            http_status=429,
            retry_after=retry_after,
            original=exc,
        )
    if isinstance(exc, openai.InternalServerError):
        status = getattr(exc, "status_code", 500)
        return TransientError(
            str(exc),
            error_type="server_error",
            http_status=status,
            original=exc,
        )
    if isinstance(exc, (openai.APIConnectionError, openai.APITimeoutError)):
        return TransientError(
            str(exc),
            error_type="timeout",
            original=exc,
        )
    if isinstance(exc, openai.AuthenticationError):
        return TerminalError(str(exc), error_type="auth_failure", http_status=401)
    if isinstance(exc, openai.NotFoundError):
        return TerminalError(str(exc), error_type="model_not_found", http_status=404)
    if isinstance(exc, openai.BadRequestError):
        return TerminalError(str(exc), error_type="bad_input", http_status=400)
    if isinstance(exc, openai.APIStatusError):
        return TerminalError(
            str(exc), error_type="http_error", http_status=exc.status_code
        )
    return TerminalError(str(exc), error_type="unknown")


def describe_failure(exc: BaseException) -> tuple[str, int | None]:
    """Return ``(error_type, http_status)`` for any failure a unit of work raised."""
    if isinstance(exc, openai.OpenAIError):
        exc = classify_openai_error(exc)
    if isinstance(exc, (TransientError, TerminalError)):
        return exc.error_type, exc.http_status
    return type(exc).__name__, None


def retry_after_seconds(exc: BaseException) -> float | None:
    """Server-requested delay before the next attempt, if the failure carries one."""
    if isinstance(exc, openai.RateLimitError):
        exc = classify_openai_error(exc)
    if isinstance(exc, TransientError):
        return exc.retry_after
    return None
