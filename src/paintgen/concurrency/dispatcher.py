"""Single-flight request dispatcher with retry and exponential backoff."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from paintgen.concurrency.cancellation import CancellationScope
from paintgen.errors.exceptions import CancellationError, DispatchError
from paintgen.errors.retry import describe_failure, retry_after_seconds

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MAX_WAIT = 60.0  # seconds


@dataclass
class Attempt:
    index: int
    delay_before: float
    scope: CancellationScope


RetryCallback = Callable[[Attempt, BaseException], None]


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, Exception) and not isinstance(exc, CancellationError)


class RequestDispatcher:
    """Runs a unit of work with bounded retries, one logical call at a time.

    Starting a new ``dispatch`` cancels whatever the previous call still has
    in flight. Attempt ``i`` that fails (other than by cancellation) is
    followed by a wait of ``backoff_unit * 2**i`` seconds, up to
    ``max_retries`` retries. A longer Retry-After from the server wins, still
    capped at ``max_wait``.
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff_unit: float = 1.0,
        max_wait: float = _MAX_WAIT,
        on_retry: RetryCallback | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self._max_retries = max_retries
        self._max_wait = max_wait
        self._backoff = wait_exponential(multiplier=backoff_unit, exp_base=2, max=max_wait)
        self._on_retry = on_retry
        self._scope: CancellationScope | None = None
        self._retry_count = 0
        self._last_attempts = 0

    @property
    def in_flight(self) -> bool:
        return self._scope is not None and not self._scope.cancelled

    @property
    def retry_count(self) -> int:
        """Retries performed so far by the current call; 0 after success."""
        return self._retry_count

    @property
    def last_attempts(self) -> int:
        """Attempts issued by the most recent call."""
        return self._last_attempts

    def cancel(self) -> bool:
        """Cancel the current call, if any. Safe to call repeatedly."""
        if self._scope is None:
            return False
        return self._scope.cancel()

    async def dispatch(
        self,
        unit_of_work: Callable[[], Awaitable[T]],
        max_retries: int | None = None,
    ) -> T:
        budget = self._max_retries if max_retries is None else max_retries
        if budget < 0:
            raise ValueError(f"max_retries must be >= 0, got {budget}")

        if self._scope is not None and self._scope.cancel():
            logger.debug("Superseded previous in-flight request")
        scope = CancellationScope()
        self._scope = scope
        self._retry_count = 0
        self._last_attempts = 0

        retrying = AsyncRetrying(
            stop=stop_after_attempt(budget + 1),
            wait=self._wait,
            retry=retry_if_exception(_is_retryable),
            sleep=scope.sleep,
            before_sleep=partial(self._report_retry, scope, budget),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    self._last_attempts = attempt.retry_state.attempt_number
                    result = await scope.run(unit_of_work)
        except CancellationError:
            logger.info("Request cancelled after %d attempt(s)", self._last_attempts)
            raise
        except Exception as exc:
            error_type, http_status = describe_failure(exc)
            raise DispatchError(
                str(exc) or error_type,
                attempts=self._last_attempts,
                error_type=error_type,
                http_status=http_status,
                original=exc,
            ) from exc
        finally:
            if self._scope is scope:
                self._scope = None

        self._retry_count = 0
        return result

    def _wait(self, retry_state: RetryCallState) -> float:
        """Exponential backoff, stretched to honour a server's Retry-After."""
        delay = self._backoff(retry_state)
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        retry_after = retry_after_seconds(exc) if exc is not None else None
        if retry_after is not None:
            delay = min(max(delay, retry_after), self._max_wait)
        return delay

    def _report_retry(
        self,
        scope: CancellationScope,
        budget: int,
        retry_state: RetryCallState,
    ) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        self._retry_count = retry_state.attempt_number
        logger.warning(
            "Attempt %d/%d failed: %s. Retrying in %.1fs",
            retry_state.attempt_number,
            budget + 1,
            exc,
            delay,
        )
        if self._on_retry is not None and exc is not None:
            self._on_retry(
                Attempt(index=retry_state.attempt_number, delay_before=delay, scope=scope),
                exc,
            )
