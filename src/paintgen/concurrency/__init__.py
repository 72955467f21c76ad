"""Concurrency: cancellation scopes and the single-flight dispatcher."""

from paintgen.concurrency.cancellation import CancellationScope
from paintgen.concurrency.dispatcher import Attempt, RequestDispatcher

__all__ = ["Attempt", "CancellationScope", "RequestDispatcher"]
