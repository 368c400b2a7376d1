from __future__ import annotations

from threading import Lock
from typing import Any, Callable, TypeVar


T = TypeVar("T")


class MissingIdempotencyKeyError(ValueError):
    pass


class IdempotencyStore:
    """Keeps the first result produced for each idempotency key.

    At most one distinct result exists per key for the lifetime of the
    process: the lookup, the factory call and the store happen under one lock.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._results: dict[str, Any] = {}

    def get_or_create(self, key: str | None, factory: Callable[[], T]) -> tuple[T, bool]:
        """Return ``(result, created)``; ``factory`` only runs for unseen keys."""

        if key is None or not key.strip():
            raise MissingIdempotencyKeyError("Idempotency-Key header is required")

        with self._lock:
            if key in self._results:
                return self._results[key], False
            result = factory()
            self._results[key] = result
            return result, True

    def all(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._results)

    def count(self) -> int:
        with self._lock:
            return len(self._results)

    def clear(self) -> int:
        with self._lock:
            cleared = len(self._results)
            self._results.clear()
            return cleared


_PAYMENTS_STORE = IdempotencyStore()


def get_payments_store() -> IdempotencyStore:
    return _PAYMENTS_STORE


def reset_payments_store() -> None:
    get_payments_store().clear()
