from __future__ import annotations

import random
from threading import Lock

from app.models.schemas import DemoItem, RandomValue


class DemoService:
    """Counts how often a fresh random value had to be computed."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._hits = 0

    def compute(self, q: str) -> RandomValue:
        with self._lock:
            self._hits += 1
            hits = self._hits
        return RandomValue(q=q, value=random.random(), hits=hits)

    def get_hits(self) -> int:
        with self._lock:
            return self._hits

    def reset_hits(self) -> None:
        with self._lock:
            self._hits = 0


def generate_items(total: int) -> list[DemoItem]:
    return [DemoItem(id=i, name=f"Item {i}", value=random.randint(1, 1000)) for i in range(1, total + 1)]


_SERVICE = DemoService()


def get_demo_service() -> DemoService:
    return _SERVICE
