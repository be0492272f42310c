from __future__ import annotations

import time
from typing import Callable, Iterable, Iterator, TypeVar


T = TypeVar("T")
R = TypeVar("R")


class Pacer:
    """
    Strictly sequential loop with a fixed pause after each item.
    A courtesy to upstream services, not a rate limiter.
    """

    def __init__(self, *, delay_sec: float = 0.5, sleep: Callable[[float], None] = time.sleep) -> None:
        if delay_sec < 0:
            raise ValueError("delay_sec must be >= 0")
        self._delay = delay_sec
        self._sleep = sleep

    def run(self, items: Iterable[T], fn: Callable[[T], R]) -> Iterator[tuple[T, R]]:
        for item in items:
            result = fn(item)
            yield item, result
            if self._delay > 0:
                self._sleep(self._delay)
