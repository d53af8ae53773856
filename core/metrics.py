"""
In-process counters and duration summaries for the KYC flows.

Counters track submissions, document uploads and review transitions.
Durations are folded into a fixed-size summary (count, total, max) per
metric and label set, so memory stays flat however many uploads a process
handles. Every update is also emitted on the ``metrics`` logger.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger("metrics")

Key = tuple[str, tuple[tuple[str, str], ...]]


@dataclass
class Summary:
    count: int = 0
    total: float = 0.0
    max: float = 0.0

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        if value > self.max:
            self.max = value

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


_counters: dict[Key, int] = {}
_summaries: dict[Key, Summary] = {}


def _labels_key(name: str, labels: dict[str, object]) -> Key:
    return name, tuple(sorted((k, str(v)) for k, v in labels.items()))


def inc(name: str, amount: int = 1, **labels) -> int:
    key = _labels_key(name, labels)
    value = _counters.get(key, 0) + int(amount)
    _counters[key] = value
    logger.info("counter %s=%s %s", name, value, labels or "")
    return value


def counter(name: str, **labels) -> int:
    return _counters.get(_labels_key(name, labels), 0)


def observe(name: str, seconds: float, **labels) -> Summary:
    summary = _summaries.setdefault(_labels_key(name, labels), Summary())
    summary.add(float(seconds))
    logger.debug("duration %s=%.4fs %s", name, seconds, labels or "")
    return summary


def summary(name: str, **labels) -> Summary:
    """Copy of the current summary; an unseen metric reads as empty."""
    found = _summaries.get(_labels_key(name, labels))
    return Summary(found.count, found.total, found.max) if found else Summary()


@contextmanager
def timer(name: str, **labels) -> Iterator[None]:
    """Record the wall time of the block, including blocks that raise."""
    started = time.perf_counter()
    try:
        yield
    finally:
        observe(name, time.perf_counter() - started, **labels)


def reset() -> None:
    _counters.clear()
    _summaries.clear()
