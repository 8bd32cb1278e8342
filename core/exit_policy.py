from __future__ import annotations

"""Process-wide run state and the stopping rule.

`RuntimeState` is created once at startup and passed explicitly to whoever
needs it: the run loop increments it, the API reports it, and the exit
policy only reads it. Tests inject a fake clock instead of sleeping.
"""

import time
from collections.abc import Callable
from datetime import timedelta
from threading import Lock
from typing import Protocol

Clock = Callable[[], float]


class RunCounter:
    """Count of completed module runs, safe to share between threads."""

    def __init__(self, start: int = 0) -> None:
        self._lock = Lock()
        self._value = start

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class RuntimeState:
    def __init__(self, clock: Clock = time.monotonic, counter: RunCounter | None = None) -> None:
        self._clock = clock
        # Fixed once; never reset.
        self.started_at = clock()
        self.counter = counter if counter is not None else RunCounter()

    def elapsed(self) -> timedelta:
        return timedelta(seconds=self._clock() - self.started_at)

    def modules_ran(self) -> int:
        return self.counter.value

    def record_run(self) -> int:
        """Mark one module run as completed and return the new total."""
        return self.counter.increment()


class ExitPolicy(Protocol):
    def should_exit(self, state: RuntimeState) -> bool:
        ...


def should_exit(config: ExitPolicy, state: RuntimeState) -> bool:
    """Return True when the main loop should stop now."""
    return config.should_exit(state)
