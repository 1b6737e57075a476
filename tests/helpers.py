"""
Test doubles for probe tests.

Probe timing is driven by a FakeClock that only moves when a scripted
transform "runs", so every elapsed time in these tests is exact.
"""

import threading
from pathlib import Path
from typing import Iterable, Optional


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_000_000):
        self._lock = threading.Lock()
        self.now = start

    def __call__(self) -> int:
        with self._lock:
            return self.now

    def advance(self, ms: int) -> None:
        with self._lock:
            self.now += ms


class ScriptedTransform:
    """
    Transform that takes a scripted amount of fake time.

    Writes `size` bytes to the target (None deletes it instead) and
    raises `error` if one is set.
    """

    def __init__(
        self,
        clock: FakeClock,
        durations: Iterable[int] = (),
        size: Optional[int] = 1000,
        default_duration: int = 10,
        error: Optional[Exception] = None,
    ):
        self.clock = clock
        self.durations = list(durations)
        self.size = size
        self.default_duration = default_duration
        self.error = error
        self.calls = 0
        self.sources = []

    def __call__(self, source: Path, target: Path) -> None:
        self.calls += 1
        self.sources.append(source.read_bytes())
        duration = self.durations.pop(0) if self.durations else self.default_duration
        self.clock.advance(duration)
        if self.error is not None:
            raise self.error
        if self.size is None:
            target.unlink()
        else:
            target.write_bytes(b"x" * self.size)


class GatedTransform:
    """
    Thread-safe transform that optionally waits on a barrier.

    Takes no fake time, so every elapsed time is 0ms.
    """

    def __init__(self, barrier: Optional[threading.Barrier] = None):
        self.barrier = barrier
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, source: Path, target: Path) -> None:
        with self._lock:
            self.calls += 1
        if self.barrier is not None:
            self.barrier.wait()
        target.write_bytes(b"x" * 1000)
