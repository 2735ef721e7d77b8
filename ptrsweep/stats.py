"""
Run statistics and periodic progress reporting
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .models import PROGRESS_INTERVAL


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time copy of the counters"""
    total: int = 0
    resolved: int = 0
    failed: int = 0
    processed: int = 0

    @property
    def pending(self) -> int:
        return self.total - self.processed


class Statistics:
    """
    Counters shared by the expander, the workers and the progress reporter.

    Each counter is incremented under its own lock, so a reader can see
    momentary skew between counters; they only agree once the run is
    quiescent (processed == resolved + failed, processed == total).
    """

    _FIELDS = ('total', 'resolved', 'failed', 'processed')

    def __init__(self):
        self._counts = dict.fromkeys(self._FIELDS, 0)
        self._locks = {name: threading.Lock() for name in self._FIELDS}

    def _incr(self, name: str, n: int = 1) -> int:
        with self._locks[name]:
            self._counts[name] += n
            return self._counts[name]

    def add_total(self, n: int = 1) -> int:
        return self._incr('total', n)

    def add_resolved(self, n: int = 1) -> int:
        return self._incr('resolved', n)

    def add_failed(self, n: int = 1) -> int:
        return self._incr('failed', n)

    def add_processed(self, n: int = 1) -> int:
        return self._incr('processed', n)

    @property
    def total(self) -> int:
        return self._counts['total']

    @property
    def resolved(self) -> int:
        return self._counts['resolved']

    @property
    def failed(self) -> int:
        return self._counts['failed']

    @property
    def processed(self) -> int:
        return self._counts['processed']

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            total=self.total,
            resolved=self.resolved,
            failed=self.failed,
            processed=self.processed
        )


class ProgressReporter:
    """
    Background thread that samples Statistics on a fixed interval.

    Every tick it computes processed / elapsed seconds and hands the
    snapshot and rate to the callback. Purely observational.
    """

    def __init__(
        self,
        stats: Statistics,
        on_progress: Callable[[StatsSnapshot, float], None],
        interval: float = PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic
    ):
        self.stats = stats
        self.on_progress = on_progress
        self.interval = interval
        self._clock = clock
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._started_at: Optional[float] = None

    def rate(self, snapshot: StatsSnapshot) -> float:
        """Addresses processed per second since start"""
        if self._started_at is None:
            return 0.0
        elapsed = self._clock() - self._started_at
        if elapsed <= 0:
            return 0.0
        return snapshot.processed / elapsed

    def report(self):
        """Emit one progress sample"""
        snapshot = self.stats.snapshot()
        self.on_progress(snapshot, self.rate(snapshot))

    def _run(self):
        while not self._done.wait(self.interval):
            self.report()

    def start(self):
        self._started_at = self._clock()
        self._thread = threading.Thread(
            target=self._run, name="ptrsweep-progress", daemon=True
        )
        self._thread.start()

    def stop(self):
        """Signal completion and wait for the thread to exit"""
        self._done.set()
        if self._thread:
            self._thread.join()
            self._thread = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
