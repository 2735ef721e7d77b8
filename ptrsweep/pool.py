"""
Resolution worker pool and sweep orchestration
"""

import sys
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, Optional, Sequence, TextIO

from .expander import AddressExpander
from .lookup import BaseLookup, DNSPythonLookup
from .models import ResolveResult, ResolverEndpoint, RunConfig
from .output import ConsoleOutput, OutputSink
from .policy import ResolutionPolicy
from .ratelimit import NullRateLimiter, create_rate_limiter
from .resolvers import NoResolversError
from .stats import ProgressReporter, Statistics, StatsSnapshot
from .workqueue import WorkQueue


class WorkerPool:
    """
    Fixed-size pool of resolution workers.

    Every worker pulls addresses from the shared queue until it is closed
    and drained. For each address it waits for a rate-limit permit, runs
    the resolution policy, updates the counters and writes the result.
    A failed address never stops a worker.
    """

    def __init__(
        self,
        queue: WorkQueue,
        policy: ResolutionPolicy,
        sink: OutputSink,
        stats: Statistics,
        workers: int = 100,
        rate_limiter=None
    ):
        self.queue = queue
        self.policy = policy
        self.sink = sink
        self.stats = stats
        self.workers = workers
        self.rate_limiter = rate_limiter or NullRateLimiter()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures = []

    def process(self, address: str) -> ResolveResult:
        """Resolve one address and record its outcome"""
        self.rate_limiter.acquire()
        result = self.policy.resolve(address)

        if result.failed:
            self.stats.add_failed()
        else:
            self.stats.add_resolved()
        self.stats.add_processed()

        self.sink.write(result)
        return result

    def _worker(self) -> int:
        handled = 0
        try:
            for address in self.queue:
                self.process(address)
                handled += 1
        except Exception:
            # Closing unblocks a producer waiting on a full queue
            self.queue.close(discard_pending=True)
            raise
        return handled

    def start(self):
        """Launch the workers"""
        self._executor = ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="ptrsweep-worker"
        )
        self._futures = [
            self._executor.submit(self._worker) for _ in range(self.workers)
        ]

    def join(self) -> int:
        """
        Wait for every worker to see the closed queue and finish.

        Returns:
            Number of addresses handled by the pool

        Raises:
            Whatever a worker raised (e.g. OSError writing output)
        """
        if not self._executor:
            return 0
        try:
            wait(self._futures)
            return sum(f.result() for f in self._futures)
        finally:
            self._executor.shutdown(wait=True)
            self._executor = None
            self._futures = []

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            # Abandon queued addresses; only in-flight lookups finish
            self.queue.close(discard_pending=True)
        self.join()
        return False


class _Producer(threading.Thread):
    """Runs the expander in its own thread and keeps its exception"""

    def __init__(self, expander: AddressExpander, lines: Iterable[str]):
        super().__init__(name="ptrsweep-producer", daemon=True)
        self.expander = expander
        self.lines = lines
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            self.expander.run(self.lines)
        except BaseException as e:
            self.error = e


def run_sweep(
    lines: Iterable[str],
    resolvers: Sequence[ResolverEndpoint],
    config: RunConfig,
    output: Optional[TextIO] = None,
    lookup: Optional[BaseLookup] = None,
    console: Optional[ConsoleOutput] = None,
    stats: Optional[Statistics] = None
) -> StatsSnapshot:
    """
    Resolve every address described by `lines`.

    Args:
        lines: Input lines (single IPs or CIDR ranges)
        resolvers: Ordered resolver set, must not be empty
        config: Run configuration
        output: Result stream (default: stdout)
        lookup: Lookup backend (default: DNSPythonLookup)
        console: Diagnostic output (default: rich console on stderr)
        stats: Counters to update (default: fresh Statistics)

    Returns:
        Final statistics snapshot

    Raises:
        NoResolversError: Empty resolver set, nothing is scheduled
        ValueError: Invalid configuration
    """
    if not resolvers:
        raise NoResolversError()
    config.validate()

    output = output if output is not None else sys.stdout
    console = console or ConsoleOutput()
    stats = stats or Statistics()
    owns_lookup = lookup is None
    lookup = lookup or DNSPythonLookup()

    queue = WorkQueue(config.queue_size)
    expander = AddressExpander(
        queue, stats, on_invalid=lambda e: console.print_warning(str(e))
    )
    policy = ResolutionPolicy(
        resolvers,
        lookup,
        retries=config.retries,
        timeout=config.timeout,
        backoff=config.retry_backoff
    )
    sink = OutputSink(output, domain_only=config.domain_only,
                      show_failed=config.show_failed)
    pool = WorkerPool(
        queue, policy, sink, stats,
        workers=config.workers,
        rate_limiter=create_rate_limiter(config.rate_limit)
    )

    progress = None
    if config.verbose:
        progress = ProgressReporter(stats, console.print_progress,
                                    interval=config.progress_interval)
        progress.start()

    producer = _Producer(expander, lines)
    try:
        with pool:
            producer.start()
            producer.join()
    finally:
        if progress:
            progress.stop()
        if owns_lookup:
            lookup.close()

    if producer.error is not None:
        raise producer.error

    snapshot = stats.snapshot()
    if config.verbose:
        console.print_summary(snapshot)
        if expander.invalid_lines:
            console.print_info(f"Skipped {expander.invalid_lines} invalid input lines")
    return snapshot
