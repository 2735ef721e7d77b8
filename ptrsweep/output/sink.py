"""
Result sink: serialized line output shared by all workers
"""

import threading
from typing import TextIO

from ..models import ResolveResult


FAILED_MARKER = "FAILED"


def strip_root(hostname: str) -> str:
    """Remove the trailing root-label dot(s) from a hostname"""
    return hostname.rstrip('.')


class OutputSink:
    """
    Append-only destination for results.

    Lines are formatted outside the lock; only the write itself is
    serialized, so a slow writer never blocks lookups in other workers.
    """

    def __init__(self, stream: TextIO, domain_only: bool = False,
                 show_failed: bool = False):
        self.stream = stream
        self.domain_only = domain_only
        self.show_failed = show_failed
        self._lock = threading.Lock()
        self.lines_written = 0

    def format(self, result: ResolveResult) -> list[str]:
        """
        Render a result as output lines.

        Success: one line per distinct hostname, either the bare hostname
        (domain-only) or "<address>\\t<hostname>". Failure: a single
        "<address>\\tFAILED" line when failures are shown, else nothing.
        """
        if result.failed:
            if self.show_failed:
                return [f"{result.address}\t{FAILED_MARKER}"]
            return []

        hostnames = dict.fromkeys(strip_root(h) for h in result.hostnames)
        if self.domain_only:
            return list(hostnames)
        return [f"{result.address}\t{h}" for h in hostnames]

    def write(self, result: ResolveResult) -> int:
        """Write a result, returns the number of lines written"""
        lines = self.format(result)
        if not lines:
            return 0

        text = "".join(line + "\n" for line in lines)
        with self._lock:
            self.stream.write(text)
            self.stream.flush()
            self.lines_written += len(lines)
        return len(lines)
