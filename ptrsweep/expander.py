"""
Address expansion: input lines to individual IP addresses
"""

import ipaddress
from typing import Callable, Iterable, Iterator, Optional

from .stats import Statistics
from .workqueue import WorkQueue


class InvalidInputError(ValueError):
    """Input line is neither a valid IP address nor a valid CIDR range"""

    def __init__(self, line: str, kind: str):
        self.line = line
        self.kind = kind
        super().__init__(f"Invalid {kind}: {line}")


def iter_lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield trimmed lines, skipping blanks and '#' comments"""
    for raw in stream:
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        yield line


def _iter_network(network) -> Iterator[str]:
    # Every address from the masked network address up to the last one,
    # network and broadcast included.
    current = int(network.network_address)
    last = int(network.broadcast_address)
    factory = type(network.network_address)
    while current <= last:
        yield str(factory(current))
        current += 1


def expand_line(line: str) -> Iterator[str]:
    """
    Expand one input line into addresses.

    A line containing '/' is a CIDR range; host bits are masked off and
    every address in the block is produced in ascending order. Anything
    else must be a single IP address, returned as written.

    Args:
        line: Trimmed input line

    Returns:
        Lazy iterator of textual addresses

    Raises:
        InvalidInputError: Line does not parse
    """
    line = line.strip()

    if '/' in line:
        _, _, prefix = line.partition('/')
        if not prefix.isdigit():
            raise InvalidInputError(line, "CIDR range")
        try:
            network = ipaddress.ip_network(line, strict=False)
        except ValueError:
            raise InvalidInputError(line, "CIDR range")
        return _iter_network(network)

    try:
        ipaddress.ip_address(line)
    except ValueError:
        raise InvalidInputError(line, "IP address")
    return iter((line,))


class AddressExpander:
    """
    Producer side of the sweep.

    Expands input lines onto the work queue, counting every address in
    Statistics before it becomes visible to a worker, and closes the
    queue once input is exhausted.
    """

    def __init__(
        self,
        queue: WorkQueue,
        stats: Statistics,
        on_invalid: Optional[Callable[[InvalidInputError], None]] = None
    ):
        self.queue = queue
        self.stats = stats
        self.on_invalid = on_invalid
        self.invalid_lines = 0

    def expand(self, line: str) -> int:
        """Enqueue every address for one line, returns how many"""
        try:
            addresses = expand_line(line)
        except InvalidInputError as e:
            self.invalid_lines += 1
            if self.on_invalid:
                self.on_invalid(e)
            return 0

        count = 0
        for address in addresses:
            self.stats.add_total()
            self.queue.put(address)
            count += 1
        return count

    def run(self, lines: Iterable[str]) -> int:
        """
        Feed all lines, then close the queue.

        Returns:
            Number of addresses enqueued
        """
        count = 0
        try:
            for line in iter_lines(lines):
                count += self.expand(line)
        finally:
            self.queue.close()
        return count

