"""
Data models for ptrsweep
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


MAX_WORKERS = 10000
RETRY_BACKOFF = 0.1  # seconds between retries against the same resolver
PROGRESS_INTERVAL = 5.0


class Transport(Enum):
    """Transport used to reach a resolver"""
    UDP = "udp"
    TCP = "tcp"


@dataclass(frozen=True)
class ResolverEndpoint:
    """A DNS server reachable at host:port over a transport"""
    host: str
    port: int = 53
    transport: Transport = Transport.UDP

    def __str__(self) -> str:
        return f"{self.host}:{self.port}/{self.transport.value}"


@dataclass(frozen=True)
class LookupAttempt:
    """A single lookup of one address against one resolver"""
    address: str
    endpoint: ResolverEndpoint
    retry: int
    timeout: float


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of resolving one address"""
    address: str
    hostnames: tuple[str, ...] = ()
    endpoint: Optional[ResolverEndpoint] = None  # resolver that answered

    @property
    def failed(self) -> bool:
        return not self.hostnames


@dataclass
class RunConfig:
    """Configuration for a sweep"""
    workers: int = 100
    transport: Transport = Transport.UDP
    port: int = 53
    timeout: float = 2.0
    retries: int = 1
    domain_only: bool = False
    show_failed: bool = False
    rate_limit: int = 0  # queries per second, 0 = unlimited
    verbose: bool = False
    progress_interval: float = PROGRESS_INTERVAL
    retry_backoff: float = RETRY_BACKOFF

    @property
    def queue_size(self) -> int:
        return self.workers * 2

    def validate(self):
        """
        Check configuration ranges.

        Raises:
            ValueError: If any value is out of range
        """
        if not isinstance(self.transport, Transport):
            raise ValueError(f"Unknown transport '{self.transport}'")
        if not 1 <= self.workers <= MAX_WORKERS:
            raise ValueError(f"Worker count must be between 1 and {MAX_WORKERS}")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Invalid port {self.port}")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        if self.retries < 0:
            raise ValueError("Retries cannot be negative")
        if self.rate_limit < 0:
            raise ValueError("Rate limit cannot be negative")
