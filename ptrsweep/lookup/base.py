"""
Abstract base class for reverse lookup implementations
"""

from abc import ABC, abstractmethod
from ..models import ResolverEndpoint


class LookupFailed(Exception):
    """A single lookup attempt produced no hostnames"""


class BaseLookup(ABC):
    """Abstract base class for PTR lookup backends"""

    @abstractmethod
    def lookup(self, address: str, endpoint: ResolverEndpoint,
               timeout: float) -> list[str]:
        """
        Resolve the PTR records of an address using one resolver.

        Args:
            address: IP address to look up
            endpoint: Resolver to ask (host, port, transport)
            timeout: Time budget for this attempt in seconds

        Returns:
            Non-empty list of hostnames as returned by the resolver

        Raises:
            LookupFailed: Timeout, transport error or empty answer
        """
        pass

    def close(self):
        """Clean up resources"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
