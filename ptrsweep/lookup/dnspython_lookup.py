"""
PTR lookups through dnspython against explicit resolvers
"""

import threading

import dns.exception
import dns.resolver

from ..models import ResolverEndpoint, Transport
from .base import BaseLookup, LookupFailed


class DNSPythonLookup(BaseLookup):
    """
    Reverse lookups with dnspython.

    Each endpoint gets its own stub resolver pointed at exactly that
    nameserver and port, with the system configuration ignored. Resolvers
    are created on first use and shared between worker threads.
    """

    def __init__(self):
        self._resolvers: dict[ResolverEndpoint, dns.resolver.Resolver] = {}
        self._lock = threading.Lock()

    def _resolver_for(self, endpoint: ResolverEndpoint) -> dns.resolver.Resolver:
        with self._lock:
            resolver = self._resolvers.get(endpoint)
            if resolver is None:
                resolver = dns.resolver.Resolver(configure=False)
                # port first: nameservers pick it up when assigned
                resolver.port = endpoint.port
                resolver.nameservers = [endpoint.host]
                self._resolvers[endpoint] = resolver
            return resolver

    def lookup(self, address: str, endpoint: ResolverEndpoint,
               timeout: float) -> list[str]:
        try:
            resolver = self._resolver_for(endpoint)
            answer = resolver.resolve_address(
                address,
                tcp=endpoint.transport is Transport.TCP,
                lifetime=timeout
            )
        except (dns.exception.DNSException, OSError, ValueError) as e:
            raise LookupFailed(f"{address} via {endpoint}: {e}")

        hostnames = [rdata.target.to_text() for rdata in answer]
        if not hostnames:
            raise LookupFailed(f"{address} via {endpoint}: empty answer")
        return hostnames

    def close(self):
        with self._lock:
            self._resolvers.clear()
