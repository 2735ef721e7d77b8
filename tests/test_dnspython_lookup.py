from unittest import mock

import dns.exception
import dns.name
import dns.resolver
import pytest

from ptrsweep.lookup import DNSPythonLookup, LookupFailed
from ptrsweep.models import ResolverEndpoint, Transport


class FakePTR:

    def __init__(self, target):
        self.target = dns.name.from_text(target)


@pytest.fixture
def resolve_address():
    with mock.patch.object(dns.resolver.Resolver, "resolve_address") as patched:
        yield patched


def test_returns_hostnames(resolve_address):
    resolve_address.return_value = [FakePTR("dns.google.")]
    with DNSPythonLookup() as lookup:
        hostnames = lookup.lookup("8.8.8.8", ResolverEndpoint("1.1.1.1"), 2.0)

    assert hostnames == ["dns.google."]
    resolve_address.assert_called_once_with("8.8.8.8", tcp=False, lifetime=2.0)


def test_tcp_transport(resolve_address):
    resolve_address.return_value = [FakePTR("a.example.")]
    lookup = DNSPythonLookup()
    lookup.lookup("10.0.0.1", ResolverEndpoint("1.1.1.1", 5353, Transport.TCP), 1.0)
    resolve_address.assert_called_once_with("10.0.0.1", tcp=True, lifetime=1.0)


def test_resolver_targets_endpoint(resolve_address):
    resolve_address.return_value = [FakePTR("a.example.")]
    lookup = DNSPythonLookup()
    endpoint = ResolverEndpoint("9.9.9.9", 5353)
    lookup.lookup("10.0.0.1", endpoint, 1.0)

    resolver = lookup._resolvers[endpoint]
    assert resolver.port == 5353
    assert lookup._resolver_for(endpoint) is resolver


@pytest.mark.parametrize("error", [
    dns.resolver.NXDOMAIN(),
    dns.resolver.NoAnswer(),
    dns.exception.Timeout(),
    ConnectionRefusedError("refused"),
])
def test_errors_become_lookup_failed(resolve_address, error):
    resolve_address.side_effect = error
    with pytest.raises(LookupFailed):
        DNSPythonLookup().lookup("10.0.0.1", ResolverEndpoint("1.1.1.1"), 1.0)


def test_empty_answer(resolve_address):
    resolve_address.return_value = []
    with pytest.raises(LookupFailed, match="empty answer"):
        DNSPythonLookup().lookup("10.0.0.1", ResolverEndpoint("1.1.1.1"), 1.0)
