import pytest

from ptrsweep.models import ResolverEndpoint, Transport
from ptrsweep.resolvers import (
    DEFAULT_RESOLVERS, NoResolversError, build_resolver_set, load_resolver_file
)


def test_load_resolver_file(tmp_path):
    path = tmp_path / "resolvers.txt"
    path.write_text("# public\n1.1.1.1\n\n  8.8.8.8  \n#9.9.9.9\n")
    assert load_resolver_file(path) == ["1.1.1.1", "8.8.8.8"]


def test_missing_resolver_file(tmp_path):
    with pytest.raises(OSError):
        load_resolver_file(tmp_path / "nope.txt")


def test_merge_order(tmp_path):
    path = tmp_path / "resolvers.txt"
    path.write_text("10.0.0.1\n10.0.0.2\n")
    resolvers = build_resolver_set(resolver_file=path, resolver="10.0.0.3",
                                   use_default=True)
    hosts = [r.host for r in resolvers]
    assert hosts[:3] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
    assert hosts[3:] == list(DEFAULT_RESOLVERS)


def test_single_resolver_with_port_and_transport():
    resolvers = build_resolver_set(resolver="127.0.0.1", port=5353,
                                   transport=Transport.TCP)
    assert resolvers == (ResolverEndpoint("127.0.0.1", 5353, Transport.TCP),)


def test_defaults_only():
    resolvers = build_resolver_set(use_default=True)
    assert len(resolvers) == 20
    assert resolvers[0] == ResolverEndpoint("1.1.1.1")


def test_no_resolvers():
    with pytest.raises(NoResolversError) as exc_info:
        build_resolver_set()
    assert "No DNS resolvers specified" in str(exc_info.value)


def test_empty_file_and_nothing_else(tmp_path):
    path = tmp_path / "resolvers.txt"
    path.write_text("# nothing here\n")
    with pytest.raises(NoResolversError):
        build_resolver_set(resolver_file=path)
