"""
Resolver set construction
"""

from pathlib import Path
from typing import Optional, Union

from .expander import iter_lines
from .models import ResolverEndpoint, Transport


DEFAULT_RESOLVERS = (
    "1.1.1.1", "1.0.0.1", "8.8.8.8", "8.8.4.4", "9.9.9.9", "149.112.112.112",
    "208.67.222.222", "208.67.220.220", "64.6.64.6", "64.6.65.6", "198.101.242.72",
    "23.253.163.53", "8.26.56.26", "8.20.247.20", "185.228.168.9", "185.228.169.9",
    "76.76.19.19", "76.223.122.150", "94.140.14.14", "94.140.15.15",
)


class NoResolversError(ValueError):
    """No resolver was configured"""

    def __init__(self):
        super().__init__("No DNS resolvers specified. Use -r, -R, or -U")


def load_resolver_file(path: Union[str, Path]) -> list[str]:
    """
    Read resolver hosts from a file, one per line.

    Blank lines and '#' comments are skipped.

    Raises:
        OSError: File cannot be read
    """
    with open(path, encoding='utf-8') as f:
        return list(iter_lines(f))


def build_resolver_set(
    resolver_file: Optional[Union[str, Path]] = None,
    resolver: Optional[str] = None,
    use_default: bool = False,
    port: int = 53,
    transport: Transport = Transport.UDP
) -> tuple[ResolverEndpoint, ...]:
    """
    Merge resolver sources in order: file, single resolver, defaults.

    Args:
        resolver_file: Path of a resolver list
        resolver: One resolver host
        use_default: Append the built-in public resolvers
        port: Port shared by all endpoints
        transport: Transport shared by all endpoints

    Returns:
        Ordered, immutable resolver set

    Raises:
        NoResolversError: Merging produced nothing
        OSError: resolver_file cannot be read
    """
    hosts: list[str] = []
    if resolver_file:
        hosts.extend(load_resolver_file(resolver_file))
    if resolver:
        hosts.append(resolver.strip())
    if use_default:
        hosts.extend(DEFAULT_RESOLVERS)

    if not hosts:
        raise NoResolversError()

    return tuple(
        ResolverEndpoint(host=host, port=port, transport=transport)
        for host in hosts
    )
