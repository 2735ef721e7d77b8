import sys
from typing import Optional

import click

from . import __version__
from .models import MAX_WORKERS, RunConfig, Transport
from .output import ConsoleOutput
from .pool import run_sweep
from .resolvers import NoResolversError, build_resolver_set


CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('-t', '--threads', default=100, type=click.IntRange(min=1),
              help=f'How many threads should be used (max {MAX_WORKERS})')
@click.option('-r', '--resolver', 'resolver_ip',
              help='IP of the DNS resolver to use for lookups')
@click.option('-R', '--resolvers-file', type=click.Path(dir_okay=False),
              help='File containing list of DNS resolvers to use for lookups')
@click.option('-U', '--use-default', is_flag=True,
              help='Use default resolvers for lookups')
@click.option('-P', '--protocol', default='udp',
              type=click.Choice(['tcp', 'udp'], case_sensitive=False),
              help='Protocol to use for lookups (default: udp)')
@click.option('-p', '--port', default=53, type=click.IntRange(1, 65535),
              help='Port to bother the specified DNS resolver on (default: 53)')
@click.option('-d', '--domain', is_flag=True,
              help='Output only domains')
@click.option('-l', '--list', 'list_file', type=click.Path(dir_okay=False),
              help='File containing IP addresses or CIDR ranges (default: stdin)')
@click.option('-T', '--timeout', default=2.0, type=click.FloatRange(min=0, min_open=True),
              help='DNS query timeout in seconds (default: 2)')
@click.option('-y', '--retries', default=1, type=click.IntRange(min=0),
              help='Number of retries per resolver (default: 1)')
@click.option('-v', '--verbose', is_flag=True,
              help='Show progress and statistics')
@click.option('-o', '--output', 'output_path', type=click.Path(dir_okay=False),
              help='Output file (default: stdout)')
@click.option('-f', '--show-failed', is_flag=True,
              help='Show failed/unresolved IPs')
@click.option('-L', '--rate-limit', default=0, type=click.IntRange(min=0),
              help='Rate limit in queries per second (0 = no limit)')
@click.version_option(version=__version__)
def main(threads: int, resolver_ip: Optional[str], resolvers_file: Optional[str],
         use_default: bool, protocol: str, port: int, domain: bool,
         list_file: Optional[str], timeout: float, retries: int, verbose: bool,
         output_path: Optional[str], show_failed: bool, rate_limit: int):
    """
    ptrsweep - Bulk reverse DNS resolver.

    Reads IP addresses and CIDR ranges (one per line) from a file or
    stdin and prints their PTR records.

    Examples:

        ptrsweep -l iprange.txt -t 5000 -U

        ptrsweep -l ips.txt -t 1000 -r 8.8.8.8 -v

        echo '192.168.1.0/24' | ptrsweep -t 500 -U -d
    """
    output = ConsoleOutput()

    if threads > MAX_WORKERS:
        output.print_warning(f"Thread count limited to {MAX_WORKERS} for system stability")
        threads = MAX_WORKERS

    config = RunConfig(
        workers=threads,
        transport=Transport(protocol.lower()),
        port=port,
        timeout=timeout,
        retries=retries,
        domain_only=domain,
        show_failed=show_failed,
        rate_limit=rate_limit,
        verbose=verbose
    )

    # Resolvers
    try:
        resolvers = build_resolver_set(
            resolver_file=resolvers_file,
            resolver=resolver_ip,
            use_default=use_default,
            port=config.port,
            transport=config.transport
        )
    except NoResolversError as e:
        output.print_error(str(e))
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        output.print_error(f"Failed to open resolvers file: {e}")
        sys.exit(1)

    if verbose:
        output.print_setup(len(resolvers), threads)

    # Input and output are opened before any lookup is scheduled.
    # Undecodable bytes become U+FFFD so the line is reported as invalid.
    try:
        if list_file:
            source = open(list_file, encoding='utf-8', errors='replace')
        else:
            source = click.get_text_stream('stdin', encoding='utf-8', errors='replace')
    except OSError as e:
        output.print_error(f"Failed to open input file: {e}")
        sys.exit(1)

    try:
        sink = open(output_path, 'w', encoding='utf-8') if output_path else sys.stdout
    except OSError as e:
        output.print_error(f"Failed to create output file: {e}")
        if list_file:
            source.close()
        sys.exit(1)

    try:
        run_sweep(source, resolvers, config, output=sink, console=output)
    except KeyboardInterrupt:
        output.console.print("\n[yellow]Interrupted[/]")
        sys.exit(130)
    except OSError as e:
        output.print_error(str(e))
        sys.exit(1)
    finally:
        if list_file:
            source.close()
        if sink is not sys.stdout:
            sink.close()


if __name__ == '__main__':
    main()
