#!/usr/bin/env python3
"""
pv-like - Line-by-line pipe viewer with rate limiting

Copies lines from files (or standard input) to standard output, flushing
each one immediately, and redraws a throughput line on stderr.

Usage:
    pv-like access.log
    pv-like -L 2048 big.log | grep ERROR
    tail -f app.log | pv-like -q -L 512 > slowed.log
"""

import logging
import sys

import click

from .config import (
    DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, QUIET_ENV, RATE_LIMIT_ENV,
    RunConfig, load_environment, parse_rate_limit
)
from .core import FileSource, LineRelay, StreamSource
from .utils import LoggingObserver, TerminalObserver, WallClock
from .version import PROG_NAME, __description__, __version__

logger = logging.getLogger(__name__)

WAITING_NOTICE = "Waiting for line input... (use pipe or specify files)"
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def setup_logging(level: str):
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    # basicConfig is a no-op once handlers exist, so set the package level directly
    logging.getLogger("pvlike").setLevel(numeric_level)


def _print_help(ctx: click.Context, param: click.Parameter, value: bool):
    """Usage goes to the diagnostic stream, not stdout."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help(), err=True)
    ctx.exit(0)


@click.command(name=PROG_NAME, help=__description__, add_help_option=False)
@click.argument('files', nargs=-1)
@click.option('--quiet', '-q', is_flag=True, envvar=QUIET_ENV,
              help='Quiet mode, no statistics')
@click.option('--rate-limit', '-L', 'rate_limit', metavar='RATE', envvar=RATE_LIMIT_ENV,
              help='Limit transfer to RATE bytes per second')
@click.option('--log-level', default=DEFAULT_LOG_LEVEL, envvar=LOG_LEVEL_ENV,
              type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help='Diagnostic logging threshold')
@click.option('--help', '-h', is_flag=True, expose_value=False, is_eager=True,
              callback=_print_help, help='Display this help and exit')
@click.version_option(__version__, '--version', '-v', prog_name=PROG_NAME,
                      message='%(prog)s %(version)s',
                      help='Output version information and exit')
def cli(files, quiet, rate_limit, log_level):
    setup_logging(log_level)

    config = RunConfig(
        quiet=quiet,
        rate_limit_bytes_per_sec=parse_rate_limit(rate_limit)
    )
    logger.debug(f"Resolved configuration: {config}")

    stdout = sys.stdout.buffer
    stderr = sys.stderr

    if files:
        sources = [FileSource(path) for path in files]
    else:
        stdin = StreamSource(sys.stdin.buffer)
        if stdin.is_interactive() and not config.quiet:
            click.echo(WAITING_NOTICE, err=True)
        sources = [stdin]

    clock = WallClock()
    observers = [LoggingObserver(logging.getLogger("pvlike.progress"), clock=clock)]
    if not config.quiet:
        observers.insert(0, TerminalObserver(stderr))

    relay = LineRelay(config, stdout, stderr, observers=observers, clock=clock)
    relay.run(sources)
    # Per-source failures are reported but never change the exit status


def main():
    load_environment()
    cli(prog_name=PROG_NAME)


if __name__ == '__main__':
    main()
