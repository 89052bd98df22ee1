#!/usr/bin/env python3
"""
RPC Health Check - Command Line Interface

Runs a single status, health or block check against a Tendermint, Ethereum
or Bitcoin node and prints the normalized result.
"""

import sys
import logging
from typing import Optional

import click

from cli import __version__
from cli.config import ConfigurationManager, ConfigurationError
from cli.output import OutputFormatter
from checks import CheckError, build_command, check
from network.rpc import RPCTransport


LOGGER_NAMES = ('rpc-check', 'network', 'checks')


class CLIContext:
    """CLI state shared while handling one invocation."""

    def __init__(self, verbose: int = 0):
        self.verbose = verbose
        self.logger = logging.getLogger('rpc-check')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }

        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)

            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.setLevel(level)
            logger.propagate = False

        # Suppress verbose third-party logs unless in debug mode
        if self.verbose < 2:
            logging.getLogger('requests').setLevel(logging.WARNING)
            logging.getLogger('urllib3').setLevel(logging.WARNING)

    def fail(self, message: str):
        """Report a fatal usage error and exit with status 1."""
        click.echo(message, err=True)
        sys.exit(1)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--protocol', required=True,
              help='Node protocol: tendermint, ethereum or bitcoin')
@click.option('--method', required=True,
              help='Check to run: status, health or block')
@click.option('--rpc', required=True,
              help='RPC endpoint URL')
@click.option('--height', type=int, default=None,
              help='Block height for --method block (latest if omitted)')
@click.option('--rpc-user', envvar='BITCOIN_RPC_USER',
              help='Bitcoin RPC username')
@click.option('--rpc-password', envvar='BITCOIN_RPC_PASSWORD',
              help='Bitcoin RPC password')
@click.option('--rpc-cookie-file', envvar='BITCOIN_RPC_COOKIE_FILE',
              help='Bitcoin Core .cookie file used when no username is given')
@click.option('--timeout', type=float, default=None,
              help='Per-request timeout in seconds')
@click.option('--config-file', '-c',
              help='Path to YAML or JSON configuration file')
@click.option('--output-format', '-o',
              type=click.Choice(OutputFormatter.FORMATS),
              default='json',
              help='Output format')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.version_option(__version__, '--version', prog_name='rpc-check')
def cli(protocol: str, method: str, rpc: str, height: Optional[int],
        rpc_user: Optional[str], rpc_password: Optional[str],
        rpc_cookie_file: Optional[str], timeout: Optional[float],
        config_file: Optional[str], output_format: str, verbose: int):
    """
    Check a blockchain node RPC endpoint.

    Examples:
        rpc-check --protocol tendermint --method status --rpc http://localhost:26657
        rpc-check --protocol ethereum --method block --rpc http://localhost:8545
        rpc-check --protocol bitcoin --method health --rpc http://localhost:8332 --rpc-user alice
    """
    ctx = CLIContext(verbose)
    ctx.setup_logging()

    try:
        command = build_command(protocol, method, height)
    except CheckError as e:
        ctx.fail(str(e))

    manager = ConfigurationManager(config_file)
    try:
        manager.load()
        manager.apply_overrides({
            'rpc.timeout': timeout,
            'bitcoin.username': rpc_user,
            'bitcoin.password': rpc_password,
            'bitcoin.cookie_file': rpc_cookie_file,
        })
        rpc_config = manager.build_rpc_config()
    except (ConfigurationError, ValueError) as e:
        ctx.fail(f"Configuration error: {e}")

    ctx.logger.debug(f"Configuration sources: {', '.join(manager.get_sources())}")

    with RPCTransport(rpc_config) as transport:
        result = check(command, rpc, transport)

    click.echo(OutputFormatter(output_format).format(result.to_dict()))


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
