"""
RPC Health Check - Dispatcher

Builds validated check commands and routes them to the protocol adapter.
"""

import logging
from typing import Dict, Optional, Type

from network.rpc import RPCTransport
from .base import ProtocolAdapter
from .bitcoin import BitcoinAdapter
from .ethereum import EthereumAdapter
from .exceptions import UnsupportedProtocolError, UnsupportedCommandError
from .tendermint import TendermintAdapter
from .types import Protocol, Method, Command, CheckResult


logger = logging.getLogger(__name__)

ADAPTERS: Dict[Protocol, Type[ProtocolAdapter]] = {
    Protocol.TENDERMINT: TendermintAdapter,
    Protocol.ETHEREUM: EthereumAdapter,
    Protocol.BITCOIN: BitcoinAdapter,
}


def build_command(protocol: str, method: str, height: Optional[int] = None) -> Command:
    """
    Build a command from user-supplied names.

    Args:
        protocol: Protocol name (tendermint, ethereum, bitcoin)
        method: Method name (status, health, block)
        height: Optional block height, only valid for the block method

    Returns:
        Validated Command

    Raises:
        UnsupportedProtocolError: If the protocol is unknown
        UnsupportedCommandError: If the method or height cannot be used
    """
    try:
        parsed_protocol = Protocol(protocol)
    except ValueError:
        raise UnsupportedProtocolError(f"Unsupported protocol: {protocol}")

    try:
        parsed_method = Method(method)
    except ValueError:
        raise UnsupportedCommandError(
            f"Unsupported combination: protocol={protocol} method={method}"
        )

    if height is not None:
        if parsed_method is not Method.BLOCK:
            raise UnsupportedCommandError(
                f"Block height is only supported by the block method, not {method}"
            )
        if height < 0:
            raise UnsupportedCommandError(f"Block height must not be negative: {height}")

    return Command(protocol=parsed_protocol, method=parsed_method, height=height)


def check(command: Command, rpc: str, transport: Optional[RPCTransport] = None) -> CheckResult:
    """
    Run a command against an RPC endpoint.

    Args:
        command: Command to run
        rpc: Endpoint URL
        transport: Transport to use (a default one is created if None)

    Returns:
        Normalized check result
    """
    transport = transport or RPCTransport()
    adapter = ADAPTERS[command.protocol](rpc, transport)
    logger.debug(f"Dispatching {command} to {adapter.__class__.__name__}")
    return adapter.run(command.method, command.height)
