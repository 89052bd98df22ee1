"""
RPC Health Check - Checks Module

Protocol adapters for Tendermint, Ethereum and Bitcoin nodes and the
dispatcher that routes a check command to them.
"""

from .exceptions import (
    CheckError,
    UnsupportedProtocolError,
    UnsupportedCommandError,
)

from .types import (
    Protocol,
    Method,
    Command,
    StatusResult,
    HealthResult,
    BlockResult,
    CheckResult,
)

from .dispatcher import build_command, check

__all__ = [
    "CheckError",
    "UnsupportedProtocolError",
    "UnsupportedCommandError",
    "Protocol",
    "Method",
    "Command",
    "StatusResult",
    "HealthResult",
    "BlockResult",
    "CheckResult",
    "build_command",
    "check",
]
