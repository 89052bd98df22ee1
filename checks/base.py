"""
RPC Health Check - Protocol Adapter Base

Common interface for protocol adapters plus the JSON field helpers they share.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from network.rpc import RPCTransport
from .types import (
    Protocol,
    Method,
    CheckResult,
    ResultData,
    HealthResult,
)

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Heights, peer counts and block sizes are unsigned 64-bit on every node
U64_MAX = 2 ** 64 - 1


def lookup(payload: Any, *keys: str) -> Any:
    """
    Walk nested JSON objects, returning None as soon as a level is missing.

    Args:
        payload: Decoded JSON value
        *keys: Object keys to follow in order

    Returns:
        The value found, or None
    """
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def parse_decimal(value: Any) -> Optional[int]:
    """Parse a string-encoded unsigned decimal such as "100"."""
    if isinstance(value, str) and value.isascii() and value.isdigit():
        number = int(value)
        if number <= U64_MAX:
            return number
    return None


def parse_hex_quantity(value: Any) -> Optional[int]:
    """Parse a hex quantity such as "0x12345678"."""
    if not isinstance(value, str):
        return None
    digits = value[2:] if value.startswith("0x") else value
    if not digits or not all(c in HEX_DIGITS for c in digits):
        return None
    number = int(digits, 16)
    return number if number <= U64_MAX else None


def as_unsigned(value: Any) -> Optional[int]:
    """Return value if it is a JSON integer in the unsigned 64-bit range."""
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX:
        return value
    return None


class ProtocolAdapter(ABC):
    """Base class for protocol adapters."""

    protocol: Protocol

    def __init__(self, rpc: str, transport: RPCTransport):
        self.rpc = rpc
        self.transport = transport
        self.logger = logging.getLogger(__name__)

    @property
    def base_url(self) -> str:
        return self.rpc.rstrip("/")

    def run(self, method: Method, height: Optional[int] = None) -> CheckResult:
        """
        Run one check operation.

        Args:
            method: Operation to run
            height: Block height for Method.BLOCK (None means latest)

        Returns:
            Normalized check result
        """
        if method is Method.STATUS:
            result = self.status()
        elif method is Method.HEALTH:
            result = self.health()
        else:
            result = self.block(height)

        self.logger.info(
            f"{self.protocol.value} {method.value} against {self.rpc}: "
            f"reachable={result.reachable} error={result.error}"
        )
        return result

    @abstractmethod
    def status(self) -> CheckResult:
        """Report latest block and sync state."""
        pass

    @abstractmethod
    def health(self) -> CheckResult:
        """Report whether the node answers its health check."""
        pass

    @abstractmethod
    def block(self, height: Optional[int] = None) -> CheckResult:
        """Report the height of the latest (or given) block."""
        pass

    def succeeded(self, result: ResultData, reachable: bool = True) -> CheckResult:
        return CheckResult(
            protocol=self.protocol,
            rpc=self.rpc,
            reachable=reachable,
            result=result,
        )

    def failed(self, error: str) -> CheckResult:
        return CheckResult(
            protocol=self.protocol,
            rpc=self.rpc,
            reachable=False,
            error=error,
        )

    def unhealthy(self, error: str) -> CheckResult:
        return CheckResult(
            protocol=self.protocol,
            rpc=self.rpc,
            reachable=False,
            result=HealthResult(healthy=False),
            error=error,
        )
