"""
RPC Health Check - Data Model

Protocols, methods, the check command and the normalized check result.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Union


class Protocol(Enum):
    """Supported node protocols."""
    TENDERMINT = "tendermint"
    ETHEREUM = "ethereum"
    BITCOIN = "bitcoin"


class Method(Enum):
    """Check operations available for every protocol."""
    STATUS = "status"
    HEALTH = "health"
    BLOCK = "block"


@dataclass(frozen=True)
class Command:
    """A single check to run: protocol, method and optional block height."""
    protocol: Protocol
    method: Method
    height: Optional[int] = None


@dataclass
class StatusResult:
    latest_block: Optional[int] = None
    syncing: Optional[bool] = None

    TYPE = "status"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.TYPE, **asdict(self)}


@dataclass
class HealthResult:
    healthy: bool = False

    TYPE = "health"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.TYPE, **asdict(self)}


@dataclass
class BlockResult:
    height: Optional[int] = None

    TYPE = "block"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.TYPE, **asdict(self)}


ResultData = Union[StatusResult, HealthResult, BlockResult]


@dataclass
class CheckResult:
    """
    Normalized outcome of a single check.

    At least one of ``result`` and ``error`` is always set. Both are set
    only for a failed health check, which reports ``healthy=False`` next to
    the error that caused it.
    """
    protocol: Protocol
    rpc: str
    reachable: bool
    result: Optional[ResultData] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.result is None and self.error is None:
            raise ValueError("CheckResult needs a result or an error")

        if self.result is not None and self.error is not None:
            if not (isinstance(self.result, HealthResult) and not self.result.healthy):
                raise ValueError(
                    "CheckResult may only carry both a result and an error "
                    "for an unhealthy health check"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON output shape."""
        return {
            "protocol": self.protocol.value,
            "rpc": self.rpc,
            "reachable": self.reachable,
            "result": self.result.to_dict() if self.result is not None else None,
            "error": self.error,
        }
