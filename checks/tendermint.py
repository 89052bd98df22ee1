"""
RPC Health Check - Tendermint Adapter

Checks Tendermint / CometBFT nodes through their REST-style RPC routes
(/status, /health, /block).
"""

from typing import Optional

from network.rpc import RPCError
from .base import ProtocolAdapter, lookup, parse_decimal
from .types import Protocol, CheckResult, StatusResult, HealthResult, BlockResult


class TendermintAdapter(ProtocolAdapter):
    """Adapter for Tendermint-based chains."""

    protocol = Protocol.TENDERMINT

    def status(self) -> CheckResult:
        try:
            payload = self.transport.get(f"{self.base_url}/status")
        except RPCError as e:
            return self.failed(str(e))

        sync_info = lookup(payload, "result", "sync_info")
        catching_up = lookup(sync_info, "catching_up")

        return self.succeeded(StatusResult(
            latest_block=parse_decimal(lookup(sync_info, "latest_block_height")),
            syncing=catching_up if isinstance(catching_up, bool) else None,
        ))

    def health(self) -> CheckResult:
        # /health answers with an empty result; only the status code matters
        try:
            self.transport.get(f"{self.base_url}/health", decode=False)
        except RPCError as e:
            return self.unhealthy(str(e))

        return self.succeeded(HealthResult(healthy=True))

    def block(self, height: Optional[int] = None) -> CheckResult:
        url = f"{self.base_url}/block"
        if height is not None:
            url = f"{url}?height={height}"

        try:
            payload = self.transport.get(url)
        except RPCError as e:
            return self.failed(str(e))

        return self.succeeded(BlockResult(
            height=parse_decimal(lookup(payload, "result", "block", "header", "height")),
        ))
