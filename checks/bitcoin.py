"""
RPC Health Check - Bitcoin Adapter

Checks Bitcoin Core compatible nodes over authenticated JSON-RPC 1.0.

The block check is the only multi-step flow in the tool:

    getblockchaininfo -> getblockhash [height] -> getblockheader [hash]

The first step is skipped when a height is given. Each step depends on the
previous one, so any failure ends the flow and is reported as-is. The height
reported is the one in the header, which can differ from the requested
height if the chain reorganized between calls.
"""

from typing import Any, List, Optional

from network.rpc import RPCError
from .base import ProtocolAdapter, lookup, as_unsigned
from .types import Protocol, CheckResult, StatusResult, HealthResult, BlockResult


REQUEST_ID = "rpc-checker"


class BitcoinAdapter(ProtocolAdapter):
    """Adapter for Bitcoin-compatible chains."""

    protocol = Protocol.BITCOIN

    def _call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Send one authenticated JSON-RPC 1.0 request to the endpoint.

        Raises:
            RPCError: On credential, transport, HTTP or JSON failure
        """
        payload = {
            "jsonrpc": "1.0",
            "id": REQUEST_ID,
            "method": method,
            "params": params or [],
        }
        return self.transport.post(self.rpc, payload, authenticate=True)

    def status(self) -> CheckResult:
        try:
            response = self._call("getblockchaininfo")
        except RPCError as e:
            return self.failed(str(e))

        blocks = as_unsigned(lookup(response, "result", "blocks"))
        headers = as_unsigned(lookup(response, "result", "headers"))

        syncing = None
        if blocks is not None and headers is not None:
            syncing = blocks < headers

        return self.succeeded(StatusResult(latest_block=blocks, syncing=syncing))

    def health(self) -> CheckResult:
        try:
            response = self._call("getnetworkinfo")
        except RPCError as e:
            return self.unhealthy(str(e))

        healthy = isinstance(response, dict) and "result" in response
        return self.succeeded(HealthResult(healthy=healthy), reachable=healthy)

    def block(self, height: Optional[int] = None) -> CheckResult:
        try:
            if height is None:
                info = self._call("getblockchaininfo")
                height = as_unsigned(lookup(info, "result", "blocks"))
                if height is None:
                    return self.failed("Missing latest block height")

            self.logger.debug(f"Resolving block hash at height {height}")
            block_hash = lookup(self._call("getblockhash", [height]), "result")
            if not isinstance(block_hash, str):
                return self.failed("Missing block hash")

            header = self._call("getblockheader", [block_hash])
        except RPCError as e:
            return self.failed(str(e))

        reported = as_unsigned(lookup(header, "result", "height"))
        return self.succeeded(BlockResult(height=reported), reachable=reported is not None)
