"""
RPC Health Check - Ethereum Adapter

Checks Ethereum-compatible nodes over JSON-RPC 2.0.
"""

from typing import Any, List, Optional

from network.rpc import RPCError
from .base import ProtocolAdapter, lookup, parse_hex_quantity
from .types import Protocol, CheckResult, StatusResult, HealthResult, BlockResult


class EthereumAdapter(ProtocolAdapter):
    """Adapter for Ethereum-compatible chains."""

    protocol = Protocol.ETHEREUM

    def _call(self, method: str, params: Optional[List[Any]] = None, request_id: int = 1) -> Any:
        """
        Send one JSON-RPC 2.0 request to the endpoint.

        Returns:
            The decoded response object

        Raises:
            RPCError: On transport, HTTP or JSON failure
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": request_id,
        }
        return self.transport.post(self.rpc, payload)

    def status(self) -> CheckResult:
        try:
            syncing_response = self._call("eth_syncing", request_id=1)
            block_response = self._call("eth_blockNumber", request_id=2)
        except RPCError as e:
            return self.failed(str(e))

        # eth_syncing returns false, or an object describing progress
        syncing = isinstance(lookup(syncing_response, "result"), dict)

        return self.succeeded(StatusResult(
            latest_block=parse_hex_quantity(lookup(block_response, "result")),
            syncing=syncing,
        ))

    def health(self) -> CheckResult:
        try:
            response = self._call("eth_chainId")
        except RPCError as e:
            return self.unhealthy(str(e))

        healthy = isinstance(response, dict) and "result" in response
        return self.succeeded(HealthResult(healthy=healthy), reachable=healthy)

    def block(self, height: Optional[int] = None) -> CheckResult:
        block_param = "latest" if height is None else f"0x{height:x}"

        try:
            response = self._call("eth_getBlockByNumber", [block_param, False])
        except RPCError as e:
            return self.failed(str(e))

        number = parse_hex_quantity(lookup(response, "result", "number"))
        return self.succeeded(BlockResult(height=number), reachable=number is not None)
