"""
RPC Health Check - Network Module

HTTP and JSON-RPC transport shared by all protocol checks.
"""

from .rpc import (
    RPCConfig,
    RPCTransport,
    RPCError,
    RPCConnectionError,
    RPCTimeoutError,
    RPCAuthError,
    RPCHTTPError,
    RPCInvalidJSONError,
)

__all__ = [
    "RPCConfig",
    "RPCTransport",
    "RPCError",
    "RPCConnectionError",
    "RPCTimeoutError",
    "RPCAuthError",
    "RPCHTTPError",
    "RPCInvalidJSONError",
]
