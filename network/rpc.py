"""
RPC Health Check - HTTP / JSON-RPC Transport

This module provides the transport used by the protocol checks: connection
configuration, credential handling for Bitcoin Core style nodes, and a thin
requests-based client that turns every failure into a typed RPC exception.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth


DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "rpc-health-check/0.1"


class RPCError(Exception):
    """Base exception for RPC-related errors."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class RPCConnectionError(RPCError):
    """Exception for transport failures (DNS, connect, reset)."""
    pass


class RPCTimeoutError(RPCConnectionError):
    """Exception for RPC timeout errors."""
    pass


class RPCAuthError(RPCError):
    """Exception for credentials that cannot be loaded."""
    pass


class RPCHTTPError(RPCError):
    """Exception for non-2xx HTTP responses."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}", status_code)


class RPCInvalidJSONError(RPCError):
    """Exception for response bodies that are not valid JSON."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid JSON: {detail}")


@dataclass
class RPCConfig:
    """Configuration for RPC connections."""
    timeout: float = DEFAULT_TIMEOUT
    username: Optional[str] = None
    password: Optional[str] = None
    cookie_file: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.timeout is None or not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

        if self.password and not self.username:
            raise ValueError("RPC password given without a username")

    def get_auth(self) -> Optional[HTTPBasicAuth]:
        """
        Resolve basic-auth credentials.

        Explicit username/password take precedence over a cookie file.

        Returns:
            HTTPBasicAuth instance, or None when no credentials are configured

        Raises:
            RPCAuthError: If the cookie file is missing or malformed
        """
        if self.username:
            return HTTPBasicAuth(self.username, self.password or "")

        if not self.cookie_file:
            return None

        path = Path(self.cookie_file).expanduser()
        try:
            cookie_content = path.read_text().strip()
        except FileNotFoundError:
            raise RPCAuthError(f"Cookie file not found: {path}")
        except OSError as e:
            raise RPCAuthError(f"Failed to read cookie file: {e}")

        if ':' not in cookie_content:
            raise RPCAuthError(f"Invalid cookie file format: {path}")

        username, password = cookie_content.split(':', 1)
        return HTTPBasicAuth(username, password)


class RPCTransport:
    """
    Single-session HTTP transport for RPC checks.

    Each call performs exactly one request; there are no retries. Responses
    outside the 2xx range raise RPCHTTPError and undecodable bodies raise
    RPCInvalidJSONError, so callers only need to handle RPCError.
    """

    def __init__(self, config: Optional[RPCConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            config: Connection configuration (defaults if None)
            session: Pre-built session, mainly for tests
        """
        self.config = config or RPCConfig()
        self.logger = logging.getLogger(__name__)
        self.session = session or self._build_session()

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        self.logger.debug(f"{method} {url}")

        try:
            return self.session.request(method, url, timeout=self.config.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            self.logger.info(f"Request to {url} timed out: {e}")
            raise RPCTimeoutError(str(e))
        except requests.exceptions.RequestException as e:
            self.logger.info(f"Request to {url} failed: {e}")
            raise RPCConnectionError(str(e))

    @staticmethod
    def _check_status(response: requests.Response):
        if not 200 <= response.status_code < 300:
            raise RPCHTTPError(response.status_code)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RPCInvalidJSONError(str(e))

    def get(self, url: str, decode: bool = True) -> Any:
        """
        Perform a GET request.

        Args:
            url: Full request URL
            decode: Parse and return the JSON body

        Returns:
            Decoded JSON body, or None when decode is False

        Raises:
            RPCError: On transport, HTTP or JSON failure
        """
        response = self._send("GET", url)
        self._check_status(response)
        if not decode:
            return None
        return self._decode(response)

    def post(self, url: str, payload: Dict[str, Any], authenticate: bool = False) -> Any:
        """
        POST a JSON payload and return the decoded JSON body.

        Args:
            url: Endpoint URL
            payload: JSON-RPC request object
            authenticate: Attach basic-auth credentials from the config

        Returns:
            Decoded JSON body

        Raises:
            RPCError: On credential, transport, HTTP or JSON failure
        """
        auth = self.config.get_auth() if authenticate else None
        response = self._send("POST", url, json=payload, auth=auth)
        self._check_status(response)
        return self._decode(response)

    def close(self):
        """Close the underlying session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "RPCTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
