"""
Tests for the RPC transport

Covers status-code handling, JSON decoding, transport failures and
credential resolution.
"""

import json

import pytest
import requests
from unittest.mock import Mock, patch

from network.rpc import (
    RPCConfig,
    RPCTransport,
    RPCError,
    RPCConnectionError,
    RPCTimeoutError,
    RPCAuthError,
    RPCHTTPError,
    RPCInvalidJSONError,
)


class TestRPCConfig:
    """Test RPC configuration."""

    def test_defaults(self):
        """Test default configuration values."""
        config = RPCConfig()

        assert config.timeout == 30.0
        assert config.username is None
        assert config.get_auth() is None

    def test_invalid_timeout(self):
        """Test that a non-positive timeout is rejected."""
        with pytest.raises(ValueError):
            RPCConfig(timeout=0)

    @pytest.mark.parametrize("timeout", [float("nan"), float("inf")])
    def test_non_finite_timeout(self, timeout):
        """Test that NaN and infinite timeouts are rejected."""
        with pytest.raises(ValueError):
            RPCConfig(timeout=timeout)

    def test_password_without_username(self):
        """Test that a password alone is rejected."""
        with pytest.raises(ValueError):
            RPCConfig(password="secret")

    def test_basic_auth_from_credentials(self):
        """Test basic auth built from username and password."""
        auth = RPCConfig(username="alice", password="secret").get_auth()

        assert auth.username == "alice"
        assert auth.password == "secret"

    def test_basic_auth_from_cookie_file(self, tmp_path):
        """Test basic auth read from a Bitcoin Core cookie file."""
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:abc123\n")

        auth = RPCConfig(cookie_file=str(cookie)).get_auth()

        assert auth.username == "__cookie__"
        assert auth.password == "abc123"

    def test_credentials_take_precedence_over_cookie(self, tmp_path):
        """Test explicit credentials win over a cookie file."""
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:abc123")

        auth = RPCConfig(username="alice", password="secret", cookie_file=str(cookie)).get_auth()

        assert auth.username == "alice"

    def test_missing_cookie_file(self, tmp_path):
        """Test a missing cookie file raises an auth error."""
        config = RPCConfig(cookie_file=str(tmp_path / "missing"))

        with pytest.raises(RPCAuthError, match="Cookie file not found"):
            config.get_auth()

    def test_malformed_cookie_file(self, tmp_path):
        """Test a cookie file without a separator is rejected."""
        cookie = tmp_path / ".cookie"
        cookie.write_text("no-separator")

        with pytest.raises(RPCAuthError, match="Invalid cookie file format"):
            RPCConfig(cookie_file=str(cookie)).get_auth()


class TestRPCTransport:
    """Test transport request handling."""

    def test_get_returns_decoded_json(self, transport, mock_session, make_response):
        """Test a successful GET returns the JSON body."""
        mock_session.request.return_value = make_response(json_data={"result": {}})

        assert transport.get("http://node/status") == {"result": {}}
        mock_session.request.assert_called_once_with("GET", "http://node/status", timeout=5)

    def test_get_without_decoding(self, transport, mock_session, make_response):
        """Test decode=False skips JSON parsing."""
        response = make_response(json_error=ValueError("Expecting value"))
        mock_session.request.return_value = response

        assert transport.get("http://node/health", decode=False) is None
        response.json.assert_not_called()

    def test_post_sends_json_payload(self, transport, mock_session, make_response):
        """Test POST sends the payload as JSON without auth by default."""
        mock_session.request.return_value = make_response(json_data={"result": "0x1"})
        payload = {"jsonrpc": "2.0", "method": "eth_chainId", "params": [], "id": 1}

        assert transport.post("http://node", payload) == {"result": "0x1"}
        mock_session.request.assert_called_once_with(
            "POST", "http://node", timeout=5, json=payload, auth=None
        )

    def test_post_with_authentication(self, transport, mock_session, make_response):
        """Test authenticated POST attaches basic auth."""
        mock_session.request.return_value = make_response(json_data={"result": None})

        transport.post("http://node", {"method": "getnetworkinfo"}, authenticate=True)

        auth = mock_session.request.call_args.kwargs["auth"]
        assert auth.username == "alice"
        assert auth.password == "secret"

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_http_error(self, transport, mock_session, make_response, status_code):
        """Test non-2xx responses raise RPCHTTPError."""
        mock_session.request.return_value = make_response(status_code=status_code)

        with pytest.raises(RPCHTTPError) as exc_info:
            transport.get("http://node/status")

        assert str(exc_info.value) == f"HTTP {status_code}"
        assert exc_info.value.status_code == status_code

    def test_accepts_any_2xx(self, transport, mock_session, make_response):
        """Test 204 counts as success."""
        mock_session.request.return_value = make_response(status_code=204)

        assert transport.get("http://node/health", decode=False) is None

    def test_invalid_json(self, transport, mock_session, make_response):
        """Test undecodable bodies raise RPCInvalidJSONError."""
        error = json.JSONDecodeError("Expecting value", "<html>", 0)
        mock_session.request.return_value = make_response(json_error=error)

        with pytest.raises(RPCInvalidJSONError) as exc_info:
            transport.get("http://node/status")

        assert str(exc_info.value).startswith("Invalid JSON: Expecting value")

    def test_connection_error(self, transport, mock_session):
        """Test connection failures raise RPCConnectionError with the transport text."""
        mock_session.request.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(RPCConnectionError) as exc_info:
            transport.post("http://node", {})

        assert str(exc_info.value) == "Connection refused"

    def test_timeout(self, transport, mock_session):
        """Test timeouts raise RPCTimeoutError."""
        mock_session.request.side_effect = requests.exceptions.ReadTimeout("Read timed out")

        with pytest.raises(RPCTimeoutError):
            transport.get("http://node/status")

    def test_cookie_error_is_an_rpc_error(self, mock_session, tmp_path):
        """Test credential failures surface before any request is sent."""
        transport = RPCTransport(RPCConfig(cookie_file=str(tmp_path / "missing")), session=mock_session)

        with pytest.raises(RPCError):
            transport.post("http://node", {}, authenticate=True)

        mock_session.request.assert_not_called()

    def test_context_manager_closes_session(self, mock_session):
        """Test the transport closes its session on exit."""
        with RPCTransport(session=mock_session):
            pass

        mock_session.close.assert_called_once()

    @patch('network.rpc.requests.Session')
    def test_default_session(self, mock_session_class):
        """Test a session with the user agent is built when none is given."""
        session = Mock()
        session.headers = {}
        mock_session_class.return_value = session

        RPCTransport(RPCConfig(user_agent="monitor/1.0"))

        assert session.headers["User-Agent"] == "monitor/1.0"
        assert session.mount.call_count == 2
