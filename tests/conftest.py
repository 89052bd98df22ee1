"""
Pytest configuration and fixtures for RPC health check tests.
"""

import pytest
from unittest.mock import Mock

from network.rpc import RPCConfig, RPCTransport


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""
    def factory(status_code=200, json_data=None, json_error=None):
        response = Mock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        return response

    return factory


@pytest.fixture
def mock_session():
    """Mock requests.Session; tests set request.return_value or side_effect."""
    return Mock()


@pytest.fixture
def rpc_config():
    """RPC config with Bitcoin credentials."""
    return RPCConfig(timeout=5, username="alice", password="secret")


@pytest.fixture
def transport(rpc_config, mock_session):
    """Transport wired to the mock session."""
    return RPCTransport(rpc_config, session=mock_session)


@pytest.fixture
def sent_payloads(mock_session):
    """Callable returning the JSON payloads posted so far, in order."""
    return lambda: [call.kwargs["json"] for call in mock_session.request.call_args_list]


@pytest.fixture
def sent_urls(mock_session):
    """Callable returning the requested URLs so far, in order."""
    return lambda: [call.args[1] for call in mock_session.request.call_args_list]
