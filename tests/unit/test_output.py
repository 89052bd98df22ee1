"""
Tests for CLI output formatting
"""

import json

import pytest

from cli.output import OutputFormatter


RESULT = {
    "protocol": "bitcoin",
    "rpc": "http://localhost:8332",
    "reachable": False,
    "result": {"type": "health", "healthy": False},
    "error": "HTTP 500",
}


class TestOutputFormatter:
    """Test JSON and table formatting."""

    def test_json_format(self):
        """Test JSON output is indented by two spaces."""
        output = OutputFormatter('json').format(RESULT)

        assert json.loads(output) == RESULT
        assert output == json.dumps(RESULT, indent=2)

    def test_table_format(self):
        """Test table output flattens the nested result."""
        output = OutputFormatter('table').format(RESULT)

        assert [line.split(None, 1) for line in output.splitlines()] == [
            ["protocol", "bitcoin"],
            ["rpc", "http://localhost:8332"],
            ["reachable", "no"],
            ["result.type", "health"],
            ["result.healthy", "no"],
            ["error", "HTTP 500"],
        ]

    def test_table_null_result(self):
        """Test null values render as a dash."""
        output = OutputFormatter('table').format({"result": None})

        assert output.split() == ["result", "-"]

    def test_unknown_format(self):
        """Test unknown formats are rejected."""
        with pytest.raises(ValueError):
            OutputFormatter('xml')
