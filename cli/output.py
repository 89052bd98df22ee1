#!/usr/bin/env python3
"""
Output Formatting Module for RPC Health Check

Renders check results as pretty-printed JSON (the default) or as an aligned
key/value table for quick reading in a terminal.
"""

import json
from typing import Any, Dict, List, Tuple


class OutputFormatter:
    """Output formatter for check results."""

    FORMATS = ('json', 'table')

    def __init__(self, format_type: str = 'json'):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (json, table)
        """
        if format_type not in self.FORMATS:
            raise ValueError(f"Unknown output format: {format_type}")
        self.format_type = format_type

    def format(self, data: Dict[str, Any]) -> str:
        """Format data according to the configured format type."""
        if self.format_type == 'table':
            return self.format_table(data)
        return self.format_json(data)

    def format_json(self, data: Any) -> str:
        """Format data as JSON."""
        return json.dumps(data, indent=2)

    def format_table(self, data: Dict[str, Any]) -> str:
        """Format data as aligned key/value lines, flattening nested objects."""
        rows = self._flatten(data)
        if not rows:
            return ""

        width = max(len(key) for key, _ in rows)
        return "\n".join(f"{key:{width}}  {self._cell(value)}" for key, value in rows)

    def _flatten(self, data: Dict[str, Any], prefix: str = "") -> List[Tuple[str, Any]]:
        rows = []
        for key, value in data.items():
            name = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                rows.extend(self._flatten(value, name))
            else:
                rows.append((name, value))
        return rows

    @staticmethod
    def _cell(value: Any) -> str:
        if value is None:
            return "-"
        if isinstance(value, bool):
            return "yes" if value else "no"
        return str(value)
