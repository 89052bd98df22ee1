"""
RPC Health Check CLI Package

Command-line interface, configuration and output formatting.
"""

__version__ = "0.1.0"
