"""
Check Exceptions for RPC Health Check

This module defines the exceptions raised while building a check command.
Failures of the check itself are reported in the CheckResult, not raised.
"""


class CheckError(Exception):
    """Base exception for all check errors."""
    pass


class UnsupportedProtocolError(CheckError):
    """Raised when the protocol name is not one of the known protocols."""
    pass


class UnsupportedCommandError(CheckError):
    """Raised when a protocol/method combination cannot be checked."""
    pass
