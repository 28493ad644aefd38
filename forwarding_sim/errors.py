"""Exception types shared by the forwarding simulator."""

from __future__ import annotations

__all__ = [
    "ForwardingSimError",
    "SourceUnavailable",
    "MalformedRecord",
    "MalformedAddress",
    "InvalidPrefixLength",
]


class ForwardingSimError(Exception):
    """Base class for every error raised by :mod:`forwarding_sim`."""


class SourceUnavailable(ForwardingSimError):
    """A table or input stream could not be opened."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"could not open {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedRecord(ForwardingSimError, ValueError):
    """テーブル行が期待される形式に一致しません。"""

    def __init__(self, line: str, reason: str, line_number: int = 0) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        message = f"{reason}: {line.strip()!r}"
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedAddress(ForwardingSimError, ValueError):
    """Dotted-decimal text (or integer value) is not a valid IPv4 address."""


class InvalidPrefixLength(ForwardingSimError, ValueError):
    """Prefix length outside of ``[0, 32]``."""
