"""Conversion helpers between dotted-decimal IPv4 text and 32-bit integers."""

from __future__ import annotations

import ipaddress

from forwarding_sim.errors import InvalidPrefixLength, MalformedAddress

__all__ = [
    "MAX_ADDRESS",
    "parse_address",
    "format_address",
    "mask",
    "prefix_to_netmask",
    "validate_ipv4_address",
]

MAX_ADDRESS = 0xFFFF_FFFF


def parse_address(text: str) -> int:
    """Parse ``a.b.c.d`` into its integer form ``(a<<24)|(b<<16)|(c<<8)|d``.

    Raises :class:`MalformedAddress` when the text does not contain exactly
    four decimal fields in the range 0-255.
    """

    if not isinstance(text, str):
        raise MalformedAddress(f"invalid IPv4 address: {text!r}")
    candidate = text.strip()
    fields = candidate.split(".")
    if len(fields) != 4 or not all(field.isdigit() and field.isascii() for field in fields):
        raise MalformedAddress(f"invalid IPv4 address: {text!r}")
    try:
        return int(ipaddress.IPv4Address(candidate))
    except ipaddress.AddressValueError as exc:
        raise MalformedAddress(f"invalid IPv4 address: {text!r}") from exc


def format_address(addr: int) -> str:
    """Return the dotted-decimal form of ``addr``."""

    if isinstance(addr, bool) or not isinstance(addr, int) or not 0 <= addr <= MAX_ADDRESS:
        raise MalformedAddress(f"address out of range: {addr!r}")
    octets = [(addr >> shift) & 0xFF for shift in range(24, -1, -8)]
    return ".".join(str(octet) for octet in octets)


def _check_prefix_len(prefix_len: int) -> None:
    if isinstance(prefix_len, bool) or not isinstance(prefix_len, int):
        raise InvalidPrefixLength(f"prefix length must be an integer: {prefix_len!r}")
    if not 0 <= prefix_len <= 32:
        raise InvalidPrefixLength(f"prefix length must be between 0 and 32: {prefix_len}")


def prefix_to_netmask(prefix_len: int) -> int:
    """Return the netmask (as an integer) covering ``prefix_len`` leading bits."""

    _check_prefix_len(prefix_len)
    # /0 は全ビット 0 のマスク
    if prefix_len == 0:
        return 0
    return (MAX_ADDRESS << (32 - prefix_len)) & MAX_ADDRESS


def mask(addr: int, prefix_len: int) -> int:
    """Clear every bit of ``addr`` past the first ``prefix_len`` bits."""

    return addr & prefix_to_netmask(prefix_len)


def validate_ipv4_address(value: str) -> bool:
    """Return ``True`` when ``value`` is a syntactically valid IPv4 address."""

    try:
        parse_address(value)
    except MalformedAddress:
        return False
    return True
