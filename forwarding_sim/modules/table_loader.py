"""Interface and route table parsing for the forwarding simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Callable, Iterable, Optional, TypeVar

from forwarding_sim.address import format_address, mask, parse_address
from forwarding_sim.errors import (
    InvalidPrefixLength,
    MalformedAddress,
    MalformedRecord,
    SourceUnavailable,
)

__all__ = [
    "InterfaceEntry",
    "RouteEntry",
    "is_skippable",
    "parse_interface_line",
    "parse_route_line",
    "load_interfaces",
    "load_routes",
    "load_interfaces_file",
    "load_routes_file",
]

log = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"^\s*#")
_INTERFACE_RE = re.compile(r"^\s*([A-Za-z0-9]+)\s+([0-9.]+)/([0-9]{1,3})\s*$")
_ROUTE_RE = re.compile(r"^\s*([0-9.]+)/([0-9]{1,3})\s+([0-9.]+)\s*$")

_Entry = TypeVar("_Entry")


@dataclass(frozen=True)
class InterfaceEntry:
    """ルーターに直接接続されたインターフェースを表現します。"""

    name: str
    address: int
    prefix_len: int
    network: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "network", mask(self.address, self.prefix_len))

    def contains(self, addr: int) -> bool:
        return mask(addr, self.prefix_len) == self.network

    def description(self) -> str:
        return f"{self.name} {format_address(self.address)}/{self.prefix_len}"


@dataclass(frozen=True)
class RouteEntry:
    """スタティックルートのエントリ。``network`` は常にマスク済みです。"""

    network: int
    prefix_len: int
    next_hop: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "network", mask(self.network, self.prefix_len))

    def matches(self, dest: int) -> bool:
        return mask(dest, self.prefix_len) == self.network

    def description(self) -> str:
        return (
            f"{format_address(self.network)}/{self.prefix_len} "
            f"via {format_address(self.next_hop)}"
        )


def is_skippable(line: str) -> bool:
    """Return ``True`` for blank lines and ``#`` comments."""

    return not line.strip() or _COMMENT_RE.match(line) is not None


def _parse_fields(
    line: str, address_text: str, prefix_text: str, line_number: int
) -> tuple[int, int]:
    try:
        address = parse_address(address_text)
        prefix_len = int(prefix_text)
        mask(address, prefix_len)
    except (MalformedAddress, InvalidPrefixLength) as exc:
        raise MalformedRecord(line, str(exc), line_number) from exc
    return address, prefix_len


def parse_interface_line(line: str, line_number: int = 0) -> InterfaceEntry:
    """Parse ``<name> <address>/<prefix>`` into an :class:`InterfaceEntry`."""

    match = _INTERFACE_RE.match(line)
    if match is None:
        raise MalformedRecord(line, "expected '<name> <address>/<prefix>'", line_number)
    name, address_text, prefix_text = match.groups()
    address, prefix_len = _parse_fields(line, address_text, prefix_text, line_number)
    return InterfaceEntry(name=name, address=address, prefix_len=prefix_len)


def parse_route_line(line: str, line_number: int = 0) -> RouteEntry:
    """Parse ``<network>/<prefix> <next-hop>`` into a :class:`RouteEntry`."""

    match = _ROUTE_RE.match(line)
    if match is None:
        raise MalformedRecord(line, "expected '<network>/<prefix> <next-hop>'", line_number)
    network_text, prefix_text, next_hop_text = match.groups()
    network, prefix_len = _parse_fields(line, network_text, prefix_text, line_number)
    try:
        next_hop = parse_address(next_hop_text)
    except MalformedAddress as exc:
        raise MalformedRecord(line, str(exc), line_number) from exc
    return RouteEntry(network=network, prefix_len=prefix_len, next_hop=next_hop)


def _load(
    lines: Iterable[str],
    parse: Callable[[str, int], _Entry],
    table: str,
    logger: Optional[logging.Logger],
) -> tuple[_Entry, ...]:
    logger = logger or log
    entries: list[_Entry] = []
    for line_number, line in enumerate(lines, start=1):
        if is_skippable(line):
            continue
        try:
            entry = parse(line, line_number)
        except MalformedRecord as exc:
            logger.warning(
                "Bad entry in %s table, skipping to next line: %s",
                table,
                exc,
            )
            continue
        logger.debug("Loaded %s entry %s", table, entry.description())
        entries.append(entry)
    logger.info("Loaded %d %s entries", len(entries), table)
    return tuple(entries)


def load_interfaces(
    lines: Iterable[str], logger: Optional[logging.Logger] = None
) -> tuple[InterfaceEntry, ...]:
    """Build the interface list from interface-table lines."""

    return _load(lines, parse_interface_line, "interface", logger)


def load_routes(
    lines: Iterable[str], logger: Optional[logging.Logger] = None
) -> tuple[RouteEntry, ...]:
    """Build the route list from route-table lines, keeping file order."""

    return _load(lines, parse_route_line, "route", logger)


def _load_file(
    path: str,
    loader: Callable[[Iterable[str], Optional[logging.Logger]], tuple[_Entry, ...]],
    logger: Optional[logging.Logger],
) -> tuple[_Entry, ...]:
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailable(str(path), exc.strerror or str(exc)) from exc
    with handle:
        return loader(handle, logger)


def load_interfaces_file(
    path: str, logger: Optional[logging.Logger] = None
) -> tuple[InterfaceEntry, ...]:
    return _load_file(path, load_interfaces, logger)


def load_routes_file(
    path: str, logger: Optional[logging.Logger] = None
) -> tuple[RouteEntry, ...]:
    return _load_file(path, load_routes, logger)
