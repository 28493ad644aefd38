"""Forwarding decisions: direct delivery, longest-prefix match and next-hop lookup."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Sequence, Union

from forwarding_sim.address import format_address
from forwarding_sim.modules.table_loader import InterfaceEntry, RouteEntry

__all__ = [
    "NO_ROUTE",
    "NEXT_HOP_UNRESOLVED",
    "DirectDelivery",
    "Forwarded",
    "Unreachable",
    "Outcome",
    "find_attached_interface",
    "find_route",
    "resolve",
]

log = logging.getLogger(__name__)

NO_ROUTE = "no-route"
NEXT_HOP_UNRESOLVED = "next-hop-unresolved"


@dataclass(frozen=True)
class DirectDelivery:
    """宛先が直接接続サブネット上にあります。"""

    interface_name: str


@dataclass(frozen=True)
class Forwarded:
    """宛先はネクストホップ経由で転送されます。"""

    interface_name: str
    next_hop: int


@dataclass(frozen=True)
class Unreachable:
    """No usable route; ``reason`` tells a missing route from a broken next hop."""

    reason: str = NO_ROUTE


Outcome = Union[DirectDelivery, Forwarded, Unreachable]


def find_attached_interface(
    addr: int, interfaces: Sequence[InterfaceEntry]
) -> Optional[InterfaceEntry]:
    """Return the first interface whose subnet contains ``addr``."""

    for iface in interfaces:
        if iface.contains(addr):
            return iface
    return None


def find_route(dest: int, routes: Sequence[RouteEntry]) -> Optional[RouteEntry]:
    """Longest-prefix match over ``routes``.

    Equal prefix lengths keep the route seen first, so the result depends on
    table order and is reproducible.
    """

    best: Optional[RouteEntry] = None
    for route in routes:
        if not route.matches(dest):
            continue
        if best is None or route.prefix_len > best.prefix_len:
            best = route
    return best


def resolve(
    dest: int,
    interfaces: Sequence[InterfaceEntry],
    routes: Sequence[RouteEntry],
    logger: Optional[logging.Logger] = None,
) -> Outcome:
    """宛先アドレスに対する転送判断を返します。"""

    logger = logger or log
    dest_text = format_address(dest)

    attached = find_attached_interface(dest, interfaces)
    if attached is not None:
        logger.debug("%s is on the same subnet as %s", dest_text, attached.name)
        return DirectDelivery(interface_name=attached.name)

    logger.debug("%s is not on an attached subnet, looking up route", dest_text)
    route = find_route(dest, routes)
    if route is None:
        logger.debug("No route to %s", dest_text)
        return Unreachable(reason=NO_ROUTE)

    egress = find_attached_interface(route.next_hop, interfaces)
    if egress is None:
        logger.warning(
            "Route %s matched %s but next hop is not on any interface subnet",
            route.description(),
            dest_text,
        )
        return Unreachable(reason=NEXT_HOP_UNRESOLVED)

    logger.debug("%s matched route %s out %s", dest_text, route.description(), egress.name)
    return Forwarded(interface_name=egress.name, next_hop=route.next_hop)
