"""Router model holding the statically loaded interface and route tables."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from forwarding_sim.address import format_address, prefix_to_netmask
from forwarding_sim.modules.table_loader import (
    InterfaceEntry,
    RouteEntry,
    load_interfaces_file,
    load_routes_file,
)
from forwarding_sim.services.route_resolver import Outcome, resolve

__all__ = ["StaticRouter"]


class StaticRouter:
    """静的に設定されたインターフェースとルートを持つ簡易ルーターモデル。"""

    def __init__(
        self,
        name: str,
        interfaces: Iterable[InterfaceEntry],
        routes: Iterable[RouteEntry],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.name = name
        self.interfaces: tuple[InterfaceEntry, ...] = tuple(interfaces)
        self.routes: tuple[RouteEntry, ...] = tuple(routes)
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_files(
        cls,
        config_path: str,
        route_path: str,
        name: str = "Router",
        logger: Optional[logging.Logger] = None,
    ) -> "StaticRouter":
        """Load both tables; :class:`SourceUnavailable` propagates to the caller."""

        interfaces = load_interfaces_file(config_path, logger)
        routes = load_routes_file(route_path, logger)
        return cls(name=name, interfaces=interfaces, routes=routes, logger=logger)

    def resolve(self, dest: int) -> Outcome:
        return resolve(dest, self.interfaces, self.routes, self.logger)

    # ------------------------------------------------------------------
    # 表示
    # ------------------------------------------------------------------
    def show_ip_interface_brief(self) -> str:
        """Summarise the attached interfaces (IOS style)."""

        lines = [
            f"{self.name} interfaces:",
            "Interface              IP-Address      Prefix  Network",
        ]
        if not self.interfaces:
            lines.append("<no interfaces>")
            return "\n".join(lines)
        for iface in self.interfaces:
            lines.append(
                f"{iface.name:<23}{format_address(iface.address):<16}"
                f"/{iface.prefix_len:<7}{format_address(iface.network)}"
            )
        return "\n".join(lines)

    def show_ip_route(self) -> str:
        """Display connected networks followed by static routes in table order."""

        lines = [
            f"Routing table for {self.name}",
            "Codes: C - connected, S - static",
            "",
        ]
        default = next((route for route in self.routes if route.prefix_len == 0), None)
        if default is None:
            lines.append("Gateway of last resort is not set")
        else:
            lines.append(
                f"Gateway of last resort is {format_address(default.next_hop)} to network 0.0.0.0"
            )
        lines.append("")
        for iface in self.interfaces:
            lines.append(
                f"C    {format_address(iface.network)} "
                f"{format_address(prefix_to_netmask(iface.prefix_len))} "
                f"is directly connected, {iface.name}"
            )
        if not self.routes:
            lines.append("<no static routes>")
            return "\n".join(lines)
        for route in self.routes:
            lines.append(
                f"S    {format_address(route.network)} "
                f"{format_address(prefix_to_netmask(route.prefix_len))} "
                f"[1/0] via {format_address(route.next_hop)}"
            )
        return "\n".join(lines)
