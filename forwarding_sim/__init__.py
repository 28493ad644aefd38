# 静的ルーティングの転送判断シミュレーション用パッケージ
#
# 主要機能は forwarding_sim.router_core と forwarding_sim.services で提供されます。

from forwarding_sim.address import format_address, mask, parse_address
from forwarding_sim.errors import (
    ForwardingSimError,
    InvalidPrefixLength,
    MalformedAddress,
    MalformedRecord,
    SourceUnavailable,
)
from forwarding_sim.modules.table_loader import InterfaceEntry, RouteEntry, load_interfaces, load_routes
from forwarding_sim.router_core import StaticRouter
from forwarding_sim.services.route_resolver import DirectDelivery, Forwarded, Unreachable, resolve

__all__ = [
    "StaticRouter",
    "InterfaceEntry",
    "RouteEntry",
    "DirectDelivery",
    "Forwarded",
    "Unreachable",
    "resolve",
    "load_interfaces",
    "load_routes",
    "parse_address",
    "format_address",
    "mask",
    "ForwardingSimError",
    "SourceUnavailable",
    "MalformedRecord",
    "MalformedAddress",
    "InvalidPrefixLength",
]
