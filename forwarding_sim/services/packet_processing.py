"""Per-address processing: parse the destination, resolve it and format the result."""

from __future__ import annotations

from typing import IO, Iterable, Optional, TYPE_CHECKING

from forwarding_sim.address import format_address, parse_address
from forwarding_sim.errors import MalformedAddress
from forwarding_sim.modules.table_loader import is_skippable
from forwarding_sim.services.route_resolver import (
    NEXT_HOP_UNRESOLVED,
    DirectDelivery,
    Forwarded,
    Outcome,
)

__all__ = ["format_outcome", "process_packet", "process_stream"]

if TYPE_CHECKING:  # pragma: no cover - 型チェック専用
    from forwarding_sim.router_core import StaticRouter


def format_outcome(dest: int, outcome: Outcome) -> str:
    """転送判断を 1 行の出力テキストに変換します。"""

    dest_text = format_address(dest)
    if isinstance(outcome, DirectDelivery):
        return (
            f"Packet now being sent to destination {dest_text}, "
            f"leaving router from interface {outcome.interface_name}"
        )
    if isinstance(outcome, Forwarded):
        return (
            f"Packet destination is {dest_text}, "
            f"leaving router from interface {outcome.interface_name} "
            f"to next hop {format_address(outcome.next_hop)}"
        )
    if outcome.reason == NEXT_HOP_UNRESOLVED:
        return f"Destination {dest_text} is unreachable."
    return f"{dest_text}: unreachable"


def process_packet(router: "StaticRouter", line: str) -> Optional[str]:
    """Return the output line for ``line``, or ``None`` when it is skipped."""

    if is_skippable(line):
        return None
    try:
        dest = parse_address(line)
    except MalformedAddress as exc:
        router.logger.warning("Skipping bad destination address: %s", exc)
        return None
    return format_outcome(dest, router.resolve(dest))


def process_stream(router: "StaticRouter", lines: Iterable[str], out: IO[str]) -> int:
    """Write one decision per destination in input order; return how many were written."""

    written = 0
    for line in lines:
        result = process_packet(router, line)
        if result is None:
            continue
        out.write(result + "\n")
        written += 1
    return written
