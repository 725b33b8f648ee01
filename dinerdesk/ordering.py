"""Active order (cart) for the selected table."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from dinerdesk.models import MenuItem, OrderLine, TicketLine

_CENTS = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """Round to cents for display only."""
    return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


class OrderBuilder:
    """In-memory cart. Never persisted; only submitted tickets are."""

    def __init__(self) -> None:
        self.lines: list[OrderLine] = []

    def __len__(self) -> int:
        return len(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)

    def add(self, item: MenuItem) -> OrderLine:
        """Append a new line with qty 1. Repeated items are not merged."""
        line = OrderLine.from_item(item)
        self.lines.append(line)
        return line

    def change_qty(self, index: int, delta: int) -> None:
        if not (0 <= index < len(self.lines)):
            return
        line = self.lines[index]
        line.qty = max(1, line.qty + delta)

    def remove(self, index: int) -> None:
        if not (0 <= index < len(self.lines)):
            return
        del self.lines[index]

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    def format_total(self) -> str:
        return format_money(self.total())

    def clear(self) -> None:
        self.lines.clear()

    def snapshot(self) -> tuple[TicketLine, ...]:
        """Frozen copies of the current lines, in order."""
        return tuple(TicketLine.from_line(line) for line in self.lines)
