"""Kitchen ticket queue fed by submitted orders."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable

from dinerdesk.models import KitchenTicket, TicketStatus
from dinerdesk.ordering import OrderBuilder
from dinerdesk.qr import validate_table

logger = logging.getLogger(__name__)


class EmptyOrderError(ValueError):
    """Raised when submitting an order with no lines."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class KitchenQueue:
    """Tickets, most recent first. Tickets are never removed or reordered."""

    def __init__(
        self,
        tickets: Iterable[KitchenTicket] = (),
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.tickets: list[KitchenTicket] = list(tickets)
        self._clock = clock

    def __len__(self) -> int:
        return len(self.tickets)

    def __iter__(self):
        return iter(self.tickets)

    def _ticket_id(self, now: datetime) -> int:
        ticket_id = int(now.timestamp() * 1000)
        # Two submits in the same millisecond would share an id; step past the newest.
        newest = max((ticket.id for ticket in self.tickets), default=0)
        if ticket_id <= newest:
            ticket_id = newest + 1
        return ticket_id

    def submit(self, order: OrderBuilder, table: int) -> KitchenTicket:
        """Freeze the order into a pending ticket and clear the order."""
        if not order:
            raise EmptyOrderError("Order is empty, add items before sending.")
        table = validate_table(table)

        now = self._clock()
        ticket = KitchenTicket(
            id=self._ticket_id(now),
            table=table,
            items=order.snapshot(),
            time=now.isoformat(),
            status=TicketStatus.PENDING,
        )
        self.tickets.insert(0, ticket)
        order.clear()
        logger.info("ticket_submit id=%s table=%s lines=%s", ticket.id, table, len(ticket.items))
        return ticket

    def mark_done(self, ticket_id: int) -> KitchenTicket | None:
        """Flip a pending ticket to done. Unknown ids and done tickets are left alone."""
        for idx, ticket in enumerate(self.tickets):
            if ticket.id != ticket_id:
                continue
            if ticket.is_done:
                return ticket
            done = replace(ticket, status=TicketStatus.DONE)
            self.tickets[idx] = done
            logger.info("ticket_done id=%s table=%s", ticket_id, ticket.table)
            return done
        return None

    def get(self, ticket_id: int) -> KitchenTicket | None:
        for ticket in self.tickets:
            if ticket.id == ticket_id:
                return ticket
        return None

    def pending(self) -> list[KitchenTicket]:
        return [ticket for ticket in self.tickets if not ticket.is_done]

    def done(self) -> list[KitchenTicket]:
        return [ticket for ticket in self.tickets if ticket.is_done]
