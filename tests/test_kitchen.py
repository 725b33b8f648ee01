from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from dinerdesk.kitchen import EmptyOrderError, KitchenQueue
from dinerdesk.models import TicketStatus
from dinerdesk.ordering import OrderBuilder
from dinerdesk.qr import InvalidTableError


def _order(*items):
    order = OrderBuilder()
    for item in items:
        order.add(item)
    return order


def test_submit_empty_order_is_rejected(clock):
    queue = KitchenQueue(clock=clock)

    with pytest.raises(EmptyOrderError):
        queue.submit(OrderBuilder(), 4)

    assert len(queue) == 0


def test_submit_builds_pending_ticket_and_clears_order(clock, bruschetta, pizza):
    queue = KitchenQueue(clock=clock)
    order = _order(bruschetta, pizza)
    order.change_qty(1, 1)

    ticket = queue.submit(order, 4)

    assert ticket.status is TicketStatus.PENDING
    assert ticket.table == 4
    assert [(line.name, line.qty) for line in ticket.items] == [("Bruschetta", 1), ("Margherita Pizza", 2)]
    assert ticket.id == int(datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc).timestamp() * 1000)
    assert ticket.time.startswith("2026-03-14T12:00:00")
    assert len(order) == 0
    assert queue.tickets == [ticket]


def test_submit_with_bad_table_keeps_order(clock, bruschetta):
    queue = KitchenQueue(clock=clock)
    order = _order(bruschetta)

    with pytest.raises(InvalidTableError):
        queue.submit(order, 15)

    assert len(order) == 1
    assert len(queue) == 0


def test_newest_ticket_first(clock, bruschetta, pizza):
    queue = KitchenQueue(clock=clock)
    first = queue.submit(_order(bruschetta), 1)
    second = queue.submit(_order(pizza), 2)

    assert [ticket.id for ticket in queue] == [second.id, first.id]


def test_same_millisecond_submits_get_distinct_ids(bruschetta):
    frozen = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)
    queue = KitchenQueue(clock=lambda: frozen)

    first = queue.submit(_order(bruschetta), 1)
    second = queue.submit(_order(bruschetta), 1)

    assert second.id == first.id + 1


def test_ticket_lines_are_independent_of_later_order_edits(clock, bruschetta):
    queue = KitchenQueue(clock=clock)
    order = _order(bruschetta)
    ticket = queue.submit(order, 3)

    line = order.add(bruschetta)
    line.qty = 9

    assert ticket.items[0].qty == 1
    assert ticket.items[0] is not line


def test_submitted_ticket_lines_cannot_be_mutated(clock, bruschetta):
    queue = KitchenQueue(clock=clock)
    ticket = queue.submit(_order(bruschetta), 3)

    with pytest.raises(FrozenInstanceError):
        ticket.items[0].qty = 99
    with pytest.raises(FrozenInstanceError):
        ticket.items[0].name = "Changed"

    stored = queue.get(ticket.id).items[0]
    assert (stored.name, stored.qty) == ("Bruschetta", 1)


def test_mark_done_flips_only_the_matching_ticket(clock, bruschetta, pizza):
    queue = KitchenQueue(clock=clock)
    first = queue.submit(_order(bruschetta), 1)
    second = queue.submit(_order(pizza), 2)

    done = queue.mark_done(first.id)

    assert done.status is TicketStatus.DONE
    assert queue.get(first.id).is_done
    assert queue.get(second.id).status is TicketStatus.PENDING
    assert queue.get(first.id).items == first.items
    assert [ticket.id for ticket in queue.pending()] == [second.id]
    assert [ticket.id for ticket in queue.done()] == [first.id]


def test_mark_done_is_idempotent_and_ignores_unknown_ids(clock, bruschetta):
    queue = KitchenQueue(clock=clock)
    ticket = queue.submit(_order(bruschetta), 1)

    queue.mark_done(ticket.id)
    snapshot = list(queue.tickets)
    again = queue.mark_done(ticket.id)

    assert again.is_done
    assert queue.tickets == snapshot
    assert queue.mark_done(123) is None
    assert queue.tickets == snapshot
