"""Rich text helpers for menu rows, order lines and kitchen tickets."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from dinerdesk.data import badge_for_category, style_for_category
from dinerdesk.models import KitchenTicket, MenuItem, OrderLine
from dinerdesk.ordering import format_money


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    return style_for_category(category)


def format_category_badge(category: str) -> Text:
    return Text(badge_for_category(category), style=badge_style(category))


def format_menu_item(item: MenuItem) -> Text:
    """Render a catalog row: badge, name, price and optional notes."""
    text = format_category_badge(item.category)
    text.append(f" {item.name}")
    text.append(f"  {format_money(item.price)}", style="bold")
    if item.notes:
        text.append(f"  ({item.notes})", style="dim")
    if item.image:
        text.append("  [img]", style="dim")
    return text


def format_order_line(line: OrderLine) -> Text:
    text = format_category_badge(line.category)
    text.append(f" {line.name}")
    text.append(f"  x{line.qty}", style="bold")
    text.append(f"  {format_money(line.subtotal)}")
    return text


def format_ticket_time(value: str) -> str:
    """Show stored ISO timestamps as local HH:MM:SS."""
    try:
        return datetime.fromisoformat(value).astimezone().strftime("%H:%M:%S")
    except ValueError:
        return value


def ticket_status_style(ticket: KitchenTicket) -> str:
    if ticket.is_done:
        return "bold #0b1f0f on #5fbf72"
    return "bold #1f1300 on #f0b429"


def format_ticket(ticket: KitchenTicket) -> Text:
    """Render a ticket header followed by one indented row per line."""
    text = Text()
    text.append(f" {ticket.status.value.upper()} ", style=ticket_status_style(ticket))
    text.append(f" Table {ticket.table}", style="bold")
    text.append(f"  {format_ticket_time(ticket.time)}", style="dim")
    text.append(f"  #{ticket.id}", style="dim")
    for line in ticket.items:
        text.append(f"\n      {line.qty} x {line.name}")
        if line.notes:
            text.append(f"  ({line.notes})", style="dim")
    return text
