"""Domain models for dinerdesk."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class TicketStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"


def parse_price(value: Any) -> Decimal:
    """Parse a stored or typed price into a Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"invalid price: {value!r}") from exc
    if not price.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return price


def _price_to_json(price: Decimal) -> float | int:
    if price == price.to_integral_value():
        return int(price)
    return float(price)


@dataclass(frozen=True)
class MenuItem:
    """An orderable catalog entry."""

    id: int
    category: str
    name: str
    price: Decimal
    notes: str = ""
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["price"] = _price_to_json(self.price)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuItem:
        return cls(
            id=int(data["id"]),
            category=str(data["category"]),
            name=str(data["name"]),
            price=parse_price(data["price"]),
            notes=str(data.get("notes") or ""),
            image=data.get("image") or None,
        )


@dataclass
class OrderLine:
    """A copied catalog entry plus a quantity in the active order."""

    id: int
    category: str
    name: str
    price: Decimal
    notes: str = ""
    image: str | None = None
    qty: int = 1

    @classmethod
    def from_item(cls, item: MenuItem) -> OrderLine:
        return cls(
            id=item.id,
            category=item.category,
            name=item.name,
            price=item.price,
            notes=item.notes,
            image=item.image,
            qty=1,
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.qty


@dataclass(frozen=True)
class TicketLine:
    """Frozen copy of an order line, as sent to the kitchen."""

    id: int
    category: str
    name: str
    price: Decimal
    notes: str = ""
    image: str | None = None
    qty: int = 1

    @classmethod
    def from_line(cls, line: OrderLine) -> TicketLine:
        return cls(
            id=line.id,
            category=line.category,
            name=line.name,
            price=line.price,
            notes=line.notes,
            image=line.image,
            qty=line.qty,
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.qty

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["price"] = _price_to_json(self.price)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TicketLine:
        qty = int(data.get("qty", 1))
        if qty < 1:
            raise ValueError(f"invalid qty: {qty}")
        return cls(
            id=int(data["id"]),
            category=str(data["category"]),
            name=str(data["name"]),
            price=parse_price(data["price"]),
            notes=str(data.get("notes") or ""),
            image=data.get("image") or None,
            qty=qty,
        )


@dataclass(frozen=True)
class KitchenTicket:
    """A submitted order. Only `status` ever changes, via a replaced copy."""

    id: int
    table: int
    items: tuple[TicketLine, ...]
    time: str
    status: TicketStatus = TicketStatus.PENDING

    @property
    def is_done(self) -> bool:
        return self.status is TicketStatus.DONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "table": self.table,
            "items": [line.to_dict() for line in self.items],
            "time": self.time,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KitchenTicket:
        return cls(
            id=int(data["id"]),
            table=int(data["table"]),
            items=tuple(TicketLine.from_dict(line) for line in data["items"]),
            time=str(data["time"]),
            status=TicketStatus(data.get("status", TicketStatus.PENDING.value)),
        )


@dataclass(frozen=True)
class GalleryImage:
    """A stored picture for the public menu page."""

    id: int
    src: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "src": self.src}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GalleryImage:
        return cls(id=int(data["id"]), src=str(data["src"]))


@dataclass
class ExportDocument:
    """Top-level import/export payload. Absent keys stay `None`."""

    menu: list[MenuItem] | None = None
    gallery: list[GalleryImage] | None = None
