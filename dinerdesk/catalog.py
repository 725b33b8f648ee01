"""Menu catalog: add, edit and delete orderable items."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable

from dinerdesk.data import CATEGORIES
from dinerdesk.models import MenuItem, parse_price

logger = logging.getLogger(__name__)


class CatalogValidationError(ValueError):
    """A required menu field is missing or malformed."""


def next_id(items: Iterable[MenuItem]) -> int:
    """Return max existing id + 1, or 1 for an empty catalog."""
    return max((item.id for item in items), default=0) + 1


def validate_fields(category: str, name: str, price: Any) -> tuple[str, str, Decimal]:
    """Normalize user-entered fields or raise CatalogValidationError."""
    clean_name = (name or "").strip()
    if not clean_name:
        raise CatalogValidationError("Name is required.")

    if category not in CATEGORIES:
        raise CatalogValidationError(f"Category must be one of: {', '.join(CATEGORIES)}.")

    if price is None or str(price).strip() == "":
        raise CatalogValidationError("Price is required.")
    try:
        parsed = parse_price(price)
    except ValueError as exc:
        raise CatalogValidationError(f"Price is not a number: {price!r}.") from exc
    if parsed < 0:
        raise CatalogValidationError("Price cannot be negative.")

    return (category, clean_name, parsed)


class Catalog:
    """Flat list of menu items with session-unique ids."""

    def __init__(self, items: Iterable[MenuItem] = ()) -> None:
        self.items: list[MenuItem] = list(items)
        self._issued_max = next_id(self.items) - 1

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def get(self, item_id: int) -> MenuItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def replace_all(self, items: Iterable[MenuItem]) -> None:
        """Swap in a whole new item list (import)."""
        self.items = list(items)
        self._issued_max = max(self._issued_max, next_id(self.items) - 1)

    def _allocate_id(self) -> int:
        # Ids freed by deletion are not handed out again in the same session.
        new_id = max(next_id(self.items), self._issued_max + 1)
        self._issued_max = new_id
        return new_id

    def add_item(
        self,
        category: str,
        name: str,
        price: Any,
        notes: str = "",
        image: str | None = None,
    ) -> MenuItem:
        category, name, parsed_price = validate_fields(category, name, price)
        item = MenuItem(
            id=self._allocate_id(),
            category=category,
            name=name,
            price=parsed_price,
            notes=(notes or "").strip(),
            image=image or None,
        )
        self.items.append(item)
        logger.info("catalog_add id=%s name=%r", item.id, item.name)
        return item

    def edit_item(
        self,
        item_id: int,
        category: str,
        name: str,
        price: Any,
        notes: str = "",
        image: str | None = None,
    ) -> MenuItem | None:
        """Update an item in place; keeps the existing image when `image` is None."""
        category, name, parsed_price = validate_fields(category, name, price)
        for idx, item in enumerate(self.items):
            if item.id != item_id:
                continue
            updated = replace(
                item,
                category=category,
                name=name,
                price=parsed_price,
                notes=(notes or "").strip(),
                image=image if image is not None else item.image,
            )
            self.items[idx] = updated
            logger.info("catalog_edit id=%s", item_id)
            return updated
        return None

    def set_image(self, item_id: int, image: str | None) -> MenuItem | None:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                self.items[idx] = replace(item, image=image)
                return self.items[idx]
        return None

    def delete_item(self, item_id: int) -> bool:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[idx]
                logger.info("catalog_delete id=%s", item_id)
                return True
        return False

    def by_category(self) -> dict[str, list[MenuItem]]:
        """Group items by category in the configured category order."""
        grouped: dict[str, list[MenuItem]] = {category: [] for category in CATEGORIES}
        for item in self.items:
            grouped.setdefault(item.category, []).append(item)
        return {category: items for category, items in grouped.items() if items}

    def ordered(self) -> list[MenuItem]:
        """Items flattened in display order (category, then insertion)."""
        return [item for items in self.by_category().values() for item in items]
