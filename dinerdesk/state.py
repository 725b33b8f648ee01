"""Application state and the controller that owns it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from dinerdesk.catalog import Catalog
from dinerdesk.images import encode_image_file
from dinerdesk.kitchen import KitchenQueue
from dinerdesk.models import GalleryImage, KitchenTicket, MenuItem, OrderLine
from dinerdesk.ordering import OrderBuilder
from dinerdesk.persistence import (
    SlotStore,
    export_document,
    load_state,
    parse_import,
    save_gallery,
    save_menu,
    save_tickets,
)
from dinerdesk.qr import validate_table

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppState:
    """Everything the admin screens read and mutate."""

    catalog: Catalog
    gallery: list[GalleryImage]
    order: OrderBuilder
    kitchen: KitchenQueue
    table: int = 1


class Controller:
    """Single owner of AppState. Every catalog, gallery or queue change is saved."""

    def __init__(self, store: SlotStore, clock: Callable[[], datetime] = _utc_now) -> None:
        self.store = store
        self._clock = clock
        store.bootstrap_schema()
        stored = load_state(store)
        self.state = AppState(
            catalog=Catalog(stored.menu),
            gallery=list(stored.gallery),
            order=OrderBuilder(),
            kitchen=KitchenQueue(stored.tickets, clock=clock),
        )
        logger.info(
            "state_loaded menu=%s gallery=%s tickets=%s",
            len(self.state.catalog),
            len(self.state.gallery),
            len(self.state.kitchen),
        )

    # Persistence

    def _save_menu(self) -> None:
        save_menu(self.store, self.state.catalog)

    def _save_gallery(self) -> None:
        save_gallery(self.store, self.state.gallery)

    def _save_tickets(self) -> None:
        save_tickets(self.store, self.state.kitchen)

    # Catalog

    def add_menu_item(self, category: str, name: str, price: Any, notes: str = "", image: str | None = None) -> MenuItem:
        item = self.state.catalog.add_item(category, name, price, notes, image)
        self._save_menu()
        return item

    def edit_menu_item(
        self,
        item_id: int,
        category: str,
        name: str,
        price: Any,
        notes: str = "",
        image: str | None = None,
    ) -> MenuItem | None:
        item = self.state.catalog.edit_item(item_id, category, name, price, notes, image)
        if item is not None:
            self._save_menu()
        return item

    def delete_menu_item(self, item_id: int) -> bool:
        deleted = self.state.catalog.delete_item(item_id)
        if deleted:
            self._save_menu()
        return deleted

    async def attach_item_image(self, item_id: int, path: str | Path | None) -> MenuItem | None:
        """Read a picture off the UI thread, then set it on the item in one step."""
        src = await asyncio.to_thread(encode_image_file, path)
        if src is None:
            return None
        item = self.state.catalog.set_image(item_id, src)
        if item is not None:
            self._save_menu()
        return item

    # Gallery

    def _gallery_id(self) -> int:
        image_id = int(self._clock().timestamp() * 1000)
        newest = max((image.id for image in self.state.gallery), default=0)
        return max(image_id, newest + 1)

    async def add_gallery_image(self, path: str | Path | None) -> GalleryImage | None:
        src = await asyncio.to_thread(encode_image_file, path)
        if src is None:
            return None
        image = GalleryImage(id=self._gallery_id(), src=src)
        self.state.gallery.append(image)
        self._save_gallery()
        logger.info("gallery_add id=%s", image.id)
        return image

    def delete_gallery_image(self, image_id: int) -> bool:
        remaining = [image for image in self.state.gallery if image.id != image_id]
        if len(remaining) == len(self.state.gallery):
            return False
        self.state.gallery = remaining
        self._save_gallery()
        return True

    # Active order

    def select_table(self, table: int) -> int:
        self.state.table = validate_table(table)
        return self.state.table

    def add_to_order(self, item_id: int) -> OrderLine | None:
        item = self.state.catalog.get(item_id)
        if item is None:
            return None
        return self.state.order.add(item)

    def change_qty(self, index: int, delta: int) -> None:
        self.state.order.change_qty(index, delta)

    def remove_from_order(self, index: int) -> None:
        self.state.order.remove(index)

    def clear_order(self) -> None:
        self.state.order.clear()

    # Kitchen

    def submit_order(self) -> KitchenTicket:
        ticket = self.state.kitchen.submit(self.state.order, self.state.table)
        self._save_tickets()
        return ticket

    def mark_done(self, ticket_id: int) -> KitchenTicket | None:
        ticket = self.state.kitchen.mark_done(ticket_id)
        if ticket is not None:
            self._save_tickets()
        return ticket

    # Import / export

    def export_to(self, path: str | Path) -> Path:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(export_document(self.state.catalog, self.state.gallery), encoding="utf-8")
        logger.info("export_written path=%s", target)
        return target

    def apply_import(self, text: str) -> list[str]:
        """Overwrite the collections present in `text`; return the replaced keys."""
        document = parse_import(text)
        replaced: list[str] = []
        if document.menu is not None:
            self.state.catalog.replace_all(document.menu)
            self._save_menu()
            replaced.append("menu")
        if document.gallery is not None:
            self.state.gallery = list(document.gallery)
            self._save_gallery()
            replaced.append("gallery")
        logger.info("import_applied keys=%s", ",".join(replaced) or "-")
        return replaced

    async def import_from(self, path: str | Path | None) -> list[str]:
        """Read an import file off the UI thread; missing path is ignored."""
        if path is None or not str(path).strip():
            return []
        source = Path(str(path).strip()).expanduser()
        text = await asyncio.to_thread(source.read_text, encoding="utf-8")
        return self.apply_import(text)
