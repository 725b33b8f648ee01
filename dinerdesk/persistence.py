"""SQLite-backed JSON slots for the catalog, gallery and kitchen queue."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from dinerdesk.config import SLOT_GALLERY, SLOT_KITCHEN, SLOT_MENU
from dinerdesk.data import default_menu
from dinerdesk.models import ExportDocument, GalleryImage, KitchenTicket, MenuItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ImportFormatError(ValueError):
    """Import text is not valid JSON or not the expected shape."""


@dataclass(frozen=True)
class StoredState:
    """Collections restored at startup."""

    menu: list[MenuItem]
    gallery: list[GalleryImage]
    tickets: list[KitchenTicket]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SlotStore:
    """Key-value store of JSON text, one row per named slot."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the slot table if it does not already exist."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS slots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def read(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return str(row[0])

    def write(self, key: str, value: str) -> None:
        """Replace the whole slot in one transaction."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO slots (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value, _utc_now_iso()),
                )
        finally:
            conn.close()


def _dump_list(records: Iterable[Any]) -> str:
    return json.dumps([record.to_dict() for record in records], ensure_ascii=False)


def _parse_records(data: Any, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    if not isinstance(data, list):
        raise ValueError("expected a list of records")
    return [parse(entry) for entry in data]


def _parse_list(raw: str | None, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    if raw is None:
        raise ValueError("slot is empty")
    return _parse_records(json.loads(raw), parse)


def _load_slot(store: SlotStore, key: str, parse: Callable[[dict[str, Any]], T], fallback: Callable[[], list[T]]) -> list[T]:
    try:
        return _parse_list(store.read(key), parse)
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        logger.warning("slot_load_fallback key=%s error=%r", key, exc)
        return fallback()


def load_state(store: SlotStore) -> StoredState:
    """Restore every slot; unreadable slots fall back to defaults or empty lists."""
    return StoredState(
        menu=_load_slot(store, SLOT_MENU, MenuItem.from_dict, default_menu),
        gallery=_load_slot(store, SLOT_GALLERY, GalleryImage.from_dict, list),
        tickets=_load_slot(store, SLOT_KITCHEN, KitchenTicket.from_dict, list),
    )


def save_menu(store: SlotStore, items: Iterable[MenuItem]) -> None:
    store.write(SLOT_MENU, _dump_list(items))


def save_gallery(store: SlotStore, images: Iterable[GalleryImage]) -> None:
    store.write(SLOT_GALLERY, _dump_list(images))


def save_tickets(store: SlotStore, tickets: Iterable[KitchenTicket]) -> None:
    store.write(SLOT_KITCHEN, _dump_list(tickets))


def export_document(menu: Iterable[MenuItem], gallery: Iterable[GalleryImage]) -> str:
    """Serialize the catalog and gallery as an export file body."""
    payload = {
        "menu": [item.to_dict() for item in menu],
        "gallery": [image.to_dict() for image in gallery],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _check_imported_item(item: MenuItem) -> None:
    # Categories outside the known list are allowed so older exports still load.
    if item.id < 1:
        raise ImportFormatError(f"Import file has an invalid menu id: {item.id}")
    if not item.name.strip():
        raise ImportFormatError(f"Menu item {item.id} in the import file has no name.")
    if item.price < 0:
        raise ImportFormatError(f"Menu item {item.id} in the import file has a negative price.")


def parse_import(text: str) -> ExportDocument:
    """Parse an import file body. Keys that are absent stay `None`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"Import file is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ImportFormatError("Import file must be a JSON object with 'menu' and/or 'gallery'.")

    document = ExportDocument()
    try:
        if "menu" in data:
            document.menu = _parse_records(data["menu"], MenuItem.from_dict)
        if "gallery" in data:
            document.gallery = _parse_records(data["gallery"], GalleryImage.from_dict)
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        raise ImportFormatError(f"Import file has malformed entries: {exc}") from exc

    if document.menu is not None:
        for item in document.menu:
            _check_imported_item(item)
        ids = [item.id for item in document.menu]
        if len(ids) != len(set(ids)):
            raise ImportFormatError("Import file has duplicate menu ids.")
    return document
