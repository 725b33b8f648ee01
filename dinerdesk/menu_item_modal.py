"""Add/edit form for a catalog entry."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from dinerdesk.catalog import CatalogValidationError, validate_fields
from dinerdesk.data import CATEGORIES
from dinerdesk.models import MenuItem
from dinerdesk.ordering import format_money


@dataclass
class MenuItemDraft:
    """Raw form values; the controller validates them again on save."""

    category: str
    name: str = ""
    price: str = ""
    notes: str = ""
    image_path: str = ""


_TEXT_FIELDS = ("name", "price", "notes", "image_path")
_FIELD_LABELS = {
    "category": "Category",
    "name": "Name",
    "price": "Price",
    "notes": "Notes",
    "image_path": "Image file",
}


class MenuItemModal(ModalScreen[MenuItemDraft | None]):
    """Keyboard-only form. Up/Down move, Left/Right change category, Enter saves on the last row."""

    CSS = """
    MenuItemModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-body {
        margin-bottom: 1;
        color: white;
    }

    #item-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #item-help {
        color: #dddddd;
    }
    """

    FIELDS = ("category",) + _TEXT_FIELDS

    def __init__(self, item: MenuItem | None = None) -> None:
        super().__init__()
        self.editing = item
        if item is None:
            self.draft = MenuItemDraft(category=CATEGORIES[0])
        else:
            self.draft = MenuItemDraft(
                category=item.category,
                name=item.name,
                price=format_money(item.price),
                notes=item.notes,
            )
        self.cursor_index = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        title = "New menu item" if self.editing is None else f"Edit #{self.editing.id}"
        with Container(id="item-dialog"):
            yield Static(title, id="item-title")
            yield Static(id="item-body")
            yield Static(id="item-error")
            yield Static(
                "Up/Down move. Left/Right category. Enter next/save. Ctrl+S save. Esc cancel.",
                id="item-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    @property
    def current_field(self) -> str:
        return self.FIELDS[self.cursor_index]

    def on_key(self, event: Key) -> None:
        key = event.key
        if key == "escape":
            self.dismiss(None)
            event.stop()
            return

        on_last_field = self.cursor_index == len(self.FIELDS) - 1
        if key == "ctrl+s" or (key == "enter" and on_last_field):
            self.save_draft()
            event.stop()
            return

        if key == "enter":
            self._move(1)
        elif key == "up":
            self._move(-1)
        elif key == "down":
            self._move(1)
        elif key in {"left", "right"} and self.current_field == "category":
            self._cycle_category(-1 if key == "left" else 1)
        elif key == "backspace" and self.current_field != "category":
            value = getattr(self.draft, self.current_field)
            setattr(self.draft, self.current_field, value[:-1])
            self.error = ""
        elif event.is_printable and event.character and self.current_field != "category":
            value = getattr(self.draft, self.current_field)
            setattr(self.draft, self.current_field, value + event.character)
            self.error = ""
        else:
            return
        event.stop()
        self._refresh_content()

    def _move(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.FIELDS)

    def _cycle_category(self, delta: int) -> None:
        idx = CATEGORIES.index(self.draft.category) if self.draft.category in CATEGORIES else 0
        self.draft.category = CATEGORIES[(idx + delta) % len(CATEGORIES)]

    def save_draft(self) -> None:
        """Validate the draft and dismiss with it, or show the error."""
        try:
            validate_fields(self.draft.category, self.draft.name, self.draft.price)
        except CatalogValidationError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(self.draft)

    def _refresh_content(self) -> None:
        content = Text(style="white")
        for idx, field_name in enumerate(self.FIELDS):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            value = getattr(self.draft, field_name)
            if field_name == "category":
                value = f"< {value} >"
            elif idx == self.cursor_index:
                value = f"{value}|"
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{_FIELD_LABELS[field_name]:<11} {value}", style=style)

        self.query_one("#item-body", Static).update(content)
        self.query_one("#item-error", Static).update(self.error)
