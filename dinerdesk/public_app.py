"""Read-only guest menu, opened from a table's QR link."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Header, Static

from dinerdesk.catalog import Catalog
from dinerdesk.models import GalleryImage
from dinerdesk.ordering import format_money
from dinerdesk.qr import table_from_url
from dinerdesk.rendering import format_category_badge


def format_public_menu(catalog: Catalog, table: int | None, gallery: list[GalleryImage]) -> Text:
    """Guest-facing menu text grouped by category."""
    text = Text()
    if table is not None:
        text.append(f"Welcome, table {table}\n\n", style="bold")
    else:
        text.append("Welcome\n\n", style="bold")

    grouped = catalog.by_category()
    if not grouped:
        text.append("The menu is being prepared.", style="dim")
    for category, items in grouped.items():
        text.append_text(format_category_badge(category))
        text.append(f" {category}\n", style="bold")
        for item in items:
            text.append(f"   {item.name}")
            text.append(f"  {format_money(item.price)}\n", style="bold")
            if item.notes:
                text.append(f"      {item.notes}\n", style="dim")
        text.append("\n")

    if gallery:
        text.append(f"{len(gallery)} photo(s) in the gallery.", style="dim")
    return text


class PublicMenuApp(App):
    """Shows the menu for the table named in the link; no editing."""

    TITLE = "Menu"

    CSS = """
    #menu-scroll {
        border: round $primary;
        padding: 1 2;
    }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit"), ("q", "quit", "Quit")]

    def __init__(self, catalog: Catalog, gallery: list[GalleryImage], url: str) -> None:
        super().__init__()
        self.catalog = catalog
        self.gallery = gallery
        self.table = table_from_url(url)

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="menu-scroll"):
            yield Static(format_public_menu(self.catalog, self.table, self.gallery), id="menu-body")

    def on_mount(self) -> None:
        if self.table is not None:
            self.sub_title = f"Table {self.table}"
