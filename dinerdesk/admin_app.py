"""Main Textual admin app: menu, active order, kitchen, tables and gallery."""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from dinerdesk.config import EXPORT_PATH, resolve_db_path, resolve_menu_base_url
from dinerdesk.images import ImageLoadError, data_url_summary
from dinerdesk.menu_item_modal import MenuItemDraft, MenuItemModal
from dinerdesk.path_modal import PathModal
from dinerdesk.persistence import SlotStore
from dinerdesk.qr import menu_url_for, qr_url_for, table_numbers
from dinerdesk.rendering import format_menu_item, format_order_line, format_ticket
from dinerdesk.state import AppState, Controller
from dinerdesk.table_modal import TableModal

logger = logging.getLogger(__name__)

VIEWS = ("menu", "order", "kitchen", "tables", "gallery")
VIEW_TITLES = {
    "menu": "1 Menu",
    "order": "2 Order",
    "kitchen": "3 Kitchen",
    "tables": "4 Tables / QR",
    "gallery": "5 Gallery",
}
VIEW_HELP = {
    "menu": "Enter add to order. A add, E edit, D delete, I set image.",
    "order": "+/- quantity. D remove line, X clear, T table, Ctrl+S send to kitchen.",
    "kitchen": "Enter mark ticket done.",
    "tables": "Enter use this table for the active order.",
    "gallery": "A add image, D delete.",
}


class DinerDeskApp(App):
    """A Textual app for running a small dining room from one terminal."""

    TITLE = "DinerDesk"
    SUB_TITLE = "Menu / Orders / Kitchen"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #list-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #view-tabs {
        margin-bottom: 1;
    }

    #rows {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #order-summary {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-top: 1;
        height: 4;
    }
    """

    current_view = reactive("menu")
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("enter", "primary", "Select"),
        Binding("ctrl+s", "submit_order", "Send to kitchen", priority=True),
        Binding("ctrl+e", "export", "Export"),
        Binding("ctrl+o", "import", "Import"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, controller: Controller | None = None) -> None:
        super().__init__()
        if controller is None:
            controller = Controller(SlotStore(resolve_db_path()))
        self.controller = controller
        self.menu_base_url = resolve_menu_base_url()
        self.system_status = ""
        logger.debug("app_init")

    @property
    def app_state(self) -> AppState:
        return self.controller.state

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="list-pane"):
                yield Static(id="view-tabs")
                yield Static(id="rows")
            with Vertical(id="side-pane"):
                yield Static(id="order-summary")
                yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_all()

    # Input

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return

        char = event.character if event.is_printable else None
        if not char or len(char) != 1:
            return
        char = char.lower()

        if char in "12345":
            self._switch_view(VIEWS[int(char) - 1])
        elif char == "j":
            self.action_move_selection(1)
        elif char == "k":
            self.action_move_selection(-1)
        elif char == "t":
            self._open_table_modal()
        elif not self._handle_view_key(char):
            return
        event.stop()

    def _handle_view_key(self, key: str) -> bool:
        if self.current_view == "menu":
            handlers = {
                "a": self._open_add_item,
                "e": self._open_edit_item,
                "d": self._delete_selected_item,
                "i": self._open_item_image,
            }
        elif self.current_view == "order":
            handlers = {
                "+": lambda: self._change_selected_qty(1),
                "=": lambda: self._change_selected_qty(1),
                "-": lambda: self._change_selected_qty(-1),
                "d": self._remove_selected_line,
                "x": self._clear_order,
            }
        elif self.current_view == "gallery":
            handlers = {
                "a": self._open_add_gallery_image,
                "d": self._delete_selected_image,
            }
        else:
            handlers = {}

        handler = handlers.get(key)
        if handler is None:
            return False
        handler()
        return True

    def _switch_view(self, view: str) -> None:
        if view == self.current_view:
            return
        self.current_view = view
        self.selected_index = 0
        self._refresh_all()

    def action_move_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        rows = self._rows()
        if not rows:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(rows)
        self._refresh_rows()

    def action_primary(self) -> None:
        if self._modal_open():
            return
        selected = self._selected_row()
        if selected is None:
            return

        if self.current_view == "menu":
            line = self.controller.add_to_order(selected.id)
            if line is not None:
                self._set_status(f"Added {line.name} for table {self.app_state.table}")
        elif self.current_view == "kitchen":
            ticket = self.controller.mark_done(selected.id)
            if ticket is not None:
                self._set_status(f"Table {ticket.table} ticket done")
        elif self.current_view == "tables":
            self._run_guarded(self.controller.select_table, selected)
            self._set_status(f"Active table: {self.app_state.table}")
        self._refresh_all()

    # Menu items

    def _open_add_item(self) -> None:
        self.push_screen(MenuItemModal(), self._on_item_form_closed)

    def _open_edit_item(self) -> None:
        item = self._selected_row()
        if item is None:
            return
        self.push_screen(MenuItemModal(item), lambda draft: self._on_item_form_closed(draft, item.id))

    def _on_item_form_closed(self, draft: MenuItemDraft | None, item_id: int | None = None) -> None:
        if draft is None:
            return
        if item_id is None:
            item = self._run_guarded(
                self.controller.add_menu_item, draft.category, draft.name, draft.price, draft.notes
            )
        else:
            item = self._run_guarded(
                self.controller.edit_menu_item, item_id, draft.category, draft.name, draft.price, draft.notes
            )
        if item is None:
            self._refresh_all()
            return

        self._set_status(f"Saved {item.name}")
        if draft.image_path.strip():
            self.run_worker(self._attach_image(item.id, draft.image_path), exclusive=False)
        self._refresh_all()

    def _delete_selected_item(self) -> None:
        item = self._selected_row()
        if item is None:
            return
        if self.controller.delete_menu_item(item.id):
            self._set_status(f"Deleted {item.name}")
        self._refresh_all()

    def _open_item_image(self) -> None:
        item = self._selected_row()
        if item is None:
            return

        def on_path(path: str | None) -> None:
            if path:
                self.run_worker(self._attach_image(item.id, path), exclusive=False)

        self.push_screen(PathModal(f"Image for {item.name}"), on_path)

    async def _attach_image(self, item_id: int, path: str) -> None:
        try:
            item = await self.controller.attach_item_image(item_id, path)
        except ImageLoadError as exc:
            self._set_status(str(exc))
            return
        if item is not None:
            self._set_status(f"Image set for {item.name}")
        self._refresh_all()

    # Active order

    def _change_selected_qty(self, delta: int) -> None:
        self.controller.change_qty(self.selected_index, delta)
        self._refresh_all()

    def _remove_selected_line(self) -> None:
        self.controller.remove_from_order(self.selected_index)
        self._refresh_all()

    def _clear_order(self) -> None:
        self.controller.clear_order()
        self._set_status("Order cleared")
        self._refresh_all()

    def _open_table_modal(self) -> None:
        def on_table(table: int | None) -> None:
            if table is None:
                return
            self._run_guarded(self.controller.select_table, table)
            self._set_status(f"Active table: {self.app_state.table}")
            self._refresh_all()

        self.push_screen(TableModal(self.app_state.table), on_table)

    def action_submit_order(self) -> None:
        logger.debug("submit_enter rows=%s screen=%s", len(self.app_state.order), type(self.screen).__name__)
        if isinstance(self.screen, MenuItemModal):
            # Ctrl+S inside the item form saves the form.
            self.screen.save_draft()
            return
        if self._modal_open():
            logger.debug("submit_blocked reason=modal")
            return

        ticket = self._run_guarded(self.controller.submit_order)
        if ticket is None:
            logger.debug("submit_blocked reason=%r", self.system_status)
            self._refresh_all()
            return

        self._set_status(f"Sent to kitchen: table {ticket.table}, {len(ticket.items)} line(s)")
        self._refresh_all()

    # Gallery

    def _open_add_gallery_image(self) -> None:
        def on_path(path: str | None) -> None:
            if path:
                self.run_worker(self._add_gallery_image(path), exclusive=False)

        self.push_screen(PathModal("Add gallery image"), on_path)

    async def _add_gallery_image(self, path: str) -> None:
        try:
            image = await self.controller.add_gallery_image(path)
        except ImageLoadError as exc:
            self._set_status(str(exc))
            return
        if image is not None:
            self._set_status("Gallery image added")
        self._refresh_all()

    def _delete_selected_image(self) -> None:
        image = self._selected_row()
        if image is None:
            return
        if self.controller.delete_gallery_image(image.id):
            self._set_status("Gallery image deleted")
        self._refresh_all()

    # Import / export

    def action_export(self) -> None:
        if self._modal_open():
            return

        def on_path(path: str | None) -> None:
            if not path:
                return
            try:
                target = self.controller.export_to(path)
            except OSError as exc:
                self._set_status(f"Export failed: {exc}")
                return
            self._set_status(f"Exported to {target}")

        self.push_screen(PathModal("Export menu and gallery to", EXPORT_PATH), on_path)

    def action_import(self) -> None:
        if self._modal_open():
            return

        def on_path(path: str | None) -> None:
            if path:
                self.run_worker(self._import_file(path), exclusive=True)

        self.push_screen(PathModal("Import menu/gallery from", EXPORT_PATH), on_path)

    async def _import_file(self, path: str) -> None:
        try:
            replaced = await self.controller.import_from(path)
        except (OSError, ValueError) as exc:
            logger.warning("import_failed path=%s error=%r", path, exc)
            self._set_status(f"Import failed: {exc}")
            return
        self._set_status(f"Imported: {', '.join(replaced) or 'nothing'}")
        self.selected_index = 0
        self._refresh_all()

    # Helpers

    def _run_guarded(self, func: Any, *args: Any) -> Any:
        """Call a controller handler; user-correctable errors go to the status bar."""
        try:
            return func(*args)
        except ValueError as exc:
            logger.info("handler_rejected handler=%s error=%r", getattr(func, "__name__", func), exc)
            self._set_status(str(exc))
            return None

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_status()

    def _rows(self) -> list[Any]:
        if self.current_view == "menu":
            return self.app_state.catalog.ordered()
        if self.current_view == "order":
            return list(self.app_state.order.lines)
        if self.current_view == "kitchen":
            return list(self.app_state.kitchen.tickets)
        if self.current_view == "tables":
            return table_numbers()
        return list(self.app_state.gallery)

    def _selected_row(self) -> Any:
        rows = self._rows()
        if not (0 <= self.selected_index < len(rows)):
            return None
        return rows[self.selected_index]

    def _format_row(self, row: Any) -> Text:
        if self.current_view == "menu":
            return format_menu_item(row)
        if self.current_view == "order":
            return format_order_line(row)
        if self.current_view == "kitchen":
            return format_ticket(row)
        if self.current_view == "tables":
            text = Text()
            marker = " *" if row == self.app_state.table else ""
            text.append(f"Table {row}{marker}\n", style="bold")
            text.append(f"      {menu_url_for(row, self.menu_base_url)}\n", style="white")
            text.append(f"      {qr_url_for(row, self.menu_base_url)}", style="dim")
            return text
        return Text(f"#{row.id}  {data_url_summary(row.src)}")

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self._refresh_tabs()
        self._refresh_rows()
        self._refresh_summary()
        self._refresh_status()

    def _refresh_tabs(self) -> None:
        try:
            tabs = self.query_one("#view-tabs", Static)
        except NoMatches:
            return
        text = Text()
        for idx, view in enumerate(VIEWS):
            if idx > 0:
                text.append("  ")
            style = "bold reverse" if view == self.current_view else "dim"
            text.append(f" {VIEW_TITLES[view]} ", style=style)
        tabs.update(text)

    def _refresh_rows(self) -> None:
        try:
            rows_widget = self.query_one("#rows", Static)
        except NoMatches:
            return
        rows = self._rows()
        if not rows:
            self.selected_index = 0
            rows_widget.update("(nothing here yet)")
            return

        if self.selected_index >= len(rows):
            self.selected_index = len(rows) - 1

        # Tickets and table rows span several lines; keep the window small for them.
        lines_per_row = 3 if self.current_view in {"kitchen", "tables"} else 1
        visible = max(1, self._visible_rows(rows_widget) // lines_per_row)
        start, end = self._window_bounds(len(rows), visible, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(self._format_row(rows[idx]))

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        rows_widget.update(lines)

    def _refresh_summary(self) -> None:
        try:
            summary = self.query_one("#order-summary", Static)
        except NoMatches:
            return
        order = self.app_state.order
        text = Text()
        text.append(f"Table {self.app_state.table}\n", style="bold")
        if not order:
            text.append("(empty order)", style="dim")
        for line in order.lines:
            text.append(f"{line.qty} x {line.name}\n")
        text.append(f"\nTotal {order.format_total()}", style="bold")
        text.append(f"\nKitchen pending: {len(self.app_state.kitchen.pending())}", style="dim")
        summary.update(text)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        bar.update(f"{VIEW_HELP[self.current_view]}\n1-5 views, T table, Ctrl+E export, Ctrl+O import.\n{status}")
