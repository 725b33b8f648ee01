"""Table picker shown over the admin app."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from dinerdesk.qr import InvalidTableError, table_numbers, validate_table

GRID_COLUMNS = 7


class TableModal(ModalScreen[int | None]):
    """Pick a table from the floor grid with arrows, or type its number."""

    CSS = """
    TableModal {
        align: center middle;
        background: $background 60%;
    }

    #table-dialog {
        width: 52;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #table-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #table-grid {
        margin-bottom: 1;
    }

    #table-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #table-help {
        color: #dddddd;
    }
    """

    def __init__(self, current: int) -> None:
        super().__init__()
        self.tables = table_numbers()
        self.current = current
        self.cursor = current if current in self.tables else self.tables[0]
        self.typed = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="table-dialog"):
            yield Static(f"Choose a table (now {self.current})", id="table-title")
            yield Static(id="table-grid")
            yield Static(id="table-error")
            yield Static("Arrows move. Digits jump. Enter confirm. Esc cancel.", id="table-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        key = event.key
        if key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return
        if key == "enter":
            self._confirm()
            event.stop()
            return

        if key in {"left", "right"}:
            self._step(-1 if key == "left" else 1)
        elif key in {"up", "down"}:
            self._step(-GRID_COLUMNS if key == "up" else GRID_COLUMNS)
        elif key == "backspace":
            self._erase_digit()
        elif event.is_printable and event.character and event.character.isdigit():
            self._type_digit(event.character)
        else:
            return
        event.stop()
        self._refresh_content()

    def _step(self, delta: int) -> None:
        idx = self.tables.index(self.cursor)
        self.cursor = self.tables[(idx + delta) % len(self.tables)]
        self.typed = ""
        self.error = ""

    def _type_digit(self, digit: str) -> None:
        # Two digits cover every table; a third starts a new number.
        self.typed = digit if len(self.typed) >= 2 else self.typed + digit
        self._select_typed()

    def _select_typed(self) -> None:
        try:
            self.cursor = validate_table(int(self.typed))
        except InvalidTableError as exc:
            self.error = str(exc)
        else:
            self.error = ""

    def _erase_digit(self) -> None:
        self.typed = self.typed[:-1]
        self.error = ""
        if self.typed:
            self._select_typed()

    def _confirm(self) -> None:
        if self.error:
            return
        self.dismiss(self.cursor)

    def _refresh_content(self) -> None:
        grid = Text()
        for idx, table in enumerate(self.tables):
            if idx and idx % GRID_COLUMNS == 0:
                grid.append("\n")
            if table == self.cursor:
                style = "bold reverse"
            elif table == self.current:
                style = "bold white"
            else:
                style = "white"
            grid.append(f" {table:>2} ", style=style)
            grid.append(" ")
        if self.typed:
            grid.append(f"\n\nTyped: {self.typed}", style="dim")

        self.query_one("#table-grid", Static).update(grid)
        self.query_one("#table-error", Static).update(self.error)
