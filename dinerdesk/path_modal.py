"""Single-line file path prompt used for images, import and export."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class PathModal(ModalScreen[str | None]):
    """Type a path, Enter to confirm. An empty path dismisses with ""."""

    CSS = """
    PathModal {
        align: center middle;
        background: $background 60%;
    }

    #path-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #path-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #path-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #path-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, initial: str = "") -> None:
        super().__init__()
        self.title_text = title
        self.value = initial

    def compose(self) -> ComposeResult:
        with Container(id="path-dialog"):
            yield Static(self.title_text, id="path-title")
            yield Static(id="path-value")
            yield Static("Type a file path. Enter confirm. Esc cancel.", id="path-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
        elif event.key == "enter":
            self.dismiss(self.value.strip())
        elif event.key == "backspace":
            self.value = self.value[:-1]
            self._refresh_content()
        elif event.is_printable and event.character:
            self.value += event.character
            self._refresh_content()
        # Swallow every key while typing.
        event.stop()

    def _refresh_content(self) -> None:
        self.query_one("#path-value", Static).update(f"{self.value}|")
