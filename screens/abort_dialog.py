from textual.app import ComposeResult
from textual.screen import ModalScreen
from textual.widgets import Button, Static
from textual.containers import Vertical, Horizontal


class AbortDialog(ModalScreen[bool]):
    """Yes/No confirmation before the installation is aborted."""

    DEFAULT_CSS = """
    AbortDialog {
        align: center middle;
    }
    #dialog {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    #dialog_buttons {
        height: 3;
        align: center middle;
        margin-top: 1;
    }
    """

    BINDINGS = [("escape", "decline", "No")]

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("Abort installation?", classes="title")
            yield Static("Are you sure you want to abort the installation?")
            with Horizontal(id="dialog_buttons"):
                yield Button("No", id="btn_no", variant="primary")
                yield Button("Yes", id="btn_yes", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn_yes")

    def action_decline(self) -> None:
        self.dismiss(False)
