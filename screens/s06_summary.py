from __future__ import annotations
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Button, Checkbox, DataTable, Footer, Static
from textual.containers import Horizontal, Vertical
from widgets.installer_header import InstallerHeader
from options import WizardStep
from logger import log


class SummaryScreen(Screen):
    """Step 6: Review the configuration and start the installation."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        yield InstallerHeader(WizardStep.SUMMARY.title)
        with Vertical(id="content"):
            yield Static("Summary", classes="title")
            yield DataTable(id="summary_table")
            yield Checkbox(
                "Automatically reboot after successful installation",
                id="chk_reboot",
                value=self.app.state.reboot_after_install,
            )
            yield Static("", id="err_msg", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("← Previous", id="btn_back", variant="default")
            yield Button("Install", id="btn_install", variant="success")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#summary_table", DataTable)
        table.add_columns("Option", "Selected value")
        for label, value in self.app.state.summary():
            table.add_row(label, value)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "chk_reboot":
            self.app.state.set_reboot_after_install(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_abort":
            self.app.action_abort_install()
        elif event.button.id == "btn_back":
            self.app.go_back()
        elif event.button.id == "btn_install":
            event.button.disabled = True
            try:
                self.app.start_install()
            except OSError as e:
                log.error("Failed to write install configuration: %s", e)
                self.query_one("#err_msg", Static).update(
                    f"Failed to write install configuration: {e}"
                )
                event.button.disabled = False

    def action_go_back(self) -> None:
        self.app.go_back()
