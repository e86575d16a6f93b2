from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Input, Label
from textual.containers import Horizontal, VerticalScroll
from widgets.installer_header import InstallerHeader
from options import WizardStep
from validators import PasswordInput
from logger import log


class PasswordScreen(Screen):
    """Step 4: Root password and administrator email."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        current: PasswordInput = self.app.state.candidate_for(WizardStep.PASSWORD)
        yield InstallerHeader(WizardStep.PASSWORD.title)
        with VerticalScroll(id="form"):
            yield Static("Administration password and email address", classes="title")
            yield Label("Root password:")
            yield Input(password=True, id="inp_password")
            yield Label("Confirm root password:")
            yield Input(password=True, id="inp_confirm")
            yield Label("Administrator email:")
            yield Input(value=current.admin_email, id="inp_email")
            yield Static("", id="err_msg", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("← Previous", id="btn_back", variant="default")
            yield Button("Next →", id="btn_next", variant="primary")
        yield Footer()

    def _collect(self) -> PasswordInput:
        return PasswordInput(
            root_password=self.query_one("#inp_password", Input).value,
            confirm_password=self.query_one("#inp_confirm", Input).value,
            admin_email=self.query_one("#inp_email", Input).value.strip(),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_abort":
            self.app.action_abort_install()
        elif event.button.id == "btn_back":
            self.app.go_back()
        elif event.button.id == "btn_next":
            result = self.app.submit(self._collect())
            err = self.query_one("#err_msg", Static)
            if result.ok:
                err.update("")
                log.info("Step 4: password options committed")
            else:
                err.update(f"Invalid values: {result.error.reason}")

    def action_go_back(self) -> None:
        self.app.go_back()
