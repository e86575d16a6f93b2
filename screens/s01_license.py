from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static
from textual.containers import Horizontal, VerticalScroll
from widgets.installer_header import InstallerHeader
from validators import LicenseInput
from logger import log


class LicenseScreen(Screen):
    """Step 1: End user license agreement."""

    def compose(self) -> ComposeResult:
        yield InstallerHeader()
        yield Static("END USER LICENSE AGREEMENT (EULA)", classes="title")
        with VerticalScroll(id="eula"):
            yield Static(self.app.eula, id="eula_text", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("I agree", id="btn_agree", variant="primary")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_abort":
            log.info("Step 1: license declined")
            self.app.submit(LicenseInput(agree=False))
        elif event.button.id == "btn_agree":
            log.info("Step 1: license accepted")
            self.app.submit(LicenseInput(agree=True))
