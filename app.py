from __future__ import annotations
from typing import List, Optional, Sequence
from textual.app import App
from textual.binding import Binding
from options import Disk, LocaleInfo, WizardStep
from state import WizardState, StepInput
from system.interfaces import InterfaceInfo
from validators import ValidationResult
from logger import log


class InstallerWizard(App):
    """Interactive installer: license, disk, locale, password, network, summary."""

    CSS = """
    Screen {
        background: $surface;
    }
    .title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    #content {
        margin: 1 2;
    }
    #form {
        margin: 1 2;
    }
    #eula {
        height: 1fr;
        border: solid $primary;
    }
    #nav_buttons {
        dock: bottom;
        height: 3;
        align: center middle;
        margin: 1 2;
    }
    Button {
        margin: 0 1;
    }
    #err_msg {
        margin-top: 1;
        color: $error;
    }
    DataTable {
        height: 18;
    }
    Input {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "abort_install", "Abort", priority=True),
    ]

    def __init__(
        self,
        disks: Sequence[Disk],
        locales: LocaleInfo,
        interfaces: Optional[List[InterfaceInfo]] = None,
        eula: str = "",
        interactive: bool = True,
    ) -> None:
        super().__init__()
        self.state = WizardState(disks, locales, interactive=interactive)
        self.interfaces = interfaces or []
        self.eula = eula
        self.installed = False
        log.info("InstallerWizard started with %d disks", len(self.state.disks))

    async def on_mount(self) -> None:
        from screens.s01_license import LicenseScreen
        await self.push_screen(LicenseScreen())

    # -- Navigation ------------------------------------------------------------

    def submit(self, candidate: StepInput) -> ValidationResult:
        """Advance the wizard; on success show the screen of the new step."""
        result = self.state.advance(candidate)
        if result.ok:
            self.push_screen(self._screen_for(self.state.step))
        elif self.state.aborted:
            self.exit()
        elif self.state.abort_pending:
            self._ask_abort()
        return result

    def go_back(self) -> None:
        if self.state.step is WizardStep.LICENSE:
            return
        self.state.retreat()
        self.pop_screen()

    def _screen_for(self, step: WizardStep):
        from screens.s02_bootdisk import BootdiskScreen
        from screens.s03_timezone import TimezoneScreen
        from screens.s04_password import PasswordScreen
        from screens.s05_network import NetworkScreen
        from screens.s06_summary import SummaryScreen
        screens = {
            WizardStep.BOOTDISK: BootdiskScreen,
            WizardStep.TIMEZONE: TimezoneScreen,
            WizardStep.PASSWORD: PasswordScreen,
            WizardStep.NETWORK: NetworkScreen,
            WizardStep.SUMMARY: SummaryScreen,
        }
        return screens[step]()

    # -- Abort -----------------------------------------------------------------

    def action_abort_install(self) -> None:
        if self.state.abort_pending:
            return
        if self.state.request_abort():
            self.exit()
        else:
            self._ask_abort()

    def _ask_abort(self) -> None:
        from screens.abort_dialog import AbortDialog
        self.push_screen(AbortDialog(), self._on_abort_answer)

    def _on_abort_answer(self, confirmed: Optional[bool]) -> None:
        if self.state.confirm_abort(bool(confirmed)):
            self.exit()

    # -- Install ---------------------------------------------------------------

    def start_install(self, path=None) -> None:
        """Hand the finished configuration to the install stage and quit."""
        from handoff import HANDOFF_PATH, write_install_config
        config, reboot = self.state.handoff()
        write_install_config(config, reboot, path or HANDOFF_PATH)
        self.installed = True
        self.exit()
