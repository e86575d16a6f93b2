from __future__ import annotations
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Select, Input, Label
from textual.containers import Horizontal, VerticalScroll
from widgets.installer_header import InstallerHeader
from options import WizardStep
from validators import NetworkInput
from logger import log


class NetworkScreen(Screen):
    """Step 5: Management interface, hostname and static IP settings."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        current: NetworkInput = self.app.state.candidate_for(WizardStep.NETWORK)
        iface_options = [(i.display_str(), i.name) for i in self.app.interfaces]
        names = [name for _, name in iface_options]
        if not iface_options:
            iface_options = [(current.interface_name, current.interface_name)]
            names = [current.interface_name]
        selected = current.interface_name if current.interface_name in names else names[0]

        yield InstallerHeader(WizardStep.NETWORK.title)
        with VerticalScroll(id="form"):
            yield Static("Management network configuration", classes="title")
            yield Label("Management interface:")
            yield Select(iface_options, id="sel_iface", value=selected, allow_blank=False)
            yield Label("Hostname (FQDN):")
            yield Input(value=current.fqdn, id="inp_fqdn")
            yield Label("IP address (CIDR):")
            yield Input(value=current.address, placeholder="e.g. 192.168.1.100/24", id="inp_ip")
            yield Label("Gateway address:")
            yield Input(value=current.gateway, id="inp_gw")
            yield Label("DNS server address:")
            yield Input(value=current.dns_server, id="inp_dns")
            yield Static("", id="err_msg", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("← Previous", id="btn_back", variant="default")
            yield Button("Next →", id="btn_next", variant="primary")
        yield Footer()

    def _collect(self) -> NetworkInput:
        iface = self.query_one("#sel_iface", Select).value
        return NetworkInput(
            interface_name=str(iface) if iface is not Select.NULL else "",
            fqdn=self.query_one("#inp_fqdn", Input).value.strip(),
            address=self.query_one("#inp_ip", Input).value.strip(),
            gateway=self.query_one("#inp_gw", Input).value.strip(),
            dns_server=self.query_one("#inp_dns", Input).value.strip(),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_abort":
            self.app.action_abort_install()
        elif event.button.id == "btn_back":
            self.app.go_back()
        elif event.button.id == "btn_next":
            candidate = self._collect()
            result = self.app.submit(candidate)
            err = self.query_one("#err_msg", Static)
            if result.ok:
                err.update("")
                log.info(
                    "Step 5: network – iface=%s ip=%s gw=%s dns=%s fqdn=%s",
                    candidate.interface_name, candidate.address,
                    candidate.gateway, candidate.dns_server, candidate.fqdn,
                )
            else:
                err.update(f"Invalid values: {result.error.reason}")

    def action_go_back(self) -> None:
        self.app.go_back()
