from __future__ import annotations
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Select, Input, Label
from textual.containers import Horizontal, VerticalScroll
from widgets.installer_header import InstallerHeader
from options import BootdiskOptions, FsType, WizardStep
from validators import BootdiskInput
from logger import log

# (input id, label, BootdiskInput field)
SIZE_FIELDS = [
    ("inp_total", "Total size (GiB):", "total_size"),
    ("inp_swap", "Swap size (GiB):", "swap_size"),
    ("inp_maxroot", "Max root size (GiB, 0 = unlimited):", "max_root_size"),
    ("inp_maxdata", "Max data size (GiB, 0 = unlimited):", "max_data_size"),
    ("inp_minfree", "Min free space (GiB):", "min_free_space"),
]


class BootdiskScreen(Screen):
    """Step 2: Target disk, filesystem and LVM layout."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        state = self.app.state
        current: BootdiskInput = state.candidate_for(WizardStep.BOOTDISK)
        self._disk_path = current.disk_paths[0]
        disk_options = [(d.display_str(), d.path) for d in state.disks]
        fs_options = [(fs.value, fs.value) for fs in FsType]

        yield InstallerHeader(WizardStep.BOOTDISK.title)
        with VerticalScroll(id="form"):
            yield Static("Harddisk options", classes="title")
            yield Label("Target disk:")
            yield Select(disk_options, id="sel_disk", value=self._disk_path, allow_blank=False)
            yield Label("Filesystem:")
            yield Select(fs_options, id="sel_fs", value=current.filesystem, allow_blank=False)
            for input_id, label, field_name in SIZE_FIELDS:
                yield Label(label)
                yield Input(value=getattr(current, field_name), id=input_id)
            yield Static("", id="err_msg", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("← Previous", id="btn_back", variant="default")
            yield Button("Next →", id="btn_next", variant="primary")
        yield Footer()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "sel_disk" or event.value == self._disk_path:
            return
        disk = next((d for d in self.app.state.disks if d.path == event.value), None)
        if disk is None:
            return
        self._disk_path = disk.path
        # A different disk brings its own derived layout
        defaults = BootdiskInput.from_options(
            BootdiskOptions.defaults_from(disk)
        )
        for input_id, _, field_name in SIZE_FIELDS:
            self.query_one(f"#{input_id}", Input).value = getattr(defaults, field_name)
        log.info("Step 2: disk changed to %s, layout reset to defaults", disk.path)

    def _collect(self) -> BootdiskInput:
        sizes = {
            field_name: self.query_one(f"#{input_id}", Input).value.strip()
            for input_id, _, field_name in SIZE_FIELDS
        }
        disk = self.query_one("#sel_disk", Select).value
        return BootdiskInput(
            disk_paths=(str(disk),) if disk is not Select.NULL else (),
            filesystem=str(self.query_one("#sel_fs", Select).value),
            **sizes,
        )

    def _show_error(self, msg: str) -> None:
        self.query_one("#err_msg", Static).update(f"Invalid values: {msg}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_abort":
            self.app.action_abort_install()
        elif event.button.id == "btn_back":
            self.app.go_back()
        elif event.button.id == "btn_next":
            result = self.app.submit(self._collect())
            if not result.ok:
                self._show_error(result.error.reason)
            else:
                self.query_one("#err_msg", Static).update("")
                log.info("Step 2: bootdisk options committed")

    def action_go_back(self) -> None:
        self.app.go_back()
