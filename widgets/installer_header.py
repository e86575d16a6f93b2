# widgets/installer_header.py
from __future__ import annotations
import pyfiglet
from textual.widgets import Static

BANNER = pyfiglet.figlet_format("Installer", font="small")


class InstallerHeader(Static):
    """Full-width ASCII-art banner shown above every step."""

    DEFAULT_CSS = """
    InstallerHeader {
        color: $accent;
        text-style: bold;
        width: 100%;
        padding: 0 2;
    }
    """

    def __init__(self, step_title: str = "") -> None:
        banner = BANNER.rstrip("\n")
        if step_title:
            banner = f"{banner}\n  {step_title}"
        super().__init__(banner, markup=False)
