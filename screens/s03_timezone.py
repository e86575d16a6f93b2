from __future__ import annotations
from typing import List, Tuple
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Select, Label
from textual.containers import Horizontal, VerticalScroll
from widgets.installer_header import InstallerHeader
from options import (
    WizardStep, selectable_timezones, sorted_countries, sorted_keyboard_layouts,
)
from validators import TimezoneInput
from logger import log


def _pick(value: str, options: List[Tuple[str, str]], fallback: str = "") -> str:
    """Return `value` if it is selectable, else `fallback` if it is, else the first option."""
    values = [v for _, v in options]
    if value in values:
        return value
    if fallback in values:
        return fallback
    return values[0]


class TimezoneScreen(Screen):
    """Step 3: Country, timezone and keyboard layout."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
    ]

    def _zone_options(self, country_code: str) -> List[Tuple[str, str]]:
        return [(z, z) for z in selectable_timezones(self.app.state.locales, country_code)]

    def compose(self) -> ComposeResult:
        locales = self.app.state.locales
        current: TimezoneInput = self.app.state.candidate_for(WizardStep.TIMEZONE)

        countries = sorted_countries(locales)
        self._country = _pick(current.country_code, countries)
        zones = self._zone_options(self._country)
        layouts = sorted_keyboard_layouts(locales) or [
            (current.keyboard_layout, current.keyboard_layout)
        ]

        yield InstallerHeader(WizardStep.TIMEZONE.title)
        with VerticalScroll(id="form"):
            yield Static("Location and timezone", classes="title")
            yield Label("Country:")
            yield Select(countries, id="sel_country", value=self._country, allow_blank=False)
            yield Label("Timezone:")
            yield Select(zones, id="sel_tz", value=_pick(current.timezone, zones),
                         allow_blank=False)
            yield Label("Keyboard layout:")
            yield Select(layouts, id="sel_kb", value=_pick(current.keyboard_layout, layouts),
                         allow_blank=False)
            yield Static("", id="err_msg", markup=False)
        with Horizontal(id="nav_buttons"):
            yield Button("Abort", id="btn_abort", variant="error")
            yield Button("← Previous", id="btn_back", variant="default")
            yield Button("Next →", id="btn_next", variant="primary")
        yield Footer()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "sel_country" or event.value == self._country:
            return
        self._country = str(event.value)
        country = self.app.state.locales.countries.get(self._country)
        zones = self._zone_options(self._country)
        tz_sel = self.query_one("#sel_tz", Select)
        tz_sel.set_options(zones)
        tz_sel.value = _pick(country.zone if country else "", zones, "UTC")
        if country and country.kmap in self.app.state.locales.kmap:
            self.query_one("#sel_kb", Select).value = country.kmap
        log.info("Step 3: country changed to %s (%d zones)", self._country, len(zones) - 1)

    def _collect(self) -> TimezoneInput:
        return TimezoneInput(
            country_code=str(self.query_one("#sel_country", Select).value),
            timezone=str(self.query_one("#sel_tz", Select).value),
            keyboard_layout=str(self.query_one("#sel_kb", Select).value),
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
                log.info("Step 3: timezone options committed")
            else:
                err.update(f"Invalid values: {result.error.reason}")

    def action_go_back(self) -> None:
        self.app.go_back()
