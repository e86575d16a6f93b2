# system/locales.py
from __future__ import annotations
import json
from pathlib import Path
from typing import Union
from options import CountryInfo, LocaleInfo
from logger import log

LOCALE_DB = Path("/var/lib/installer/locales.json")

# Used when the locale database is missing; UTC is always selectable anyway.
FALLBACK_LOCALES = LocaleInfo(
    countries={"us": CountryInfo(name="United States", zone="UTC", kmap="en-us")},
    cczones={},
    kmap={"en-us": "U.S. English"},
)


def parse_locales(data: dict) -> LocaleInfo:
    """
    Build LocaleInfo from the locale database layout:

        {"countries": {"at": {"name": "Austria", "zone": "Europe/Vienna", "kmap": "de"}},
         "cczones":   {"at": ["Europe/Vienna"]},
         "kmap":      {"de": {"name": "German"}}}

    Raises ValueError if a section has the wrong shape.
    """
    try:
        countries = {
            cc: CountryInfo(
                name=str(c["name"]),
                zone=str(c.get("zone", "")),
                kmap=str(c.get("kmap", "")),
            )
            for cc, c in (data.get("countries") or {}).items()
        }
        cczones = {
            cc: [str(z) for z in zones]
            for cc, zones in (data.get("cczones") or {}).items()
        }
        kmap = {
            kid: str(k["name"] if isinstance(k, dict) else k)
            for kid, k in (data.get("kmap") or {}).items()
        }
    except (AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"malformed locale database: {e}") from e
    return LocaleInfo(countries=countries, cczones=cczones, kmap=kmap)


def load_locales(path: Union[str, Path] = LOCALE_DB) -> LocaleInfo:
    try:
        with open(path) as f:
            data = json.load(f)
        locales = parse_locales(data)
    except (OSError, ValueError) as e:
        log.warning("Could not load locale database %s: %s", path, e)
        return FALLBACK_LOCALES
    if not locales.countries:
        log.warning("Locale database %s lists no countries", path)
        return FALLBACK_LOCALES
    log.info(
        "Loaded %d countries and %d keyboard layouts from %s",
        len(locales.countries), len(locales.kmap), path,
    )
    return locales
