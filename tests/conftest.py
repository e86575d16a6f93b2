import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from options import CountryInfo, Disk, GIB, LocaleInfo
from state import WizardState

DISK = Disk(path="/dev/vda", size_bytes=16 * GIB)
SECOND_DISK = Disk(path="/dev/vdb", size_bytes=32 * GIB)

LOCALES = LocaleInfo(
    countries={
        "at": CountryInfo(name="Austria", zone="Europe/Vienna", kmap="de"),
        "de": CountryInfo(name="Germany", zone="Europe/Berlin", kmap="de"),
        "aq": CountryInfo(name="Antarctica", zone="", kmap="en-us"),
    },
    cczones={
        "at": ["Europe/Vienna"],
        "de": ["Europe/Busingen", "Europe/Berlin"],
    },
    kmap={"de": "German", "en-us": "U.S. English"},
)

@pytest.fixture
def disks():
    return [DISK, SECOND_DISK]

@pytest.fixture
def locales():
    return LOCALES

@pytest.fixture
def state(disks, locales):
    return WizardState(disks, locales, interactive=False)
