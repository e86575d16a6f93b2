# options.py
from __future__ import annotations
import ipaddress
from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from enum import Enum, IntEnum
from typing import Dict, List, Tuple, Union

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB
TIB = 1024 * GIB

SMALL_DISK_LIMIT = 128 * MIB
DEFAULT_MIN_FREE_SPACE = 16 * MIB
# Placeholder until swap is derived from the installed memory.
DEFAULT_SWAP_SIZE = 4 * MIB

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class WizardStep(IntEnum):
    LICENSE = 0
    BOOTDISK = 1
    TIMEZONE = 2
    PASSWORD = 3
    NETWORK = 4
    SUMMARY = 5

    @property
    def title(self) -> str:
        return self.name.capitalize()


def format_size(size: int) -> str:
    """Human readable size label, e.g. 17179869184 -> '16.00 GiB'."""
    for unit, factor in (("TiB", TIB), ("GiB", GIB), ("MiB", MIB), ("KiB", KIB)):
        if size >= factor:
            return f"{size / factor:.2f} {unit}"
    return f"{size} B"


def format_gib(size: int) -> str:
    """Exact GiB representation of `size` bytes, e.g. 4194304 -> '0.00390625'."""
    with localcontext() as ctx:
        ctx.prec = 60
        value = (Decimal(size) / GIB).normalize()
    return format(value, "f")


@dataclass(frozen=True)
class Disk:
    path: str
    size_bytes: int

    def __post_init__(self) -> None:
        if self.size_bytes <= 0:
            raise ValueError(f"disk {self.path} has no capacity")

    def display_str(self) -> str:
        return f"{self.path} ({format_size(self.size_bytes)})"


class FsType(Enum):
    EXT4 = "ext4"
    XFS = "xfs"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LvmLayout:
    disk: Disk
    total_size: int
    swap_size: int
    max_root_size: int = 0      # 0 = use all remaining space
    max_data_size: int = 0      # 0 = use all remaining space
    min_free_space: int = 0


def defaults_for(disk: Disk) -> LvmLayout:
    """Derive the default LVM layout for `disk`."""
    if disk.size_bytes > SMALL_DISK_LIMIT:
        min_free_space = DEFAULT_MIN_FREE_SPACE
    else:
        min_free_space = disk.size_bytes // 8
    return LvmLayout(
        disk=disk,
        total_size=disk.size_bytes,
        swap_size=DEFAULT_SWAP_SIZE,
        max_root_size=0,
        max_data_size=0,
        min_free_space=min_free_space,
    )


@dataclass(frozen=True)
class BootdiskOptions:
    selected_disks: Tuple[Disk, ...]
    filesystem: FsType
    layout: LvmLayout

    @classmethod
    def defaults_from(cls, disk: Disk) -> "BootdiskOptions":
        return cls(
            selected_disks=(disk,),
            filesystem=FsType.EXT4,
            layout=defaults_for(disk),
        )


@dataclass(frozen=True)
class TimezoneOptions:
    country_code: str = "at"
    timezone: str = "Europe/Vienna"
    keyboard_layout: str = "de"


@dataclass(frozen=True)
class PasswordOptions:
    root_password: str = field(default="", repr=False)
    admin_email: str = "mail@example.invalid"


@dataclass(frozen=True)
class NetworkOptions:
    interface_name: str = "eth0"
    fqdn: str = "pve.example.invalid"
    address: IPInterface = ipaddress.ip_interface("192.168.100.2/24")
    gateway: IPAddress = ipaddress.ip_address("192.168.100.1")
    dns_server: IPAddress = ipaddress.ip_address("192.168.100.1")


@dataclass(frozen=True)
class Configuration:
    bootdisk: BootdiskOptions
    timezone: TimezoneOptions = field(default_factory=TimezoneOptions)
    password: PasswordOptions = field(default_factory=PasswordOptions)
    network: NetworkOptions = field(default_factory=NetworkOptions)

    @classmethod
    def defaults_from(cls, disk: Disk) -> "Configuration":
        return cls(bootdisk=BootdiskOptions.defaults_from(disk))


# -- Locale facts ------------------------------------------------------------

@dataclass(frozen=True)
class CountryInfo:
    name: str
    zone: str = ""      # default timezone for the country
    kmap: str = ""      # default keyboard layout id


@dataclass(frozen=True)
class LocaleInfo:
    countries: Dict[str, CountryInfo]
    cczones: Dict[str, List[str]]
    kmap: Dict[str, str]            # layout id -> display name


def selectable_timezones(locales: LocaleInfo, country_code: str) -> List[str]:
    """Zones offered for a country: sorted, with UTC always last."""
    zones = sorted(z for z in locales.cczones.get(country_code, []) if z != "UTC")
    zones.append("UTC")
    return zones


def sorted_countries(locales: LocaleInfo) -> List[Tuple[str, str]]:
    """(display name, country code) pairs sorted by display name."""
    return sorted((c.name, cc) for cc, c in locales.countries.items())


def sorted_keyboard_layouts(locales: LocaleInfo) -> List[Tuple[str, str]]:
    return sorted((name, kid) for kid, name in locales.kmap.items())


# -- Summary -----------------------------------------------------------------

def _size_or_unlimited(size: int) -> str:
    return format_size(size) if size else "unlimited"


def to_summary(config: Configuration) -> List[Tuple[str, str]]:
    """Flatten `config` into ordered (label, value) pairs for display."""
    boot = config.bootdisk
    layout = boot.layout
    tz = config.timezone
    net = config.network
    return [
        ("Bootdisks", ", ".join(d.path for d in boot.selected_disks)),
        ("Total size", format_size(layout.total_size)),
        ("Swap size", format_size(layout.swap_size)),
        ("Max root size", _size_or_unlimited(layout.max_root_size)),
        ("Max data size", _size_or_unlimited(layout.max_data_size)),
        ("Min free space", format_size(layout.min_free_space)),
        ("Filesystem", str(boot.filesystem)),
        ("Country", tz.country_code),
        ("Timezone", tz.timezone),
        ("Keyboard layout", tz.keyboard_layout),
        ("Administrator email", config.password.admin_email),
        ("Management interface", net.interface_name),
        ("Host IP (CIDR)", str(net.address)),
        ("Gateway", str(net.gateway)),
        ("DNS server", str(net.dns_server)),
        ("Hostname (FQDN)", net.fqdn),
    ]
