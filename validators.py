# validators.py
from __future__ import annotations
import ipaddress
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException, ROUND_DOWN, localcontext
from enum import Enum
from typing import ClassVar, Generic, Optional, Sequence, Tuple, TypeVar

from options import (
    GIB, BootdiskOptions, Disk, FsType, IPAddress, IPInterface, LocaleInfo,
    LvmLayout, NetworkOptions, PasswordOptions, TimezoneOptions, WizardStep,
    format_gib, selectable_timezones,
)

MIN_PASSWORD_LENGTH = 5
RESERVED_EMAIL_SUFFIX = ".invalid"

T = TypeVar("T")


class ErrorKind(Enum):
    INVALID = "invalid"     # a rule was violated
    PARSE = "parse"         # a raw value could not be parsed
    STATE = "state"         # the wizard cannot take this transition


@dataclass(frozen=True)
class ValidationError:
    reason: str
    kind: ErrorKind = ErrorKind.INVALID

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls, reason: str, kind: ErrorKind = ErrorKind.INVALID
    ) -> "ValidationResult[T]":
        return cls(error=ValidationError(reason, kind))


# -- Candidate inputs ----------------------------------------------------------
# Raw values as entered by the operator, tagged with the step they belong to.

@dataclass(frozen=True)
class LicenseInput:
    step: ClassVar[WizardStep] = WizardStep.LICENSE
    agree: bool


@dataclass(frozen=True)
class BootdiskInput:
    """Sizes are decimal GiB strings, as typed into the form."""
    step: ClassVar[WizardStep] = WizardStep.BOOTDISK
    disk_paths: Tuple[str, ...]
    filesystem: str
    total_size: str
    swap_size: str
    max_root_size: str
    max_data_size: str
    min_free_space: str

    @classmethod
    def from_options(cls, options: BootdiskOptions) -> "BootdiskInput":
        layout = options.layout
        return cls(
            disk_paths=tuple(d.path for d in options.selected_disks),
            filesystem=options.filesystem.value,
            total_size=format_gib(layout.total_size),
            swap_size=format_gib(layout.swap_size),
            max_root_size=format_gib(layout.max_root_size),
            max_data_size=format_gib(layout.max_data_size),
            min_free_space=format_gib(layout.min_free_space),
        )


@dataclass(frozen=True)
class TimezoneInput:
    step: ClassVar[WizardStep] = WizardStep.TIMEZONE
    country_code: str
    timezone: str
    keyboard_layout: str

    @classmethod
    def from_options(cls, options: TimezoneOptions) -> "TimezoneInput":
        return cls(options.country_code, options.timezone, options.keyboard_layout)


@dataclass(frozen=True)
class PasswordInput:
    step: ClassVar[WizardStep] = WizardStep.PASSWORD
    root_password: str = field(repr=False)
    confirm_password: str = field(repr=False)
    admin_email: str = ""

    @classmethod
    def from_options(cls, options: PasswordOptions) -> "PasswordInput":
        return cls(options.root_password, options.root_password, options.admin_email)


@dataclass(frozen=True)
class NetworkInput:
    step: ClassVar[WizardStep] = WizardStep.NETWORK
    interface_name: str
    fqdn: str
    address: str
    gateway: str
    dns_server: str

    @classmethod
    def from_options(cls, options: NetworkOptions) -> "NetworkInput":
        return cls(
            interface_name=options.interface_name,
            fqdn=options.fqdn,
            address=str(options.address),
            gateway=str(options.gateway),
            dns_server=str(options.dns_server),
        )


# -- Helpers -------------------------------------------------------------------

def check_min_requirements(disks: Sequence[Disk]) -> Tuple[bool, str]:
    if not disks:
        return False, "No disks detected. At least one disk is required."
    return True, ""


def parse_size(text: str) -> int:
    """Parse '2.5' (GiB) -> 2684354560 bytes. Raises ValueError on bad input."""
    try:
        value = Decimal(text.strip())
    except DecimalException:
        raise ValueError(f"'{text}' is not a valid size.") from None
    if not value.is_finite():
        raise ValueError(f"'{text}' is not a valid size.")
    if value < 0:
        raise ValueError(f"Size must not be negative, got {text}.")
    try:
        with localcontext() as ctx:
            ctx.prec = 60
            return int((value * GIB).to_integral_value(rounding=ROUND_DOWN))
    except DecimalException:
        raise ValueError(f"'{text}' is too large to be a size.") from None


def parse_cidr(cidr: str) -> IPInterface:
    """Parse '10.0.0.5/24', keeping the host part. Raises ValueError on bad input."""
    if "/" not in cidr:
        raise ValueError(f"'{cidr}' is missing a prefix length.")
    return ipaddress.ip_interface(cidr.strip())


def parse_ip(address: str) -> IPAddress:
    return ipaddress.ip_address(address.strip())


# -- Validators ----------------------------------------------------------------

def validate_lvm_layout(layout: LvmLayout) -> ValidationResult[LvmLayout]:
    sizes = (
        layout.total_size, layout.swap_size, layout.max_root_size,
        layout.max_data_size, layout.min_free_space,
    )
    if any(s < 0 for s in sizes):
        return ValidationResult.failure("sizes must not be negative")
    if layout.swap_size + layout.min_free_space > layout.total_size:
        return ValidationResult.failure(
            "swap size and minimum free space exceed the total size"
        )
    if layout.total_size > layout.disk.size_bytes:
        return ValidationResult.failure(
            f"total size exceeds the capacity of {layout.disk.path}"
        )
    return ValidationResult.success(layout)


def validate_bootdisk(
    candidate: BootdiskInput, available_disks: Sequence[Disk]
) -> ValidationResult[BootdiskOptions]:
    if not candidate.disk_paths:
        return ValidationResult.failure("no disk selected")

    by_path = {d.path: d for d in available_disks}
    selected = []
    for path in candidate.disk_paths:
        if path not in by_path:
            return ValidationResult.failure(f"unknown disk {path}")
        if by_path[path] in selected:
            return ValidationResult.failure(f"disk {path} selected more than once")
        selected.append(by_path[path])

    try:
        fstype = FsType(candidate.filesystem)
    except ValueError:
        return ValidationResult.failure(
            f"unsupported filesystem '{candidate.filesystem}'"
        )

    try:
        layout = LvmLayout(
            disk=selected[0],
            total_size=parse_size(candidate.total_size),
            swap_size=parse_size(candidate.swap_size),
            max_root_size=parse_size(candidate.max_root_size),
            max_data_size=parse_size(candidate.max_data_size),
            min_free_space=parse_size(candidate.min_free_space),
        )
    except ValueError as e:
        return ValidationResult.failure(str(e), ErrorKind.PARSE)

    checked = validate_lvm_layout(layout)
    if not checked.ok:
        return ValidationResult(error=checked.error)

    return ValidationResult.success(
        BootdiskOptions(selected_disks=tuple(selected), filesystem=fstype, layout=layout)
    )


def validate_timezone(
    candidate: TimezoneInput, locales: LocaleInfo
) -> ValidationResult[TimezoneOptions]:
    if candidate.timezone not in selectable_timezones(locales, candidate.country_code):
        return ValidationResult.failure(
            f"timezone {candidate.timezone} does not belong to "
            f"country '{candidate.country_code}'"
        )
    if locales.kmap and candidate.keyboard_layout not in locales.kmap:
        return ValidationResult.failure(
            f"unknown keyboard layout '{candidate.keyboard_layout}'"
        )
    return ValidationResult.success(
        TimezoneOptions(
            country_code=candidate.country_code,
            timezone=candidate.timezone,
            keyboard_layout=candidate.keyboard_layout,
        )
    )


def validate_password(candidate: PasswordInput) -> ValidationResult[PasswordOptions]:
    if len(candidate.root_password) < MIN_PASSWORD_LENGTH:
        return ValidationResult.failure("password too short")
    if candidate.root_password != candidate.confirm_password:
        return ValidationResult.failure("passwords do not match")
    if candidate.admin_email.endswith(RESERVED_EMAIL_SUFFIX):
        return ValidationResult.failure("invalid email address")
    return ValidationResult.success(
        PasswordOptions(
            root_password=candidate.root_password,
            admin_email=candidate.admin_email,
        )
    )


def validate_network(candidate: NetworkInput) -> ValidationResult[NetworkOptions]:
    if not candidate.interface_name:
        return ValidationResult.failure("no management interface selected")

    try:
        address = parse_cidr(candidate.address)
    except ValueError as e:
        return ValidationResult.failure(
            f"invalid host address: {e}", ErrorKind.PARSE
        )
    try:
        gateway = parse_ip(candidate.gateway)
    except ValueError as e:
        return ValidationResult.failure(
            f"invalid gateway address: {e}", ErrorKind.PARSE
        )
    try:
        dns_server = parse_ip(candidate.dns_server)
    except ValueError as e:
        return ValidationResult.failure(
            f"invalid DNS server address: {e}", ErrorKind.PARSE
        )

    if address.version != gateway.version:
        return ValidationResult.failure(
            "host and gateway IP address version must not differ"
        )
    if address.version != dns_server.version:
        return ValidationResult.failure(
            "host and DNS IP address version must not differ"
        )
    fqdn = candidate.fqdn.strip()
    # Debian does not allow purely numeric hostnames
    if fqdn and fqdn.isascii() and fqdn.isdigit():
        return ValidationResult.failure("hostname cannot be purely numeric")
    if not fqdn:
        return ValidationResult.failure("hostname cannot be empty")

    return ValidationResult.success(
        NetworkOptions(
            interface_name=candidate.interface_name,
            fqdn=fqdn,
            address=address,
            gateway=gateway,
            dns_server=dns_server,
        )
    )
