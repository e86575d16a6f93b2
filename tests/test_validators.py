import ipaddress
import pytest
from options import GIB, MIB, Disk, FsType, LvmLayout, defaults_for
from validators import (
    BootdiskInput, ErrorKind, NetworkInput, PasswordInput, TimezoneInput,
    check_min_requirements, parse_cidr, parse_size, validate_bootdisk,
    validate_lvm_layout, validate_network, validate_password, validate_timezone,
)

DISK = Disk("/dev/vda", 16 * GIB)


def _bootdisk(**overrides):
    fields = dict(
        disk_paths=("/dev/vda",),
        filesystem="ext4",
        total_size="16",
        swap_size="0.00390625",
        max_root_size="0",
        max_data_size="0",
        min_free_space="0.015625",
    )
    fields.update(overrides)
    return BootdiskInput(**fields)


def _network(**overrides):
    fields = dict(
        interface_name="eth0",
        fqdn="node1.example.com",
        address="10.0.0.5/24",
        gateway="10.0.0.1",
        dns_server="10.0.0.1",
    )
    fields.update(overrides)
    return NetworkInput(**fields)


# -- Hardware precondition ---------------------------------------------------

def test_no_disks_fails_min_requirements():
    ok, msg = check_min_requirements([])
    assert not ok
    assert "no disks" in msg.lower()

def test_one_disk_meets_min_requirements():
    ok, msg = check_min_requirements([DISK])
    assert ok and msg == ""

# -- Sizes -------------------------------------------------------------------

def test_parse_size_gib():
    assert parse_size("16") == 16 * GIB
    assert parse_size("2.5") == 2 * GIB + 512 * MIB
    assert parse_size(" 0.00390625 ") == 4 * MIB

def test_parse_size_rounds_down_to_whole_bytes():
    assert parse_size("0.1") == 107374182

@pytest.mark.parametrize("text", ["", "abc", "1,5", "inf", "NaN"])
def test_parse_size_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_size(text)

def test_parse_size_rejects_negative():
    with pytest.raises(ValueError, match="negative"):
        parse_size("-1")

def test_parse_size_rejects_huge_exponent():
    with pytest.raises(ValueError, match="too large"):
        parse_size("1e999999")

def test_bootdisk_huge_exponent_is_parse_error():
    result = validate_bootdisk(_bootdisk(total_size="1e999999"), [DISK])
    assert not result.ok
    assert result.error.kind is ErrorKind.PARSE

# -- Bootdisk ----------------------------------------------------------------

def test_valid_bootdisk_defaults():
    result = validate_bootdisk(_bootdisk(), [DISK])
    assert result.ok
    assert result.value.layout == defaults_for(DISK)
    assert result.value.filesystem is FsType.EXT4

def test_bootdisk_requires_a_disk():
    result = validate_bootdisk(_bootdisk(disk_paths=()), [DISK])
    assert not result.ok
    assert result.error.reason == "no disk selected"

def test_bootdisk_rejects_unknown_disk():
    result = validate_bootdisk(_bootdisk(disk_paths=("/dev/sdz",)), [DISK])
    assert not result.ok
    assert "/dev/sdz" in result.error.reason

def test_bootdisk_rejects_duplicate_disk():
    result = validate_bootdisk(_bootdisk(disk_paths=("/dev/vda", "/dev/vda")), [DISK])
    assert not result.ok

def test_bootdisk_rejects_unknown_filesystem():
    result = validate_bootdisk(_bootdisk(filesystem="btrfs"), [DISK])
    assert not result.ok
    assert "btrfs" in result.error.reason

def test_bootdisk_size_parse_error_kind():
    result = validate_bootdisk(_bootdisk(swap_size="lots"), [DISK])
    assert not result.ok
    assert result.error.kind is ErrorKind.PARSE

def test_bootdisk_swap_and_free_exceed_total():
    result = validate_bootdisk(_bootdisk(total_size="1", swap_size="1"), [DISK])
    assert not result.ok
    assert "exceed the total size" in result.error.reason

def test_bootdisk_total_exceeds_disk():
    result = validate_bootdisk(_bootdisk(total_size="17"), [DISK])
    assert not result.ok
    assert "capacity" in result.error.reason

def test_bootdisk_no_disk_reported_before_size_rules():
    result = validate_bootdisk(_bootdisk(disk_paths=(), total_size="999"), [DISK])
    assert result.error.reason == "no disk selected"

def test_bootdisk_layout_uses_first_selected_disk():
    second = Disk("/dev/vdb", 32 * GIB)
    result = validate_bootdisk(
        _bootdisk(disk_paths=("/dev/vdb", "/dev/vda"), total_size="20"), [DISK, second]
    )
    assert result.ok
    assert result.value.layout.disk == second
    assert [d.path for d in result.value.selected_disks] == ["/dev/vdb", "/dev/vda"]

@pytest.mark.parametrize("total,swap,free", [
    (16 * GIB, 4 * MIB, 16 * MIB),
    (8 * GIB, 8 * GIB - 1, 1),
    (GIB, 0, 0),
])
def test_accepted_layouts_hold_size_invariant(total, swap, free):
    layout = LvmLayout(disk=DISK, total_size=total, swap_size=swap, min_free_space=free)
    result = validate_lvm_layout(layout)
    assert result.ok
    assert swap + free <= total <= DISK.size_bytes

def test_layout_rejects_negative_sizes():
    layout = LvmLayout(disk=DISK, total_size=GIB, swap_size=-1)
    assert not validate_lvm_layout(layout).ok

# -- Timezone ----------------------------------------------------------------

def test_timezone_in_country(locales):
    result = validate_timezone(TimezoneInput("at", "Europe/Vienna", "de"), locales)
    assert result.ok
    assert result.value.timezone == "Europe/Vienna"

def test_timezone_from_other_country_rejected(locales):
    result = validate_timezone(TimezoneInput("at", "Europe/Berlin", "de"), locales)
    assert not result.ok

def test_utc_always_valid(locales):
    assert validate_timezone(TimezoneInput("at", "UTC", "de"), locales).ok

def test_country_without_zones_accepts_utc(locales):
    assert validate_timezone(TimezoneInput("aq", "UTC", "en-us"), locales).ok

def test_unknown_keyboard_layout_rejected(locales):
    result = validate_timezone(TimezoneInput("at", "UTC", "klingon"), locales)
    assert not result.ok
    assert "keyboard" in result.error.reason

# -- Password ----------------------------------------------------------------

def test_password_too_short():
    result = validate_password(PasswordInput("abcd", "abcd", "a@b.com"))
    assert not result.ok
    assert result.error.reason == "password too short"

def test_password_length_five_accepted():
    result = validate_password(PasswordInput("abcde", "abcde", "a@b.com"))
    assert result.ok
    assert result.value.root_password == "abcde"
    assert result.value.admin_email == "a@b.com"

def test_password_mismatch():
    result = validate_password(PasswordInput("abcde", "abcdX", "a@b.com"))
    assert result.error.reason == "passwords do not match"

def test_password_reserved_email():
    result = validate_password(PasswordInput("abcde", "abcde", "a@b.invalid"))
    assert result.error.reason == "invalid email address"

def test_password_first_failing_rule_wins():
    result = validate_password(PasswordInput("abc", "xyz", "a@b.invalid"))
    assert result.error.reason == "password too short"

def test_password_options_drop_confirmation():
    result = validate_password(PasswordInput("abcde", "abcde", "a@b.com"))
    assert not hasattr(result.value, "confirm_password")

# -- Network -----------------------------------------------------------------

def test_valid_network():
    result = validate_network(_network())
    assert result.ok
    assert result.value.address == ipaddress.ip_interface("10.0.0.5/24")
    assert result.value.gateway == ipaddress.ip_address("10.0.0.1")

def test_valid_ipv6_network():
    result = validate_network(
        _network(address="2001:db8::5/64", gateway="2001:db8::1", dns_server="2001:db8::53")
    )
    assert result.ok
    value = result.value
    assert value.address.version == value.gateway.version == value.dns_server.version == 6

def test_numeric_fqdn_rejected():
    result = validate_network(_network(fqdn="12345"))
    assert not result.ok
    assert result.error.reason == "hostname cannot be purely numeric"

def test_empty_fqdn_rejected():
    assert not validate_network(_network(fqdn="")).ok

def test_blank_fqdn_rejected():
    result = validate_network(_network(fqdn="   "))
    assert not result.ok
    assert result.error.reason == "hostname cannot be empty"

def test_fqdn_is_stripped():
    result = validate_network(_network(fqdn=" node1.example.com "))
    assert result.value.fqdn == "node1.example.com"

def test_gateway_family_mismatch():
    result = validate_network(_network(gateway="2001:db8::1"))
    assert result.error.reason == "host and gateway IP address version must not differ"

def test_dns_family_mismatch():
    result = validate_network(_network(dns_server="2001:db8::53"))
    assert result.error.reason == "host and DNS IP address version must not differ"

def test_gateway_mismatch_reported_before_dns_and_fqdn():
    result = validate_network(
        _network(gateway="2001:db8::1", dns_server="2001:db8::53", fqdn="123")
    )
    assert "gateway" in result.error.reason

@pytest.mark.parametrize("field,value", [
    ("address", "10.0.0.5"),
    ("address", "10.0.0.300/24"),
    ("address", "10.0.0.5/33"),
    ("gateway", "not-an-ip"),
    ("dns_server", ""),
])
def test_parse_errors_have_parse_kind(field, value):
    result = validate_network(_network(**{field: value}))
    assert not result.ok
    assert result.error.kind is ErrorKind.PARSE

def test_parse_error_beats_family_rules():
    result = validate_network(_network(address="2001:db8::5/64", dns_server="bogus"))
    assert result.error.kind is ErrorKind.PARSE

def test_missing_interface_rejected():
    assert not validate_network(_network(interface_name="")).ok

def test_parse_cidr_keeps_host():
    iface = parse_cidr("10.0.0.5/24")
    assert str(iface.ip) == "10.0.0.5"
    assert iface.network.prefixlen == 24
