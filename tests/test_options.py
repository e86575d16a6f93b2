import dataclasses
import ipaddress
import pytest
from options import (
    GIB, MIB, BootdiskOptions, Configuration, CountryInfo, Disk, FsType,
    LocaleInfo, PasswordOptions, WizardStep, defaults_for, format_gib,
    format_size, selectable_timezones, sorted_countries,
    sorted_keyboard_layouts, to_summary,
)

def test_defaults_for_16g_disk():
    layout = defaults_for(Disk("/dev/vda", 17179869184))
    assert layout.min_free_space == 16777216
    assert layout.swap_size == 4194304
    assert layout.total_size == 17179869184
    assert layout.max_root_size == 0
    assert layout.max_data_size == 0

@pytest.mark.parametrize("size", [1, 7, 64 * MIB, 128 * MIB])
def test_min_free_space_small_disk_is_one_eighth(size):
    assert defaults_for(Disk("/dev/sda", size)).min_free_space == size // 8

@pytest.mark.parametrize("size", [128 * MIB + 1, 2 * GIB, 4096 * GIB])
def test_min_free_space_large_disk_is_16m(size):
    assert defaults_for(Disk("/dev/sda", size)).min_free_space == 16 * MIB

def test_disk_requires_capacity():
    with pytest.raises(ValueError):
        Disk("/dev/sda", 0)

def test_disk_is_immutable():
    disk = Disk("/dev/sda", GIB)
    with pytest.raises(dataclasses.FrozenInstanceError):
        disk.size_bytes = 2 * GIB

def test_bootdisk_defaults_from_disk():
    disk = Disk("/dev/sda", 8 * GIB)
    opts = BootdiskOptions.defaults_from(disk)
    assert opts.selected_disks == (disk,)
    assert opts.filesystem is FsType.EXT4
    assert opts.layout == defaults_for(disk)

def test_configuration_defaults():
    config = Configuration.defaults_from(Disk("/dev/sda", 8 * GIB))
    assert config.timezone.timezone == "Europe/Vienna"
    assert config.password.admin_email.endswith(".invalid")
    assert config.network.address == ipaddress.ip_interface("192.168.100.2/24")

def test_password_not_in_repr():
    assert "hunter22" not in repr(PasswordOptions(root_password="hunter22"))

def test_wizard_step_order():
    assert list(WizardStep) == sorted(WizardStep)
    assert WizardStep.LICENSE < WizardStep.BOOTDISK < WizardStep.SUMMARY
    assert WizardStep.NETWORK.title == "Network"

def test_format_size():
    assert format_size(16 * GIB) == "16.00 GiB"
    assert format_size(4 * MIB) == "4.00 MiB"
    assert format_size(512) == "512 B"

def test_format_gib_is_exact():
    assert format_gib(16 * GIB) == "16"
    assert format_gib(4 * MIB) == "0.00390625"
    assert format_gib(0) == "0"

def test_timezones_sorted_with_utc_last():
    locales = LocaleInfo(
        countries={"de": CountryInfo("Germany")},
        cczones={"de": ["Europe/Busingen", "Europe/Berlin"]},
        kmap={},
    )
    assert selectable_timezones(locales, "de") == [
        "Europe/Berlin", "Europe/Busingen", "UTC",
    ]

def test_country_without_zones_offers_utc():
    locales = LocaleInfo(countries={"aq": CountryInfo("Antarctica")}, cczones={}, kmap={})
    assert selectable_timezones(locales, "aq") == ["UTC"]

def test_utc_is_not_duplicated():
    locales = LocaleInfo(countries={}, cczones={"xx": ["UTC", "Etc/GMT"]}, kmap={})
    assert selectable_timezones(locales, "xx") == ["Etc/GMT", "UTC"]

def test_sorted_countries_and_layouts(locales):
    assert [cc for _, cc in sorted_countries(locales)] == ["aq", "at", "de"]
    assert sorted_keyboard_layouts(locales) == [("German", "de"), ("U.S. English", "en-us")]

def test_summary_order_and_no_password():
    config = Configuration.defaults_from(Disk("/dev/vda", 16 * GIB))
    config = dataclasses.replace(
        config, password=PasswordOptions(root_password="s3cr3t-pw", admin_email="a@b.com")
    )
    summary = to_summary(config)
    labels = [label for label, _ in summary]
    assert labels[0] == "Bootdisks"
    assert labels.index("Filesystem") < labels.index("Country") < labels.index("Administrator email")
    assert labels[-1] == "Hostname (FQDN)"
    values = dict(summary)
    assert values["Bootdisks"] == "/dev/vda"
    assert values["Total size"] == "16.00 GiB"
    assert values["Max root size"] == "unlimited"
    assert values["Administrator email"] == "a@b.com"
    assert values["Host IP (CIDR)"] == "192.168.100.2/24"
    assert all("s3cr3t-pw" not in v for _, v in summary)
    assert to_summary(config) == summary
