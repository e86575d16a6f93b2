# handoff.py
from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Union

from options import Configuration
from logger import log

HANDOFF_PATH = Path("/run/installer/install-config.yaml")


def config_to_dict(config: Configuration, reboot_after_install: bool) -> dict:
    """Plain-typed view of the finished configuration for the install stage."""
    boot = config.bootdisk
    layout = boot.layout
    return {
        "bootdisk": {
            "disks": [d.path for d in boot.selected_disks],
            "filesystem": boot.filesystem.value,
            "lvm": {
                "total_size": layout.total_size,
                "swap_size": layout.swap_size,
                "max_root_size": layout.max_root_size,
                "max_data_size": layout.max_data_size,
                "min_free_space": layout.min_free_space,
            },
        },
        "timezone": {
            "country": config.timezone.country_code,
            "timezone": config.timezone.timezone,
            "keyboard": config.timezone.keyboard_layout,
        },
        "password": {
            "root_password": config.password.root_password,
            "email": config.password.admin_email,
        },
        "network": {
            "interface": config.network.interface_name,
            "fqdn": config.network.fqdn,
            "address": str(config.network.address),
            "gateway": str(config.network.gateway),
            "dns_server": str(config.network.dns_server),
        },
        "reboot_after_install": reboot_after_install,
    }


def write_install_config(
    config: Configuration,
    reboot_after_install: bool,
    path: Union[str, Path] = HANDOFF_PATH,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # Holds the root password, so never world readable
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        yaml.safe_dump(
            config_to_dict(config, reboot_after_install), f,
            default_flow_style=False, sort_keys=False,
        )
    os.chmod(path, 0o600)
    log.info("Wrote install configuration to %s", path)
    return path
