# system/disks.py
from __future__ import annotations
import os
from typing import List, Optional
from options import Disk
from logger import log

SYS_BLOCK = "/sys/block"
SECTOR_SIZE = 512   # /sys/block/<dev>/size is always in 512-byte units

# Virtual and optical devices are never install targets
_SKIP_PREFIXES = ("loop", "ram", "zram", "sr", "fd", "dm-", "md", "nbd")


def _read_sysfs(dev: str, attr: str, default: Optional[str] = None) -> Optional[str]:
    path = os.path.join(SYS_BLOCK, dev, attr)
    try:
        with open(path) as f:
            return f.read().strip()
    except OSError:
        return default


def get_disk(dev: str) -> Optional[Disk]:
    size_str = _read_sysfs(dev, "size")
    if not size_str or not size_str.isdigit():
        log.debug("No size for block device %s", dev)
        return None
    size = int(size_str) * SECTOR_SIZE
    if size <= 0:
        log.debug("Skipping empty block device %s", dev)
        return None
    return Disk(path=f"/dev/{dev}", size_bytes=size)


def list_disks() -> List[Disk]:
    """Return all installable disks from /sys/block, sorted by device name."""
    try:
        devs = sorted(os.listdir(SYS_BLOCK))
    except OSError:
        return []
    result = []
    for name in devs:
        if name.startswith(_SKIP_PREFIXES):
            continue
        disk = get_disk(name)
        if disk is not None:
            result.append(disk)
    log.info("Found %d disks", len(result))
    return result
