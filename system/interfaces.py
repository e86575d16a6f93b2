# system/interfaces.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional, List

SYS_NET = "/sys/class/net"


@dataclass
class InterfaceInfo:
    name: str
    operstate: str          # "up" | "down" | "unknown"
    mac: str

    def display_str(self) -> str:
        return f"{self.name:<12} {self.operstate.upper():<6}  {self.mac or '-'}"


def _read_sysfs(iface: str, attr: str, default: Optional[str] = None) -> Optional[str]:
    path = os.path.join(SYS_NET, iface, attr)
    try:
        with open(path) as f:
            return f.read().strip()
    except OSError:
        return default


def get_interface_info(iface: str) -> InterfaceInfo:
    return InterfaceInfo(
        name=iface,
        operstate=_read_sysfs(iface, "operstate", "unknown") or "unknown",
        mac=_read_sysfs(iface, "address", "") or "",
    )


def list_interfaces(exclude_lo: bool = True) -> List[InterfaceInfo]:
    """Return all interfaces from /sys/class/net, sorted by name."""
    try:
        ifaces = sorted(os.listdir(SYS_NET))
    except OSError:
        return []
    result = []
    for name in ifaces:
        if exclude_lo and name == "lo":
            continue
        result.append(get_interface_info(name))
    return result
