"""Host diagnostics snapshot (CPU, memory, network, uptime) via psutil"""

import platform
import socket
import time
from typing import Any, Dict, List

import psutil

from jarvis.formatting import format_bytes


def _network_interfaces() -> List[Dict[str, Any]]:
    """Non-loopback interfaces that have at least one address"""
    interfaces = []
    for name, addresses in psutil.net_if_addrs().items():
        mac = next((a.address for a in addresses if a.family == psutil.AF_LINK), None)
        entries = []
        for addr in addresses:
            if addr.family == socket.AF_INET:
                family = "IPv4"
            elif addr.family == socket.AF_INET6:
                family = "IPv6"
            else:
                continue
            if addr.address.startswith("127.") or addr.address == "::1":
                continue
            entries.append({"address": addr.address, "family": family, "mac": mac})
        if entries:
            interfaces.append({"name": name, "addresses": entries})
    return interfaces


def _load_average() -> List[float]:
    try:
        return [round(value, 2) for value in psutil.getloadavg()]
    except (AttributeError, OSError):
        return [0.0, 0.0, 0.0]


def system_diagnostics() -> Dict[str, Any]:
    """
    Collect a point-in-time snapshot of the host

    Returns:
        Dictionary with hostname, platform, arch, release, uptime, loadAverage,
        cpu (cores, model, averageUsage, per-core details), memory (total,
        used, free, usagePercent) and network interfaces
    """
    per_core = psutil.cpu_percent(interval=None, percpu=True) or [0.0]
    model = platform.processor() or platform.machine() or "Unknown"
    try:
        frequency = psutil.cpu_freq()
    except (NotImplementedError, OSError, FileNotFoundError):
        frequency = None
    speed = f"{int(frequency.current)} MHz" if frequency else "unknown"

    memory = psutil.virtual_memory()
    uptime_hours = (time.time() - psutil.boot_time()) / 3600

    return {
        "hostname": socket.gethostname(),
        "platform": platform.system().lower(),
        "arch": platform.machine(),
        "release": platform.release(),
        "uptime": f"{uptime_hours:.2f} hours",
        "loadAverage": _load_average(),
        "cpu": {
            "cores": len(per_core),
            "model": model,
            "averageUsage": f"{sum(per_core) / len(per_core):.2f}%",
            "details": [
                {"core": index, "model": model, "speed": speed, "usage": f"{usage:.2f}%"}
                for index, usage in enumerate(per_core)
            ],
        },
        "memory": {
            "total": format_bytes(memory.total),
            "used": format_bytes(memory.total - memory.available),
            "free": format_bytes(memory.available),
            "usagePercent": f"{memory.percent:.2f}%",
        },
        "network": _network_interfaces(),
    }
