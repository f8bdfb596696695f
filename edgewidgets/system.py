"""Memory, CPU, battery and disk readings for ring widgets."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class MemoryInfo:
    used: int
    total: int


@dataclass(frozen=True)
class DiskInfo:
    used: int
    total: int


def get_ram_info() -> MemoryInfo:
    """RAM in bytes; used is what is not available."""
    vm = psutil.virtual_memory()
    return MemoryInfo(used=vm.total - vm.available, total=vm.total)


def get_swap_info() -> MemoryInfo:
    sm = psutil.swap_memory()
    return MemoryInfo(used=sm.total - sm.free, total=sm.total)


def get_cpu_info(core: int | None = None) -> float:
    """CPU usage as a fraction since the previous call; 0.0 for an unknown core."""
    if core is None:
        return psutil.cpu_percent(interval=None) / 100.0
    per_core = psutil.cpu_percent(interval=None, percpu=True)
    if not 0 <= core < len(per_core):
        return 0.0
    return per_core[core] / 100.0


def get_battery_info() -> tuple[float, str]:
    """Charge fraction and state: unknown, charging, discharging, empty or full."""
    sensors = getattr(psutil, "sensors_battery", None)
    battery = sensors() if sensors is not None else None
    if battery is None:
        raise RuntimeError("no battery found")
    charge = battery.percent / 100.0
    if battery.power_plugged is None:
        state = "unknown"
    elif battery.power_plugged:
        state = "full" if battery.percent >= 100 else "charging"
    else:
        state = "empty" if battery.percent <= 0 else "discharging"
    return charge, state


def get_disk_info(partition: str) -> DiskInfo:
    """Space of the filesystem mounted at ``partition``."""
    if not any(p.mountpoint == partition for p in psutil.disk_partitions(all=True)):
        raise ValueError(f"no mounted partition at {partition!r}")
    usage = psutil.disk_usage(partition)
    return DiskInfo(used=usage.total - usage.free, total=usage.total)