from types import SimpleNamespace
from unittest import mock

import pytest

from edgewidgets.system import (
    DiskInfo,
    MemoryInfo,
    get_battery_info,
    get_cpu_info,
    get_disk_info,
    get_ram_info,
    get_swap_info,
)


def test_real_ram_is_consistent():
    info = get_ram_info()
    assert info.total > 0
    assert 0 <= info.used <= info.total


def test_ram_used_is_total_minus_available():
    vm = SimpleNamespace(total=1000, available=400)
    with mock.patch("edgewidgets.system.psutil.virtual_memory", return_value=vm):
        info = get_ram_info()
    assert info.total == 1000
    assert info.used + 400 == info.total


def test_swap_used_is_total_minus_free():
    sm = SimpleNamespace(total=2048, free=48)
    with mock.patch("edgewidgets.system.psutil.swap_memory", return_value=sm):
        info = get_swap_info()
    assert isinstance(info, MemoryInfo)
    assert info.total == 2048
    assert info.used + 48 == info.total


def test_real_cpu_fraction_in_range():
    get_cpu_info()
    assert 0.0 <= get_cpu_info() <= 1.0


def test_cpu_per_core_and_unknown_core():
    with mock.patch("edgewidgets.system.psutil.cpu_percent", return_value=[25.0, 75.0]):
        assert get_cpu_info(1) * 100 == pytest.approx(75.0)
        assert get_cpu_info(5) == 0.0


def test_battery_missing():
    with mock.patch("edgewidgets.system.psutil.sensors_battery", return_value=None, create=True):
        with pytest.raises(RuntimeError):
            get_battery_info()


def test_battery_discharging():
    bat = SimpleNamespace(percent=50.0, power_plugged=False)
    with mock.patch("edgewidgets.system.psutil.sensors_battery", return_value=bat, create=True):
        charge, state = get_battery_info()
    assert charge * 100 == pytest.approx(50.0)
    assert state == "discharging"


def test_battery_full_when_plugged_at_hundred():
    bat = SimpleNamespace(percent=100.0, power_plugged=True)
    with mock.patch("edgewidgets.system.psutil.sensors_battery", return_value=bat, create=True):
        charge, state = get_battery_info()
    assert charge == 1.0
    assert state == "full"


def test_disk_info_for_mounted_partition():
    parts = [SimpleNamespace(mountpoint="/boot"), SimpleNamespace(mountpoint="/data")]
    usage = SimpleNamespace(total=100, free=30)
    with mock.patch("edgewidgets.system.psutil.disk_partitions", return_value=parts), \
            mock.patch("edgewidgets.system.psutil.disk_usage", return_value=usage) as du:
        info = get_disk_info("/data")
    du.assert_called_once_with("/data")
    assert isinstance(info, DiskInfo)
    assert info.used + 30 == info.total == 100


def test_disk_info_unknown_partition():
    parts = [SimpleNamespace(mountpoint="/")]
    with mock.patch("edgewidgets.system.psutil.disk_partitions", return_value=parts):
        with pytest.raises(ValueError):
            get_disk_info("/nowhere")