"""Volume state of audio sinks and sources, fanned out to subscribers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)

VOLUME_NORMAL = 0x10000


def average_volume(channel_volumes: Iterable[int]) -> float:
    """Mean of raw channel volumes as a fraction of the normal volume."""
    volumes = list(channel_volumes)
    if not volumes:
        return 0.0
    return (sum(volumes) // len(volumes)) / VOLUME_NORMAL


class DeviceKind(Enum):
    DEFAULT_SINK = "default-sink"
    DEFAULT_SOURCE = "default-source"
    NAMED_SINK = "named-sink"
    NAMED_SOURCE = "named-source"


@dataclass(frozen=True)
class PulseAudioDevice:
    """A sink or source, either the current default or one by name."""

    kind: DeviceKind
    name: str | None = None

    @classmethod
    def default_sink(cls) -> PulseAudioDevice:
        return cls(DeviceKind.DEFAULT_SINK)

    @classmethod
    def default_source(cls) -> PulseAudioDevice:
        return cls(DeviceKind.DEFAULT_SOURCE)

    @classmethod
    def named_sink(cls, name: str) -> PulseAudioDevice:
        return cls(DeviceKind.NAMED_SINK, name)

    @classmethod
    def named_source(cls, name: str) -> PulseAudioDevice:
        return cls(DeviceKind.NAMED_SOURCE, name)


@dataclass(frozen=True)
class VInfo:
    """Volume fraction and mute state of a device."""

    vol: float = 0.0
    is_muted: bool = False


Callback = Callable[[VInfo], Any]


@dataclass
class VolumeRegistry:
    """Caches volume per device and notifies the callbacks watching it."""

    default_sink: str | None = None
    default_source: str | None = None
    _count: int = 0
    _cbs: dict[int, Callback] = field(default_factory=dict)
    _device_map: dict[PulseAudioDevice, set[int]] = field(default_factory=dict)
    _sinks: dict[str, VInfo] = field(default_factory=dict)
    _sources: dict[str, VInfo] = field(default_factory=dict)

    def set_default_sink(self, name: str) -> None:
        self.default_sink = name

    def set_default_source(self, name: str) -> None:
        self.default_source = name

    def _call_device(self, device: PulseAudioDevice, vinfo: VInfo) -> None:
        for key in list(self._device_map.get(device, ())):
            cb = self._cbs.get(key)
            if cb is not None:
                cb(vinfo)

    def call(self, device: PulseAudioDevice, vinfo: VInfo) -> None:
        """Record new volume info for a named device and notify watchers."""
        if device.kind is DeviceKind.NAMED_SINK:
            if self.default_sink is not None and self.default_sink == device.name:
                self._call_device(PulseAudioDevice.default_sink(), vinfo)
            self._sinks[device.name] = vinfo
        elif device.kind is DeviceKind.NAMED_SOURCE:
            if self.default_source is not None and self.default_source == device.name:
                self._call_device(PulseAudioDevice.default_source(), vinfo)
            self._sources[device.name] = vinfo
        else:
            raise ValueError(f"updates must name a device, got {device.kind.value}")
        self._call_device(device, vinfo)

    def _cached(self, device: PulseAudioDevice) -> VInfo | None:
        if device.kind is DeviceKind.DEFAULT_SINK:
            return self._sinks.get(self.default_sink) if self.default_sink else None
        if device.kind is DeviceKind.DEFAULT_SOURCE:
            return self._sources.get(self.default_source) if self.default_source else None
        if device.kind is DeviceKind.NAMED_SINK:
            return self._sinks.get(device.name)
        return self._sources.get(device.name)

    def add_cb(self, cb: Callback, device: PulseAudioDevice) -> int:
        """Subscribe to a device; known volume info is sent right away."""
        key = self._count
        self._count += 1
        cached = self._cached(device)
        if cached is not None:
            cb(cached)
        self._cbs[key] = cb
        self._device_map.setdefault(device, set()).add(key)
        return key

    def remove_cb(self, key: int) -> None:
        self._cbs.pop(key, None)
        for keys in self._device_map.values():
            keys.discard(key)