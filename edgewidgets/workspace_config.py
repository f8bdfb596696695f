"""Workspace widget presets: which compositor backend feeds the widget."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from edgewidgets.shared import ConfigError

PRESET_NAMES = ("hyprland", "niri")


@dataclass(frozen=True)
class NiriConf:
    """Settings specific to the niri backend."""

    filter_empty: bool = True


def parse_niri_conf(data: object) -> NiriConf:
    """Parse the niri preset object; unknown keys are ignored."""
    if not isinstance(data, Mapping):
        raise ConfigError(f"niri preset must be an object, got {data!r}")
    filter_empty = data.get("filter-empty", True)
    if not isinstance(filter_empty, bool):
        raise ConfigError(f"filter-empty must be a boolean, got {filter_empty!r}")
    return NiriConf(filter_empty=filter_empty)


class PresetKind(Enum):
    HYPRLAND = "hyprland"
    NIRI = "niri"


@dataclass(frozen=True)
class WorkspacePreset:
    """The compositor a workspace widget talks to."""

    kind: PresetKind
    niri: NiriConf = field(default_factory=NiriConf)

    @classmethod
    def hyprland(cls) -> WorkspacePreset:
        return cls(PresetKind.HYPRLAND)

    @classmethod
    def niri_preset(cls, conf: NiriConf | None = None) -> WorkspacePreset:
        return cls(PresetKind.NIRI, conf if conf is not None else NiriConf())

    def __str__(self) -> str:
        if self.kind is PresetKind.HYPRLAND:
            return "Hyprland"
        flag = "true" if self.niri.filter_empty else "false"
        return f"Niri(filter_empty: {flag})"


def _unknown_variant(name: object) -> ConfigError:
    expected = " or ".join(f"`{n}`" for n in PRESET_NAMES)
    return ConfigError(f"unknown variant `{name}`, expected {expected}")


def parse_workspace_preset(value: object) -> WorkspacePreset:
    """Parse a preset given as a name or as an object tagged by ``type``."""
    if isinstance(value, str):
        if value == "hyprland":
            return WorkspacePreset.hyprland()
        if value == "niri":
            return WorkspacePreset.niri_preset()
        raise _unknown_variant(value)

    if not isinstance(value, Mapping):
        raise ConfigError(f"Failed to deserialize as object: invalid type {value!r}")
    if "type" not in value:
        raise ConfigError("Failed to deserialize as object: missing field `type`")
    tag = value["type"]
    if tag == "hyprland":
        return WorkspacePreset.hyprland()
    if tag == "niri":
        try:
            conf = parse_niri_conf(value)
        except ConfigError as exc:
            raise ConfigError(f"Failed to deserialize as object: {exc}") from None
        return WorkspacePreset.niri_preset(conf)
    raise ConfigError(f"Failed to deserialize as object: {_unknown_variant(tag)}")