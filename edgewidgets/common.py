"""Configuration fields shared by all widgets: placement, monitor, pinning."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from edgewidgets.shared import (
    DEFAULT_CURVE,
    U32_MAX,
    Anchor,
    ConfigError,
    Curve,
    NumOrRelative,
    parse_curve,
    parse_num_or_relative,
)

BTN_MIDDLE = 0x112
U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

T = TypeVar("T")


class Layer(Enum):
    """Layer-shell layer a surface lives on."""

    BACKGROUND = "background"
    BOTTOM = "bottom"
    TOP = "top"
    OVERLAY = "overlay"


class MonitorKind(Enum):
    ID = "id"
    NAMES = "names"
    ALL = "all"
    NAME = "name"


@dataclass(frozen=True)
class MonitorSpecifier:
    """Which monitor(s) a widget appears on."""

    kind: MonitorKind = MonitorKind.ID
    index: int = 0
    names: frozenset[str] = frozenset()
    name: str = ""

    @classmethod
    def by_id(cls, index: int) -> MonitorSpecifier:
        return cls(MonitorKind.ID, index=index)

    @classmethod
    def by_names(cls, names: Any) -> MonitorSpecifier:
        return cls(MonitorKind.NAMES, names=frozenset(names))

    @classmethod
    def all_monitors(cls) -> MonitorSpecifier:
        return cls(MonitorKind.ALL)

    @classmethod
    def by_name(cls, name: str) -> MonitorSpecifier:
        return cls(MonitorKind.NAME, name=name)


def parse_edge(value: object) -> Anchor:
    if isinstance(value, str) and value in {a.value for a in Anchor}:
        return Anchor(value)
    raise ConfigError(f"invalid edge {value!r}: edge only support: left, right, top, bottom")


def parse_layer(value: object) -> Layer:
    if isinstance(value, str) and value in {layer.value for layer in Layer}:
        return Layer(value)
    raise ConfigError(
        f"invalid layer {value!r}: layer only support: background, bottom, top, overlay"
    )


def parse_monitor_specifier(value: object) -> MonitorSpecifier:
    """Parse a monitor id, ``"*"``, a monitor name, or a list of names."""
    if isinstance(value, bool):
        raise ConfigError("a monitor ID or a list of monitor names")
    if isinstance(value, int):
        if not 0 <= value <= U64_MAX:
            raise ConfigError(f"invalid monitor ID {value}")
        return MonitorSpecifier.by_id(value)
    if isinstance(value, str):
        if value == "*":
            return MonitorSpecifier.all_monitors()
        return MonitorSpecifier.by_names([value])
    if isinstance(value, (list, tuple)):
        if not all(isinstance(name, str) for name in value):
            raise ConfigError("monitor names must be strings")
        return MonitorSpecifier.by_names(value)
    raise ConfigError("a monitor ID or a list of monitor names")


@dataclass
class Margins:
    left: NumOrRelative = field(default_factory=NumOrRelative)
    top: NumOrRelative = field(default_factory=NumOrRelative)
    right: NumOrRelative = field(default_factory=NumOrRelative)
    bottom: NumOrRelative = field(default_factory=NumOrRelative)


def _get(data: Mapping[str, Any], key: str, parser: Callable[[Any], T], default: T) -> T:
    return parser(data[key]) if key in data else default


def _require_mapping(data: object, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{what} must be an object, got {data!r}")
    return data


def parse_margins(data: object) -> Margins:
    data = _require_mapping(data, "margins")
    return Margins(
        left=_get(data, "left", parse_num_or_relative, NumOrRelative()),
        top=_get(data, "top", parse_num_or_relative, NumOrRelative()),
        right=_get(data, "right", parse_num_or_relative, NumOrRelative()),
        bottom=_get(data, "bottom", parse_num_or_relative, NumOrRelative()),
    )


def _parse_bool(value: object) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"expected a boolean, got {value!r}")
    return value


def _parse_str(value: object) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"expected a string, got {value!r}")
    return value


def _unsigned(limit: int) -> Callable[[object], int]:
    def parse(value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
            raise ConfigError(f"expected an integer in 0..={limit}, got {value!r}")
        return value

    return parse


@dataclass
class CommonConfig:
    """Placement, animation and pinning settings common to all widgets."""

    edge: Anchor = Anchor.LEFT
    position: Anchor = Anchor.LEFT
    layer: Layer = Layer.TOP
    margins: Margins = field(default_factory=Margins)
    monitor: MonitorSpecifier = field(default_factory=MonitorSpecifier)
    namespace: str = ""
    ignore_exclusive: bool = False
    transition_duration: int = 300
    animation_curve: Curve = DEFAULT_CURVE
    extra_trigger_size: NumOrRelative = field(default_factory=lambda: NumOrRelative.absolute(1.0))
    preview_size: NumOrRelative = field(default_factory=lambda: NumOrRelative.absolute(0.0))
    pin_with_key: bool = True
    pin_key: int = BTN_MIDDLE
    pinnable: bool = True
    pin_on_startup: bool = False

    def resolve_relative(self, size: tuple[int, int]) -> None:
        """Resolve relative margins and trigger size against a monitor size."""
        width, height = size
        self.margins.left.calculate_relative(width)
        self.margins.right.calculate_relative(width)
        self.margins.top.calculate_relative(height)
        self.margins.bottom.calculate_relative(height)

        if self.extra_trigger_size.is_relative():
            edge_max = width if self.edge in (Anchor.LEFT, Anchor.RIGHT) else height
            self.extra_trigger_size.calculate_relative(edge_max)


def parse_common_config(data: object) -> CommonConfig:
    """Parse the common fields of a widget object; other keys are ignored."""
    data = _require_mapping(data, "widget")
    edge = _get(data, "edge", parse_edge, Anchor.LEFT)
    return CommonConfig(
        edge=edge,
        position=_get(data, "position", parse_edge, edge),
        layer=_get(data, "layer", parse_layer, Layer.TOP),
        margins=_get(data, "margins", parse_margins, Margins()),
        monitor=_get(data, "monitor", parse_monitor_specifier, MonitorSpecifier()),
        namespace=_get(data, "namespace", _parse_str, ""),
        ignore_exclusive=_get(data, "ignore-exclusive", _parse_bool, False),
        transition_duration=_get(data, "transition-duration", _unsigned(U64_MAX), 300),
        animation_curve=_get(data, "animation-curve", parse_curve, DEFAULT_CURVE),
        extra_trigger_size=_get(
            data, "extra-trigger-size", parse_num_or_relative, NumOrRelative.absolute(1.0)
        ),
        preview_size=_get(data, "preview-size", parse_num_or_relative, NumOrRelative.absolute(0.0)),
        pinnable=_get(data, "pinnable", _parse_bool, True),
        pin_with_key=_get(data, "pin-with-key", _parse_bool, True),
        pin_key=_get(data, "pin-key", _unsigned(U32_MAX), BTN_MIDDLE),
        pin_on_startup=_get(data, "pin-on-startup", _parse_bool, False),
    )