"""Value types and parsers shared by every widget configuration."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

U32_MAX = 0xFFFF_FFFF

_RELATIVE_RE = re.compile(r"(\d+(\.\d+)?)%\s*(.*)", re.ASCII)
_U32_RE = re.compile(r"\+?[0-9]+", re.ASCII)

GENERIC_FONT_FAMILIES = frozenset({"serif", "sans-serif", "cursive", "fantasy", "monospace"})


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


class Curve(Enum):
    """Easing curve of an animation."""

    LINEAR = "linear"
    EASE_QUAD = "ease-quad"
    EASE_CUBIC = "ease-cubic"
    EASE_EXPO = "ease-expo"


DEFAULT_CURVE = Curve.EASE_CUBIC


class Anchor(Enum):
    """Screen edge a surface is attached to."""

    TOP = "top"
    LEFT = "left"
    BOTTOM = "bottom"
    RIGHT = "right"


def parse_curve(value: object) -> Curve:
    """Parse a kebab-case curve name."""
    if not isinstance(value, str):
        raise ConfigError(f"curve must be a string, got {value!r}")
    try:
        return Curve(value)
    except ValueError:
        names = ", ".join(c.value for c in Curve)
        raise ConfigError(f"unknown curve {value!r}, expected one of: {names}") from None


@dataclass
class NumOrRelative:
    """An absolute number, or a fraction of some size resolved later."""

    value: float = 0.0
    relative: bool = False

    @classmethod
    def absolute(cls, value: float) -> NumOrRelative:
        return cls(float(value), False)

    @classmethod
    def fraction(cls, ratio: float) -> NumOrRelative:
        return cls(float(ratio), True)

    def is_relative(self) -> bool:
        return self.relative

    def get_num(self) -> float:
        if self.relative:
            raise ValueError("relative, not num")
        return self.value

    def get_rel(self) -> float:
        if not self.relative:
            raise ValueError("num, not relative")
        return self.value

    def is_valid_length(self) -> bool:
        return self.value > 0.0

    def calculate_relative(self, max_value: float) -> None:
        """Turn a relative value into an absolute one, in place."""
        if self.relative:
            self.value = self.value * float(max_value)
            self.relative = False


def parse_num_or_relative(value: object) -> NumOrRelative:
    """Parse a number, or a string such as ``"40%"``."""
    if isinstance(value, bool):
        raise ConfigError(f"expected a number or a string, got {value!r}")
    if isinstance(value, (int, float)):
        return NumOrRelative.absolute(value)
    if isinstance(value, str):
        match = _RELATIVE_RE.fullmatch(value)
        if match is None:
            raise ConfigError("Input does not match the expected format.")
        return NumOrRelative.fraction(float(match.group(1)) * 0.01)
    raise ConfigError(f"expected a number or a string, got {value!r}")


@dataclass
class CommonSize:
    """Thickness and length of a widget."""

    thickness: NumOrRelative
    length: NumOrRelative

    def calculate_relative(self, monitor_size: tuple[int, int], edge: Anchor) -> None:
        width, height = monitor_size
        if edge in (Anchor.LEFT, Anchor.RIGHT):
            thickness_max, length_max = width, height
        else:
            thickness_max, length_max = height, width
        self.thickness.calculate_relative(thickness_max)
        self.length.calculate_relative(length_max)


def parse_common_size(data: object) -> CommonSize:
    if not isinstance(data, Mapping):
        raise ConfigError(f"size must be an object, got {data!r}")
    try:
        thickness = data["thickness"]
        length = data["length"]
    except KeyError as exc:
        raise ConfigError(f"missing field `{exc.args[0]}`") from None
    return CommonSize(parse_num_or_relative(thickness), parse_num_or_relative(length))


@dataclass
class KeyEventMap:
    """Commands bound to mouse button codes."""

    commands: dict[int, str] = field(default_factory=dict)

    def get(self, key: int) -> str | None:
        return self.commands.get(key)


def _parse_u32(text: str) -> int:
    if not _U32_RE.fullmatch(text):
        raise ConfigError(f"invalid key code {text!r}")
    number = int(text)
    if number > U32_MAX:
        raise ConfigError(f"key code out of range: {text!r}")
    return number


def parse_key_event_map(data: object) -> KeyEventMap:
    """Parse an object mapping key codes (as strings) to commands."""
    if not isinstance(data, Mapping):
        raise ConfigError("vec of tuples: (key: number, command: string)")
    commands: dict[int, str] = {}
    for key, command in data.items():
        if not isinstance(key, str) or not isinstance(command, str):
            raise ConfigError(f"invalid event map entry: {key!r}: {command!r}")
        commands[_parse_u32(key)] = command
    return KeyEventMap(commands)


@dataclass(frozen=True)
class FontFamily:
    """A font family: a generic family or a named one."""

    name: str
    generic: bool = False


DEFAULT_FONT_FAMILY = FontFamily("monospace", generic=True)


def parse_font_family(value: object) -> FontFamily:
    if not isinstance(value, str):
        raise ConfigError(f"font family must be a string, got {value!r}")
    return FontFamily(value, generic=value in GENERIC_FONT_FAMILIES)