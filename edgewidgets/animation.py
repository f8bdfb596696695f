"""Time-based animations with easing curves that can reverse mid-way."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Iterator
from enum import Enum

from edgewidgets.shared import Curve

Clock = Callable[[], float]


def _quad_y(x: float) -> float:
    return x * (2.0 - x)


def _quad_x(y: float) -> float:
    return 1.0 - math.sqrt(1.0 - y)


def _cbrt(v: float) -> float:
    return math.copysign(abs(v) ** (1.0 / 3.0), v)


def _cubic_y(x: float) -> float:
    d = x - 1.0
    return 1.0 + d * d * d


def _cubic_x(y: float) -> float:
    return 1.0 + _cbrt(y - 1.0)


def _expo_log(x: float) -> float:
    return -math.log(1.0 - x) / (10.0 * math.log(2.0))


def _expo_pow(x: float) -> float:
    return 1.0 - 2.0 ** (-10.0 * x)


# (value for elapsed fraction, elapsed fraction for value); linear maps both ways unchanged
_CURVES: dict[Curve, tuple[Callable[[float], float], Callable[[float], float]]] = {
    Curve.EASE_QUAD: (_quad_y, _quad_x),
    Curve.EASE_CUBIC: (_cubic_y, _cubic_x),
    Curve.EASE_EXPO: (_expo_log, _expo_pow),
}


class Animation:
    """A one-way 0→1 progression over ``time_cost`` seconds."""

    def __init__(self, time_cost: float, curve: Curve, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self.start_time = clock()
        self.animation_costs = float(time_cost)
        self._curve = _CURVES.get(curve)
        self._cache_y = 0.0

    def _value_at(self, x: float) -> float:
        return x if self._curve is None else self._curve[0](x)

    def _fraction_at(self, y: float) -> float:
        return y if self._curve is None else self._curve[1](y)

    def refresh(self) -> None:
        """Recompute progress from the current time."""
        elapsed = self._clock() - self.start_time
        if self.animation_costs > 0:
            x = elapsed / self.animation_costs
        else:
            x = math.inf if elapsed >= 0 else -math.inf
        if x >= 1.0:
            self._cache_y = 1.0
        elif x <= 0.0:
            self._cache_y = 0.0
        else:
            self._cache_y = self._value_at(x)

    def flip(self) -> None:
        """Restart so that the mirrored progress continues from the current value."""
        now = self._clock()
        if now - self.start_time < self.animation_costs:
            self.start_time = now - self.animation_costs * self._fraction_at(1.0 - self.progress())
        else:
            self.start_time = now
        self.refresh()

    def progress(self) -> float:
        return self._cache_y


class ToggleDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @classmethod
    def from_bool(cls, forward: bool) -> ToggleDirection:
        return cls.FORWARD if forward else cls.BACKWARD

    def flipped(self) -> ToggleDirection:
        return ToggleDirection.BACKWARD if self is ToggleDirection.FORWARD else ToggleDirection.FORWARD


class ToggleAnimation:
    """An animation that runs forward or backward and can switch at any time."""

    def __init__(self, time_cost: float, curve: Curve, clock: Clock = time.monotonic) -> None:
        self.direction = ToggleDirection.BACKWARD
        self._base = Animation(time_cost, curve, clock)

    def refresh(self) -> None:
        self._base.refresh()

    def progress(self) -> float:
        p = self._base.progress()
        return p if self.direction is ToggleDirection.FORWARD else 1.0 - p

    def set_direction(self, to_direction: ToggleDirection) -> None:
        if self.direction is to_direction:
            return
        self._base.flip()
        self.direction = to_direction

    def flip(self) -> None:
        self.set_direction(self.direction.flipped())

    def progress_abs(self) -> float:
        return self._base.progress()

    def is_in_progress(self) -> bool:
        p = self.progress()
        return 0.0 < p < 1.0


class AnimationList:
    """A set of toggle animations refreshed together."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._items: set[ToggleAnimation] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[ToggleAnimation]:
        return iter(self._items)

    def has_in_progress(self) -> bool:
        return any(item.is_in_progress() for item in self._items)

    def new_transition(self, time_cost: int, curve: Curve) -> ToggleAnimation:
        """Create and track an animation lasting ``time_cost`` milliseconds."""
        item = ToggleAnimation(time_cost / 1000.0, curve, self._clock)
        self._items.add(item)
        return item

    def refresh(self) -> None:
        for item in self._items:
            item.refresh()

    def extend_list(self, other: AnimationList) -> None:
        self._items |= other._items

    def remove_item(self, item: ToggleAnimation) -> None:
        self._items.discard(item)


def calculate_transition(y: float, value_range: tuple[float, float]) -> float:
    """Interpolate within ``value_range`` by progress ``y``."""
    low, high = value_range
    return low + (high - low) * y