from __future__ import annotations

from enum import Enum
from typing import Callable

_BLEND_POINT = 0.3
_BLEND_VALUE = 0.5


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def linear(t: float) -> float:
    return t


def cubic_in_out(t: float) -> float:
    """Symmetric cubic ease-in-out."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def quintic_in_out(t: float) -> float:
    """Symmetric quintic ease-in-out; flatter at the ends than cubic."""
    if t < 0.5:
        return 16 * t * t * t * t * t
    return 1 - (-2 * t + 2) ** 5 / 2


def cinematic(t: float) -> float:
    """Fast-in, slow-out curve for fly-ins.

    Half of the move is covered in the first 30% of the timeline (quadratic
    ease-in), the rest is a long quartic settle. Both segments meet at
    (0.3, 0.5).
    """
    if t < _BLEND_POINT:
        u = t / _BLEND_POINT
        return _BLEND_VALUE * u * u
    u = (t - _BLEND_POINT) / (1 - _BLEND_POINT)
    return _BLEND_VALUE + (1 - _BLEND_VALUE) * (1 - (1 - u) ** 4)


class Easing(str, Enum):
    CINEMATIC = "cinematic"
    CUBIC = "cubic"
    QUINTIC = "quintic"
    LINEAR = "linear"


EASING_FUNCTIONS: dict[Easing, Callable[[float], float]] = {
    Easing.CINEMATIC: cinematic,
    Easing.CUBIC: cubic_in_out,
    Easing.QUINTIC: quintic_in_out,
    Easing.LINEAR: linear,
}


def parse_easing(name: str | Easing) -> Easing:
    try:
        return Easing(name)
    except ValueError:
        accepted = ", ".join(e.value for e in Easing)
        raise ValueError(f"Unknown easing '{name}'. Use one of: {accepted}.") from None


def resolve_easing(name: str | Easing) -> Callable[[float], float]:
    return EASING_FUNCTIONS[parse_easing(name)]
