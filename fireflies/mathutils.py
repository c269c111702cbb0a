"""Interpolation, sampling and colour helpers used by the light layout."""

from __future__ import annotations

import math
import random
import re
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

TWO_PI = math.tau

_HEX_COLOR = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


def lerp(value: float, lo: float, hi: float) -> float:
    """Linear interpolation: 0 maps to ``lo``, 1 maps to ``hi``."""
    return lo + value * (hi - lo)


def normalize(value: float, lo: float, hi: float) -> float:
    """Inverse of :func:`lerp`."""
    return (value - lo) / (hi - lo)


def map_range(
    value: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float
) -> float:
    return lerp(normalize(value, in_lo, in_hi), out_lo, out_hi)


def random_value(rng: random.Random, lo=None, hi=None):
    """Draw a uniform sample from ``rng``.

    - no bounds: a float in [0, 1)
    - a sequence: one of its items
    - one bound: a float in [0, lo)
    - two bounds: a float in [lo, hi)
    """
    if lo is None and hi is None:
        return rng.random()
    if isinstance(lo, Sequence) and not isinstance(lo, str):
        return pick(rng, lo)
    if hi is None:
        lo, hi = 0.0, lo
    return lo + rng.random() * (hi - lo)


def pick(rng: random.Random, items: Sequence[T]) -> T:
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    return items[math.floor(rng.random() * len(items))]


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Decode ``#rrggbb`` (the ``#`` is optional) into an RGB triple."""
    match = _HEX_COLOR.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        raise ValueError(f"not a hex colour: {hex_color!r}")
    return tuple(int(part, 16) for part in match.groups())
