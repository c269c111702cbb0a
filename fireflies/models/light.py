"""A single glowing light: a pre-rendered gradient sprite plus optional twinkle."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from ..canvas import Canvas
from ..constants import (
    SPRITE_SCALE,
    TWINKLE_ALPHA_RANGE,
    TWINKLE_SCALE_RANGE,
    TWINKLE_SPEED_RANGE,
    TWINKLE_STATIC_CHANCE,
)
from ..errors import InvalidParameter
from ..mathutils import TWO_PI, lerp, normalize, random_value, to_rgb


@dataclass(frozen=True)
class LightConfig:
    """Construction options for a :class:`Light`."""

    radius: float
    position: tuple[float, float] = (0.0, 0.0)
    color: str = "#FFFFFF"
    alpha: float = 0.5
    softness: float = 0.1
    twinkle: bool = True  # Eligible to twinkle; False always gives a static light


@dataclass
class Twinkle:
    """Oscillation state for a twinkling light."""

    phase: float  # Initial angle in radians
    speed: float  # Radians per millisecond
    scale: float = 1.0
    alpha: float = 1.0


def sprite_side(radius: float) -> int:
    """Pixel size of a light's square sprite."""
    return max(1, round(SPRITE_SCALE * radius))


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _validate(config: LightConfig) -> tuple[int, int, int]:
    radius = config.radius
    if not _is_number(radius) or radius <= 0:
        raise InvalidParameter(f"radius must be a positive number, got {radius!r}")
    if not _is_number(config.alpha) or not 0.0 <= config.alpha <= 1.0:
        raise InvalidParameter(f"alpha must be within [0, 1], got {config.alpha!r}")
    if not _is_number(config.softness) or not 0.0 < config.softness < 1.0:
        raise InvalidParameter(f"softness must be within (0, 1), got {config.softness!r}")
    try:
        return to_rgb(config.color)
    except ValueError as exc:
        raise InvalidParameter(str(exc)) from exc


class Light:
    """A glow sprite drawn at ``position``, optionally pulsing in size and opacity."""

    def __init__(self, config: LightConfig, rng: random.Random) -> None:
        self.rgb = _validate(config)
        self.position = config.position
        self._config = config
        self.sprite = self._render()

        self.twinkle: Twinkle | None = None
        if config.twinkle and random_value(rng) >= TWINKLE_STATIC_CHANCE:
            self.twinkle = Twinkle(
                phase=random_value(rng, TWO_PI),
                speed=random_value(rng, *TWINKLE_SPEED_RANGE),
            )

    # Sprite inputs are fixed once rendered
    @property
    def radius(self) -> float:
        return self._config.radius

    @property
    def color(self) -> str:
        return self._config.color

    @property
    def alpha(self) -> float:
        return self._config.alpha

    @property
    def softness(self) -> float:
        return self._config.softness

    @property
    def is_static(self) -> bool:
        return self.twinkle is None

    def _render(self) -> Canvas:
        side = sprite_side(self.radius)
        sprite = Canvas.create(side, side)
        r, g, b = self.rgb
        sprite.radial_gradient(
            (side / 2, side / 2),
            self.radius,
            [
                (0.0, (r, g, b, 0.0)),
                (self.softness, (r, g, b, self.alpha)),
                (1.0, (r, g, b, self.alpha)),
            ],
        )
        return sprite

    def update(self, time: float) -> None:
        """Advance the twinkle to ``time`` milliseconds of animation."""
        if self.twinkle is None:
            return
        theta = self.twinkle.phase + time * self.twinkle.speed
        value = normalize(math.sin(theta), -1, 1)
        self.twinkle.scale = lerp(value, *TWINKLE_SCALE_RANGE)
        self.twinkle.alpha = lerp(value, *TWINKLE_ALPHA_RANGE)

    def draw(self, canvas: Canvas) -> None:
        canvas.save()
        try:
            canvas.translate(*self.position)
            if self.twinkle is not None:
                canvas.scale(self.twinkle.scale)
                canvas.global_alpha = self.twinkle.alpha
            canvas.draw_image(self.sprite, -self.sprite.width / 2, -self.sprite.height / 2)
        finally:
            canvas.restore()
