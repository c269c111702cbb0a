"""Foreground lights laid out along a sine band, plus the per-frame compositor."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Protocol

from ..canvas import BlendMode, Canvas
from ..constants import (
    FIELD_ALPHA_RANGE,
    FIELD_AMPLITUDE_FACTOR,
    FIELD_COUNT_FACTOR,
    FIELD_RADIUS_MAX,
    FIELD_RADIUS_MIN,
    FIELD_SOFTNESS_RANGE,
    FIELD_VARIANCE_RANGE,
    PALETTE,
)
from ..log import get_logger
from ..mathutils import TWO_PI, lerp, random_value
from ..models.backdrop import Backdrop, BackdropConfig
from ..models.light import Light, LightConfig

logger = get_logger(__name__)


class SizeSource(Protocol):
    width: int
    height: int


class FrameScheduler(Protocol):
    def request_frame(self, callback: Callable[[float], None]) -> None: ...


@dataclass(frozen=True)
class LightFieldConfig:
    count_factor: float = FIELD_COUNT_FACTOR
    amplitude_factor: float = FIELD_AMPLITUDE_FACTOR
    variance_range: tuple[float, float] = FIELD_VARIANCE_RANGE  # Edge, centre
    radius_min: float = FIELD_RADIUS_MIN
    radius_max: float = FIELD_RADIUS_MAX
    alpha_range: tuple[float, float] = FIELD_ALPHA_RANGE
    softness_range: tuple[float, float] = FIELD_SOFTNESS_RANGE
    palette: tuple[str, ...] = PALETTE
    backdrop: BackdropConfig = field(default_factory=BackdropConfig)


class LightField:
    """Owns the visible canvas, the backdrop and the foreground lights.

    ``viewport`` is anything with ``width``/``height``; ``clock`` is anything
    with ``request_frame(callback)``. Without a clock, frames only happen
    when :meth:`frame_tick` is called directly.
    """

    def __init__(
        self,
        canvas: Canvas,
        viewport: SizeSource,
        clock: FrameScheduler | None = None,
        config: LightFieldConfig | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        self.canvas = canvas
        self.viewport = viewport
        self.clock = clock
        self.config = config or LightFieldConfig()
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        if rng is None:
            self.seed = seed if seed is not None else random.randint(0, 2**32)
            rng = random.Random(self.seed)
        else:
            self.seed = None  # Unknown for an injected generator
        self.rng = rng

        self.backdrop: Backdrop | None = None
        self.lights: list[Light] = []

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def reset(self, width: int, height: int) -> None:
        """Replace every foreground light with a fresh band for this size."""
        cfg = self.config
        rng = self.rng
        count = math.floor(width * cfg.count_factor)
        # One wave per generation keeps the band coherent
        theta = random_value(rng, TWO_PI)
        amplitude = height * cfg.amplitude_factor
        cx = width / 2
        cy = height / 2

        lights: list[Light] = []
        for i in range(count):
            percent = i / count
            x = percent * width
            distance_to_center = 1 - abs(cx - x) / cx
            variance_range = lerp(distance_to_center, *cfg.variance_range)
            variance = random_value(rng, -variance_range, variance_range)
            offset = math.sin(theta + percent * TWO_PI) * amplitude + variance

            lights.append(
                Light(
                    LightConfig(
                        position=(x, cy + offset),
                        radius=random_value(
                            rng, cfg.radius_min, max(1, cfg.radius_max * distance_to_center)
                        ),
                        color=random_value(rng, cfg.palette),
                        alpha=random_value(rng, *cfg.alpha_range),
                        softness=random_value(rng, *cfg.softness_range),
                    ),
                    rng,
                )
            )

        self.lights = lights
        logger.info("Laid out %d lights for %dx%d", count, width, height)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def on_init(self) -> None:
        self.canvas.resize(self.viewport.width, self.viewport.height)
        self.backdrop = Backdrop(self.canvas.size, self.rng, self.config.backdrop)
        self.reset(*self.canvas.size)
        self._schedule()

    def on_resize(self, width: int, height: int) -> None:
        # Layout and backdrop stay sized for the viewport seen at init
        logger.debug("Resizing canvas to %dx%d", width, height)
        self.canvas.resize(width, height)

    def frame_tick(self, time: float, canvas: Canvas | None = None) -> None:
        """Composite one frame at ``time`` ms and request the next one."""
        target = canvas if canvas is not None else self.canvas
        try:
            target.save()
            try:
                target.clear()
                target.blend_mode = BlendMode.LIGHTER
                if self.backdrop is not None:
                    try:
                        self.backdrop.draw(target)
                    except Exception:
                        logger.exception("Backdrop draw failed, skipping it this frame")
                for light in self.lights:
                    try:
                        light.update(time)
                        light.draw(target)
                    except Exception:
                        logger.exception("Skipping light at %s this frame", light.position)
            finally:
                target.restore()
        finally:
            self._schedule()

    def _schedule(self) -> None:
        if self.clock is not None:
            self.clock.request_frame(self.frame_tick)
