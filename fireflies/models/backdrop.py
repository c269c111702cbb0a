"""Static background wash: a tinted fill with large, faint lights baked in."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from ..canvas import BlendMode, Canvas
from ..constants import (
    BACKDROP_ALPHA_RANGE,
    BACKDROP_BAND_SPREAD,
    BACKDROP_COUNT_FACTOR,
    BACKDROP_RADIUS_RANGE,
    BACKDROP_SOFTNESS_RANGE,
    BASE_COLOR,
    PALETTE,
)
from ..log import get_logger
from ..mathutils import random_value
from .light import Light, LightConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class BackdropConfig:
    base_color: str = BASE_COLOR
    count_factor: float = BACKDROP_COUNT_FACTOR
    radius_range: tuple[float, float] = BACKDROP_RADIUS_RANGE
    alpha_range: tuple[float, float] = BACKDROP_ALPHA_RANGE
    softness_range: tuple[float, float] = BACKDROP_SOFTNESS_RANGE
    band_spread: float = BACKDROP_BAND_SPREAD  # Max vertical offset from the centre line
    palette: tuple[str, ...] = PALETTE


class Backdrop:
    """Rendered once for the viewport size it was given; later resizes are ignored."""

    def __init__(
        self,
        size: tuple[int, int],
        rng: random.Random,
        config: BackdropConfig | None = None,
    ) -> None:
        self.config = config or BackdropConfig()
        self.width, self.height = size
        self.light_count = math.floor(self.config.count_factor * self.width)
        self.composite = self._render(rng)

    @property
    def base_color(self) -> str:
        return self.config.base_color

    def _render(self, rng: random.Random) -> Canvas:
        cfg = self.config
        composite = Canvas.create(self.width, self.height)
        composite.fill_rect(cfg.base_color)
        composite.blend_mode = BlendMode.LIGHTER

        center_y = self.height / 2
        for _ in range(self.light_count):
            light = Light(
                LightConfig(
                    radius=random_value(rng, *cfg.radius_range),
                    alpha=random_value(rng, *cfg.alpha_range),
                    color=random_value(rng, cfg.palette),
                    softness=random_value(rng, *cfg.softness_range),
                    twinkle=False,
                ),
                rng,
            )
            light.position = (
                random_value(rng, self.width),
                center_y + random_value(rng, -cfg.band_spread, cfg.band_spread),
            )
            light.draw(composite)

        logger.info(
            "Rendered %dx%d backdrop with %d ambient lights",
            self.width, self.height, self.light_count,
        )
        return composite

    def draw(self, canvas: Canvas) -> None:
        canvas.draw_image(self.composite, 0, 0)
