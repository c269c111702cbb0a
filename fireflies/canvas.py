"""pygame drawing surface with a 2D-context style state stack.

pygame blits have no notion of a current transform, opacity or composite
mode, so :class:`Canvas` keeps one and applies it in :meth:`Canvas.draw_image`.
Only translation and uniform scaling are supported.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, replace

import numpy as np
import pygame

from .errors import SurfaceAllocationFailure

ColorStop = tuple[float, tuple[float, float, float, float]]


class BlendMode(enum.Enum):
    """How drawn pixels combine with what is already on the canvas."""

    SOURCE_OVER = "source-over"
    LIGHTER = "lighter"  # Additive


@dataclass(frozen=True)
class DrawState:
    origin: tuple[float, float] = (0.0, 0.0)
    scale: float = 1.0
    alpha: float = 1.0
    blend: BlendMode = BlendMode.SOURCE_OVER


def allocate_surface(width: int, height: int) -> pygame.Surface:
    """Create a transparent per-pixel-alpha surface."""
    if width < 0 or height < 0:
        raise SurfaceAllocationFailure(width, height, "negative size")
    try:
        return pygame.Surface((width, height), pygame.SRCALPHA)
    except (pygame.error, ValueError, MemoryError) as exc:
        raise SurfaceAllocationFailure(width, height, str(exc)) from exc


class Canvas:
    """A raster surface plus the transform/opacity/blend state used to draw on it."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self._state = DrawState()
        self._saved: list[DrawState] = []
        self._premultiplied: pygame.Surface | None = None

    @classmethod
    def create(cls, width: int, height: int) -> Canvas:
        return cls(allocate_surface(width, height))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def resize(self, width: int, height: int) -> None:
        """Replace the backing surface; contents and draw state are reset."""
        self.surface = self._allocate(width, height)
        self._premultiplied = None
        self._state = DrawState()
        self._saved.clear()

    def _allocate(self, width: int, height: int) -> pygame.Surface:
        return allocate_surface(width, height)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def global_alpha(self) -> float:
        return self._state.alpha

    @global_alpha.setter
    def global_alpha(self, value: float) -> None:
        self._state = replace(self._state, alpha=min(1.0, max(0.0, float(value))))

    @property
    def blend_mode(self) -> BlendMode:
        return self._state.blend

    @blend_mode.setter
    def blend_mode(self, mode: BlendMode) -> None:
        self._state = replace(self._state, blend=BlendMode(mode))

    def save(self) -> None:
        self._saved.append(self._state)

    def restore(self) -> None:
        if not self._saved:
            raise RuntimeError("restore() without matching save()")
        self._state = self._saved.pop()

    def translate(self, dx: float, dy: float) -> None:
        ox, oy = self._state.origin
        s = self._state.scale
        self._state = replace(self._state, origin=(ox + dx * s, oy + dy * s))

    def scale(self, factor: float) -> None:
        self._state = replace(self._state, scale=self._state.scale * factor)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self.surface.fill((0, 0, 0, 0))
        self._premultiplied = None

    def fill_rect(self, color, rect: pygame.Rect | Sequence[int] | None = None) -> None:
        self.surface.fill(pygame.Color(color), rect)
        self._premultiplied = None

    def radial_gradient(
        self, center: tuple[float, float], radius: float, stops: Sequence[ColorStop]
    ) -> None:
        """Paint a radial gradient disk.

        ``stops`` are ``(position, (r, g, b, a))`` pairs with position 0 at
        ``center`` and 1 at ``radius``; ``a`` is in [0, 1]. Pixels inside the
        disk are overwritten, pixels outside it are left alone.
        """
        if not stops:
            raise ValueError("a gradient needs at least one colour stop")
        positions = np.array([position for position, _ in stops], dtype=float)
        if np.any(np.diff(positions) < 0) or positions[0] < 0 or positions[-1] > 1:
            raise ValueError("gradient stops must be ordered positions within [0, 1]")
        colors = np.array([color for _, color in stops], dtype=float)

        width, height = self.size
        if radius <= 0 or width == 0 or height == 0:
            return

        cx, cy = center
        xs = np.arange(width) + 0.5 - cx
        ys = np.arange(height) + 0.5 - cy
        # surfarray indexes [x, y]
        distance = np.hypot(xs[:, None], ys[None, :]) / radius
        inside = distance <= 1.0
        self._premultiplied = None

        rgb = pygame.surfarray.pixels3d(self.surface)
        alpha = pygame.surfarray.pixels_alpha(self.surface)
        try:
            for channel in range(3):
                values = np.interp(distance[inside], positions, colors[:, channel])
                rgb[..., channel][inside] = np.clip(np.rint(values), 0, 255).astype(np.uint8)
            values = np.interp(distance[inside], positions, colors[:, 3])
            alpha[inside] = np.clip(np.rint(values * 255), 0, 255).astype(np.uint8)
        finally:
            # Release the pixel locks
            del rgb, alpha

    def premultiplied(self) -> pygame.Surface:
        """Return the surface with colour premultiplied by alpha.

        Computed on first use and kept until a drawing method changes this
        canvas. Writes made straight to ``surface`` are not tracked.
        """
        if self._premultiplied is None:
            if self.surface.get_flags() & pygame.SRCALPHA:
                self._premultiplied = self.surface.premul_alpha()
            else:
                self._premultiplied = self.surface
        return self._premultiplied

    def draw_image(self, image: Canvas | pygame.Surface, x: float = 0.0, y: float = 0.0) -> None:
        """Blit ``image`` with its top-left at ``(x, y)`` in the current transform."""
        state = self._state
        lighter = state.blend is BlendMode.LIGHTER
        owned = False

        if isinstance(image, Canvas):
            source = image.premultiplied() if lighter else image.surface
        elif lighter and image.get_flags() & pygame.SRCALPHA:
            source = image.premul_alpha()
            owned = True
        else:
            source = image

        if state.scale != 1.0:
            w, h = source.get_size()
            size = (max(1, round(w * state.scale)), max(1, round(h * state.scale)))
            source = pygame.transform.smoothscale(source, size)
            owned = True

        dest = (
            round(state.origin[0] + x * state.scale),
            round(state.origin[1] + y * state.scale),
        )

        if lighter:
            if state.alpha < 1.0:
                if not owned:
                    source = source.copy()
                k = round(state.alpha * 255)
                source.fill((k, k, k, k), special_flags=pygame.BLEND_RGBA_MULT)
            self.surface.blit(source, dest, special_flags=pygame.BLEND_RGBA_ADD)
        else:
            if state.alpha < 1.0:
                if not owned:
                    source = source.copy()
                source.set_alpha(round(state.alpha * 255))
            self.surface.blit(source, dest)
        self._premultiplied = None
