"""Fireflies: window, frame clock and entry point."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable

import pygame

from .canvas import Canvas
from .constants import FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE
from .errors import SurfaceAllocationFailure
from .log import configure_logging, get_logger
from .ui.light_field import LightField, LightFieldConfig

logger = get_logger(__name__)

FrameCallback = Callable[[float], None]


@dataclass
class Viewport:
    """Current window size in pixels."""

    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @classmethod
    def from_display(cls) -> Viewport:
        info = pygame.display.Info()
        return cls(info.current_w, info.current_h)


class DisplayCanvas(Canvas):
    """Canvas over the pygame window; resizing re-opens the display mode."""

    def __init__(self, size: tuple[int, int], flags: int = pygame.RESIZABLE) -> None:
        self.flags = flags
        super().__init__(self._allocate(*size))

    def _allocate(self, width: int, height: int) -> pygame.Surface:
        try:
            return pygame.display.set_mode((width, height), self.flags)
        except pygame.error as exc:
            raise SurfaceAllocationFailure(width, height, str(exc)) from exc


class PygameFrameClock:
    """Runs one pending frame callback per display refresh.

    ``request_frame`` replaces any callback not yet run, so at most one
    frame is ever queued.
    """

    def __init__(self, fps: int = FPS) -> None:
        self.fps = fps
        self.running = False
        self.on_resize: Callable[[int, int], None] | None = None
        self._clock = pygame.time.Clock()
        self._pending: FrameCallback | None = None

    @property
    def pending(self) -> FrameCallback | None:
        return self._pending

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def stop(self) -> None:
        self.running = False

    def run(self) -> None:
        self.running = True
        while self.running:
            self.poll_events()
            if not self.running:
                break
            self.step()

    def poll_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.VIDEORESIZE and self.on_resize is not None:
                self.on_resize(event.w, event.h)

    def step(self) -> None:
        """Run the pending frame, present it and wait for the next refresh."""
        callback, self._pending = self._pending, None
        if callback is not None:
            callback(pygame.time.get_ticks())
        pygame.display.flip()
        self._clock.tick(self.fps)


class FireflyApp:
    """Wires the window, frame clock and light field together."""

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        fullscreen: bool = False,
        fps: int = FPS,
        seed: int | None = None,
        config: LightFieldConfig | None = None,
    ) -> None:
        pygame.init()
        pygame.display.set_caption(TITLE)

        if fullscreen:
            self.viewport = Viewport.from_display()
            flags = pygame.FULLSCREEN
        else:
            self.viewport = Viewport(width or SCREEN_WIDTH, height or SCREEN_HEIGHT)
            flags = pygame.RESIZABLE

        self.canvas = DisplayCanvas(self.viewport.size, flags)
        self.clock = PygameFrameClock(fps)
        self.clock.on_resize = self._on_resize
        self.field = LightField(
            self.canvas, self.viewport, self.clock, config=config, seed=seed,
        )

    def _on_resize(self, width: int, height: int) -> None:
        self.viewport.width = width
        self.viewport.height = height
        self.field.on_resize(width, height)

    def run(self) -> None:
        logger.info(
            "Starting %dx%d at %d fps (seed %s)",
            self.viewport.width, self.viewport.height, self.clock.fps, self.field.seed,
        )
        try:
            self.field.on_init()
            self.clock.run()
        finally:
            pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drifting fireflies over a tinted backdrop")
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH, help="window width in pixels")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT, help="window height in pixels")
    parser.add_argument("--fullscreen", action="store_true", help="cover the whole display")
    parser.add_argument("--fps", type=int, default=FPS, help="frame rate cap")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible layout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="console log verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the fireflies command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if args.fps <= 0:
        parser.error("--fps must be positive")

    configure_logging(args.log_level)
    app = FireflyApp(
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
        fps=args.fps,
        seed=args.seed,
    )
    app.run()


if __name__ == "__main__":
    main()
