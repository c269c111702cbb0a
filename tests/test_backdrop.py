import pytest

from fireflies.canvas import Canvas
from fireflies.errors import InvalidParameter
from fireflies.models.backdrop import Backdrop, BackdropConfig
from fireflies.models.light import Light


def test_ambient_light_count_scales_with_width(rng):
    backdrop = Backdrop((800, 60), rng)
    assert backdrop.light_count == 40
    assert backdrop.composite.size == (800, 60)


def test_ambient_lights_are_not_retained(rng):
    backdrop = Backdrop((200, 60), rng)
    for value in vars(backdrop).values():
        assert not isinstance(value, Light)
        if isinstance(value, (list, tuple)):
            assert not any(isinstance(item, Light) for item in value)


def test_composite_starts_from_base_color(rng):
    backdrop = Backdrop((50, 40), rng, BackdropConfig(count_factor=0))
    assert backdrop.light_count == 0
    assert tuple(backdrop.composite.surface.get_at((25, 20))) == (12, 0, 0, 255)
    assert backdrop.base_color == "#0C0000"


def test_ambient_lights_only_brighten_the_base(rng):
    backdrop = Backdrop((100, 100), rng, BackdropConfig(count_factor=0.2))
    surface = backdrop.composite.surface
    for point in [(0, 0), (50, 50), (99, 99)]:
        color = surface.get_at(point)
        assert color.r >= 12
        assert color.a == 255


def test_draw_blits_composite_at_origin(rng):
    backdrop = Backdrop((60, 40), rng)
    target = Canvas.create(60, 40)
    backdrop.draw(target)
    for point in [(0, 0), (30, 20), (59, 39)]:
        assert target.surface.get_at(point) == backdrop.composite.surface.get_at(point)


def test_bad_light_aborts_construction(rng):
    with pytest.raises(InvalidParameter):
        Backdrop((100, 40), rng, BackdropConfig(palette=("not-a-colour",)))


def test_same_seed_gives_same_composite():
    import random

    a = Backdrop((80, 40), random.Random(5)).composite.surface
    b = Backdrop((80, 40), random.Random(5)).composite.surface
    assert all(a.get_at((x, 20)) == b.get_at((x, 20)) for x in range(0, 80, 7))
