"""Defaults shared across the firefly renderer."""

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Fireflies"

# --- Colors ---
BASE_COLOR = "#0C0000"
PALETTE: tuple[str, ...] = (
    "#4a0206",
    "#710006",
    "#bb0d1a",
    "#fa6632",
    "#cf0638",
    "#ef3e4d",
    "#fdbbc1",
)

# --- Light sprites ---
SPRITE_SCALE = 2.1  # Sprite side length as a multiple of the radius
TWINKLE_STATIC_CHANCE = 0.7
TWINKLE_SPEED_RANGE = (0.002, 0.004)  # radians per millisecond
TWINKLE_SCALE_RANGE = (0.98, 1.02)
TWINKLE_ALPHA_RANGE = (0.1, 1.0)

# --- Backdrop ---
BACKDROP_COUNT_FACTOR = 0.05
BACKDROP_RADIUS_RANGE = (200.0, 400.0)
BACKDROP_ALPHA_RANGE = (0.01, 0.05)
BACKDROP_SOFTNESS_RANGE = (0.25, 0.9)
BACKDROP_BAND_SPREAD = 200.0

# --- Foreground band ---
FIELD_COUNT_FACTOR = 0.1
FIELD_AMPLITUDE_FACTOR = 0.08
FIELD_VARIANCE_RANGE = (50.0, 200.0)
FIELD_RADIUS_MIN = 25.0
FIELD_RADIUS_MAX = 80.0
FIELD_ALPHA_RANGE = (0.05, 0.6)
FIELD_SOFTNESS_RANGE = (0.02, 0.5)
