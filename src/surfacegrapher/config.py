"""
Configuration & Constants
=========================
Central registry for the plot defaults, control ranges and scene constants.

Why is this file needed?
------------------------
The scaling factors (ground size, camera distance, ...) are shared by the
model, the controller and the 3D view and must not drift apart.
"""

# --- Plot defaults ---
DEFAULT_DOMAIN_HALF_WIDTH: float = 1.0
DEFAULT_STEP_SIZE: float = 0.01

# --- Control ranges: (min, max, step) ---
DOMAIN_HALF_WIDTH_RANGE: tuple[float, float, float] = (0.1, 3.0, 0.1)
STEP_SIZE_RANGE: tuple[float, float, float] = (0.01, 1.0, 0.01)
GROUND_OFFSET_RANGE: tuple[float, float, float] = (-30.0, 0.0, 0.1)

# Slider replot debounce
PARAMETER_DEBOUNCE_MS: int = 100

# --- Sampling ---
MIN_SEGMENTS: int = 10

# --- Expressions ---
# parentheses, unary signs, exponents and call arguments count as one level each
MAX_EXPRESSION_NESTING: int = 64

# --- Ground plane ---
GROUND_SIZE_FACTOR: float = 100.0
GROUND_RESOLUTION: int = 10
GROUND_OFFSET_FACTOR: float = -5.0
DEFAULT_GROUND_COLOR: str = "#84bbfa"
GROUND_OPACITY: float = 0.5

# --- Scene ---
CAMERA_DISTANCE_FACTOR: float = 15.0
CAMERA_VIEW_ANGLE: float = 90.0
AXES_GRID_FACTOR: float = 10.0
DIRECTIONAL_LIGHT_INTENSITY: float = 2.0
SHADOWS_ENABLED: bool = True
