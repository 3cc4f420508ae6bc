"""Numerical constants for timestep control and vector arithmetic.

The epsilon values are tuned for "regular" frame rates (around 30 frames per
time unit). Very short or very long frames may need different values.
"""

from typing import Final

# Vector norm snapping and frame-boundary detection
VECTOR_EPSILON: Final[float] = 1e-6

# Guards the CFL division when the velocity field is at rest
CFL_EPSILON: Final[float] = 1e-5

# Overshoot added when fitting a step to the frame boundary
FRAME_FIT_EPSILON: Final[float] = 1e-4

# Frame-fitting thresholds
SNAP_FACTOR: Final[float] = 1.05   # within 5% of the boundary: take the remainder
SPLIT_FACTOR: Final[float] = 1.25  # step much larger than what remains: halve it

# Controller defaults
DEFAULT_DT: Final[float] = 1.0
DEFAULT_DT_MIN: Final[float] = 1.0
DEFAULT_DT_MAX: Final[float] = 1.0
DEFAULT_CFL_NUMBER: Final[float] = 1000.0
DEFAULT_FRAME_LENGTH: Final[float] = 1.0
