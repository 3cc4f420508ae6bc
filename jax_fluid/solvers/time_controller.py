"""Adaptive, frame-synchronous timestep control.

The controller owns all temporal state of a simulation run. A driver calls
``adapt_timestep`` before integrating the fields and ``advance_substep``
afterwards::

    while running:
        tc.adapt_timestep(state.max_velocity())
        state = solver.advance(state, tc.dt, grid)
        tc.advance_substep()

Timesteps are bounded by the CFL condition and fitted so that every frame
ends exactly on its boundary without a tiny trailing substep.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from jax_fluid.constants import (
    VECTOR_EPSILON,
    CFL_EPSILON,
    FRAME_FIT_EPSILON,
    SNAP_FACTOR,
    SPLIT_FACTOR,
    DEFAULT_DT,
    DEFAULT_DT_MIN,
    DEFAULT_DT_MAX,
    DEFAULT_CFL_NUMBER,
    DEFAULT_FRAME_LENGTH,
)
from jax_fluid.input_validation import (
    ValidationError,
    validate_dimensionality,
    validate_grid_resolution,
    validate_non_negative,
    validate_positive,
)

log = logging.getLogger(__name__)

TIME_CONFIG_KEYS = ("dt", "dt_min", "dt_max", "cfl_number", "frame_length")


class InvalidTimestep(RuntimeError):
    """Raised when an adapted timestep falls to or below half of dt_min.

    This indicates a broken stability configuration and is not recoverable.
    """
    pass


class FramePhase(enum.Enum):
    """Position of the accumulated frame time relative to the frame boundary."""

    WITHIN_FRAME = "within_frame"
    AT_BOUNDARY = "at_boundary"


@dataclass
class TimeController:
    """Manages adaptive timestepping and frame bookkeeping.

    Attributes:
        grid_resolution: Number of cells along x, y, z
        dimensionality: 2 or 3
        use_4th_dimension: Treat the 3D grid as a 4D grid
        dt: Current timestep
        dt_min: Lower clamp for the CFL timestep
        dt_max: Upper clamp for the CFL timestep
        cfl_number: Allowed advection distance per step, in multiples of dt
        frame_length: Simulated time covered by one output frame
        dt_locked: Skip the next adaptation (second half of a split frame)
        time_elapsed_in_frame: Time accumulated since the last frame boundary
        time_total: Total simulated time
        frame: Number of completed frames
    """

    grid_resolution: Tuple[int, int, int]
    dimensionality: int
    use_4th_dimension: bool = False

    dt: float = DEFAULT_DT
    dt_min: float = DEFAULT_DT_MIN
    dt_max: float = DEFAULT_DT_MAX
    cfl_number: float = DEFAULT_CFL_NUMBER
    frame_length: float = DEFAULT_FRAME_LENGTH

    dt_locked: bool = field(default=False, init=False)
    time_elapsed_in_frame: float = field(default=0.0, init=False)
    time_total: float = field(default=0.0, init=False)
    frame: int = field(default=0, init=False)

    def __post_init__(self):
        validate_dimensionality(self.dimensionality, self.use_4th_dimension)
        validate_grid_resolution(self.grid_resolution)
        self.grid_resolution = tuple(int(n) for n in self.grid_resolution)
        for name in ("dt", "dt_min", "dt_max", "cfl_number", "frame_length"):
            value = float(getattr(self, name))
            validate_positive(value, name)
            setattr(self, name, value)

    @property
    def phase(self) -> FramePhase:
        """Frame phase of the accumulated time.

        A frame is complete once the elapsed time reaches the frame length,
        up to ``boundary_tolerance``. Frame fitting overshoots the boundary by
        ``FRAME_FIT_EPSILON``, which is well above the tolerance.
        """
        if self.time_elapsed_in_frame + self.boundary_tolerance > self.frame_length:
            return FramePhase.AT_BOUNDARY
        return FramePhase.WITHIN_FRAME

    @property
    def boundary_tolerance(self) -> float:
        """Roundoff tolerance of the frame-boundary test.

        An unfitted step leaves at least dt_min of the frame, so the tolerance
        stays below dt_min / 2.
        """
        return min(VECTOR_EPSILON, self.dt_min / 2)

    @property
    def frame_progress(self) -> float:
        """Fraction of the current frame already simulated."""
        return self.time_elapsed_in_frame / self.frame_length

    def advance_substep(self) -> FramePhase:
        """Account for one integrated substep of length ``dt``.

        Returns:
            AT_BOUNDARY if this substep completed a frame, else WITHIN_FRAME
        """
        self.time_elapsed_in_frame += self.dt
        self.time_total += self.dt

        phase = self.phase
        if phase is FramePhase.AT_BOUNDARY:
            self.frame += 1
            # re-calc total time, prevents drift
            self.time_total = self.frame * self.frame_length
            self.time_elapsed_in_frame = 0.0
            self.dt_locked = False
            log.debug(f"Frame {self.frame} complete at t={self.time_total:.6g}")
        return phase

    def adapt_timestep(self, max_velocity_magnitude: float) -> float:
        """Choose the next timestep from the current peak velocity.

        Args:
            max_velocity_magnitude: Largest velocity magnitude in the field,
                not yet scaled by dt

        Returns:
            The committed timestep

        Raises:
            ValidationError: If the velocity is negative or non-finite
            InvalidTimestep: If the resulting dt is at or below dt_min / 2
        """
        max_vel = float(max_velocity_magnitude)
        validate_non_negative(max_vel, "max_velocity_magnitude")

        if not self.dt_locked:
            self.dt = self._fit_to_frame(self._cfl_timestep(max_vel))

        if self.dt <= self.dt_min / 2:
            raise InvalidTimestep(
                f"Invalid dt={self.dt:.6g} encountered (dt_min={self.dt_min:.6g}) "
                f"at frame {self.frame}, elapsed {self.time_elapsed_in_frame:.6g} "
                f"of {self.frame_length:.6g}"
            )
        return self.dt

    def _cfl_timestep(self, max_vel: float) -> float:
        # one-step-lagged estimate: scale velocity by the previous dt
        effective_speed = max_vel * self.dt
        dt = self.dt * self.cfl_number / (effective_speed + CFL_EPSILON)
        return max(min(dt, self.dt_max), self.dt_min)

    def _fit_to_frame(self, dt: float) -> float:
        remaining = self.frame_length - self.time_elapsed_in_frame
        elapsed = self.time_elapsed_in_frame

        if elapsed + dt * SNAP_FACTOR > self.frame_length:
            return remaining + FRAME_FIT_EPSILON

        if (elapsed + dt + self.dt_min > self.frame_length
                or elapsed + dt * SPLIT_FACTOR > self.frame_length):
            # two medium steps instead of a large one and a tiny one
            self.dt_locked = True
            log.debug(
                f"Splitting remainder {remaining:.6g} of frame {self.frame} "
                f"into two substeps"
            )
            return (remaining + FRAME_FIT_EPSILON) * 0.5

        return dt

    def summary(self) -> Dict[str, Any]:
        """Plain-dict snapshot of the temporal state."""
        return {
            "frame": self.frame,
            "time_total": self.time_total,
            "time_elapsed_in_frame": self.time_elapsed_in_frame,
            "dt": self.dt,
            "dt_locked": self.dt_locked,
        }

    @classmethod
    def from_config(cls, config: dict) -> "TimeController":
        """Create TimeController from a config with ``grid`` and ``time`` sections."""
        grid_config = config.get("grid", {})
        time_kwargs = {}
        for key, value in config.get("time", {}).items():
            if key not in TIME_CONFIG_KEYS:
                raise ValidationError(
                    f"Unknown time config key '{key}', expected one of {TIME_CONFIG_KEYS}"
                )
            # YAML may load numbers in exponent notation as strings
            try:
                time_kwargs[key] = float(value)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"time config key '{key}' must be a number, got {value!r}"
                ) from None
        return cls(
            grid_resolution=tuple(grid_config["resolution"]),
            dimensionality=int(grid_config.get("dimensionality", 3)),
            use_4th_dimension=bool(grid_config.get("use_4th_dimension", False)),
            **time_kwargs,
        )
