"""Main simulation orchestrator."""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import jax.numpy as jnp

from jax_fluid.core.grid import Grid
from jax_fluid.core.state import FluidState
from jax_fluid.input_validation import validate_finite
from jax_fluid.solvers.base import Solver
from jax_fluid.solvers.time_controller import FramePhase, TimeController

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimestepRecord:
    """Timestep taken by one substep."""

    frame: int        # Frame the substep belongs to
    substep: int      # Index of the substep within its frame
    dt: float
    time_total: float  # Controller time after the substep
    locked: bool      # dt was fixed by a frame split


@dataclass
class Simulation:
    """Drives the adapt -> integrate -> advance loop.

    The time controller picks dt from the current peak velocity, the solver
    integrates the fields over dt, and the controller then accounts for the
    substep and detects frame boundaries.
    """

    grid: Grid
    solver: Solver
    time_controller: TimeController
    state: Optional[FluidState] = None

    history: List[TimestepRecord] = field(default_factory=list)
    _substep_in_frame: int = field(default=0, init=False, repr=False)

    def initialize(self, initial_state: Optional[FluidState] = None,
                   velocity: Optional[tuple] = None,
                   density_init: Optional[Callable] = None) -> None:
        """Initialize simulation state.

        Args:
            initial_state: Use this state as is
            velocity: Uniform velocity (vx, vy, vz) for the whole grid
            density_init: Callable (x, y, z) -> density over cell-index grids
        """
        if initial_state is not None:
            self.state = initial_state
            return

        state = FluidState.zeros(self.grid)
        if velocity is not None:
            state = state.replace(
                velocity=jnp.broadcast_to(jnp.asarray(velocity, dtype=float),
                                          self.grid.shape + (3,))
            )
        if density_init is not None:
            x, y, z = jnp.meshgrid(
                *(jnp.arange(n) * self.grid.dx for n in self.grid.shape),
                indexing="ij",
            )
            state = state.replace(density=density_init(x, y, z))
        validate_finite(state.velocity, "initial velocity")
        validate_finite(state.density, "initial density")
        self.state = state

    def step(self) -> FluidState:
        """Advance simulation by one substep."""
        if self.state is None:
            raise RuntimeError("Simulation not initialized; call initialize() first")

        tc = self.time_controller
        frame = tc.frame
        dt = tc.adapt_timestep(self.state.max_velocity())
        locked = tc.dt_locked
        self.state = self.solver.step_checked(self.state, dt, self.grid)
        phase = tc.advance_substep()

        self.history.append(TimestepRecord(
            frame=frame,
            substep=self._substep_in_frame,
            dt=dt,
            time_total=tc.time_total,
            locked=locked,
        ))
        if phase is FramePhase.AT_BOUNDARY:
            # drop the frame-fit overshoot accumulated in solver time
            self.state = self.state.replace(time=tc.time_total)
            log.info(
                f"Frame {tc.frame} done: {self._substep_in_frame + 1} substeps, "
                f"t={tc.time_total:.6g}"
            )
            self._substep_in_frame = 0
        else:
            self._substep_in_frame += 1
        return self.state

    def run_frames(self, n_frames: int,
                   callback: Optional[Callable[[int, FluidState], None]] = None,
                   on_substep: Optional[Callable[[FluidState], None]] = None,
                   ) -> FluidState:
        """Run until n_frames more frames have completed.

        Args:
            n_frames: Number of frames to simulate
            callback: Called as callback(frame, state) after each frame
            on_substep: Called as on_substep(state) after every substep
        """
        target = self.time_controller.frame + n_frames
        while self.time_controller.frame < target:
            frame_before = self.time_controller.frame
            self.step()
            if on_substep is not None:
                on_substep(self.state)
            if callback is not None and self.time_controller.frame > frame_before:
                callback(self.time_controller.frame, self.state)
        return self.state

    @classmethod
    def from_config(cls, config: dict) -> "Simulation":
        """Create Simulation from configuration dictionary."""
        grid = Grid.from_config(config["grid"])
        solver = Solver.create(config.get("solver", {"type": "upwind"}))
        time_controller = TimeController.from_config(config)

        sim = cls(grid=grid, solver=solver, time_controller=time_controller)
        initial = config.get("initial", {})
        velocity = initial.get("velocity")
        sim.initialize(
            velocity=tuple(float(v) for v in velocity) if velocity is not None else None,
            density_init=_gaussian_blob(grid, initial["blob"]) if "blob" in initial else None,
        )
        return sim

    @classmethod
    def from_yaml(cls, path: str) -> "Simulation":
        """Create Simulation from YAML config file."""
        from jax_fluid.config.loader import load_config
        config = load_config(path)
        return cls.from_config(config)


def _gaussian_blob(grid: Grid, blob: dict) -> Callable:
    """Density initializer for a Gaussian blob with center and width from config."""
    center = [float(c) for c in blob.get("center", [n * grid.dx / 2 for n in grid.shape])]
    width = float(blob.get("width", grid.dx))
    amplitude = float(blob.get("amplitude", 1.0))

    def density_init(x, y, z):
        r2 = (x - center[0])**2 + (y - center[1])**2 + (z - center[2])**2
        return amplitude * jnp.exp(-r2 / (2 * width**2))

    return density_init
