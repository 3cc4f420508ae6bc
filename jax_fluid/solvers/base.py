"""Abstract base class for field integrators."""

from abc import ABC, abstractmethod
import jax.numpy as jnp
from jax_fluid.core.grid import Grid
from jax_fluid.core.state import FluidState


class NumericalInstabilityError(Exception):
    """Raised when NaN or Inf values are detected in simulation state."""
    pass


class Solver(ABC):
    """Base class for solvers that integrate the fields over one substep.

    Solvers take the timestep they are given; choosing it is the job of
    the TimeController.
    """

    @abstractmethod
    def advance(self, state: FluidState, dt: float, grid: Grid) -> FluidState:
        """Advance state by one substep of length dt."""
        raise NotImplementedError

    def step_checked(self, state: FluidState, dt: float, grid: Grid) -> FluidState:
        """Advance state by one substep with NaN/Inf checking.

        Raises:
            NumericalInstabilityError: If NaN or Inf values are detected in the result.
        """
        new_state = self.advance(state, dt, grid)
        self._check_state(new_state)
        return new_state

    def _check_state(self, state: FluidState) -> None:
        """Check state for NaN/Inf values and raise error if found."""
        fields_to_check = [
            ("density", state.density),
            ("velocity", state.velocity),
        ]
        for name, field in fields_to_check:
            if jnp.any(jnp.isnan(field)):
                raise NumericalInstabilityError(
                    f"NaN detected in {name} field at step {state.step}, t={state.time:.6e}"
                )
            if jnp.any(jnp.isinf(field)):
                raise NumericalInstabilityError(
                    f"Inf detected in {name} field at step {state.step}, t={state.time:.6e}"
                )

    @classmethod
    def create(cls, config: dict) -> "Solver":
        """Factory method to create solver from config."""
        solver_type = config.get("type", "upwind")
        if solver_type == "upwind":
            from jax_fluid.solvers.advection import UpwindAdvectionSolver
            return UpwindAdvectionSolver()
        else:
            raise ValueError(f"Unknown solver type: {solver_type}")
