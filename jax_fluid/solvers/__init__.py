"""Timestep control and field integrators for JAX-Fluid simulation."""

from jax_fluid.solvers.time_controller import TimeController, FramePhase, InvalidTimestep
from jax_fluid.solvers.base import Solver, NumericalInstabilityError
from jax_fluid.solvers.advection import UpwindAdvectionSolver, upwind_rhs

__all__ = [
    "TimeController",
    "FramePhase",
    "InvalidTimestep",
    "Solver",
    "NumericalInstabilityError",
    "UpwindAdvectionSolver",
    "upwind_rhs",
]
