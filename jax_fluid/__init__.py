"""JAX-Fluid: frame-synchronous adaptive timestepping for grid fluid solvers."""

__version__ = "0.1.0"

# Core classes
from jax_fluid.core.vector import Vec3
from jax_fluid.core.grid import Grid
from jax_fluid.core.state import FluidState
from jax_fluid.core.simulation import Simulation

# Timestep control
from jax_fluid.solvers.time_controller import TimeController, FramePhase, InvalidTimestep

# Errors
from jax_fluid.input_validation import ValidationError, InvalidDimensionality

# Submodules for qualified imports
from jax_fluid import core
from jax_fluid import solvers

__all__ = [
    # Core classes
    "Vec3",
    "Grid",
    "FluidState",
    "Simulation",
    # Timestep control
    "TimeController",
    "FramePhase",
    "InvalidTimestep",
    # Errors
    "ValidationError",
    "InvalidDimensionality",
    # Submodules
    "core",
    "solvers",
]
