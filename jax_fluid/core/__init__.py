"""Core components for JAX-Fluid simulation."""

from jax_fluid.core.vector import Vec3, magnitude, max_magnitude
from jax_fluid.core.grid import Grid
from jax_fluid.core.state import FluidState
from jax_fluid.core.simulation import Simulation, TimestepRecord

__all__ = [
    "Vec3",
    "magnitude",
    "max_magnitude",
    "Grid",
    "FluidState",
    "Simulation",
    "TimestepRecord",
]
