"""Simulation state container."""

from dataclasses import dataclass
import jax
import jax.numpy as jnp
from jax import Array

from jax_fluid.core.grid import Grid
from jax_fluid.core.vector import max_magnitude


@dataclass(frozen=True)
class FluidState:
    """Complete field state at a single time."""

    density: Array    # Passive scalar (nx, ny, nz)
    velocity: Array   # Velocity field (nx, ny, nz, 3)

    # Metadata
    time: float       # Solver time; Simulation resyncs it to the controller at frame boundaries
    step: int

    @classmethod
    def zeros(cls, grid: Grid) -> "FluidState":
        """Create a zero-initialized state."""
        return cls(
            density=jnp.zeros(grid.shape),
            velocity=jnp.zeros(grid.shape + (3,)),
            time=0.0,
            step=0,
        )

    def max_velocity(self) -> float:
        """Peak velocity magnitude, unscaled by dt."""
        return max_magnitude(self.velocity)

    def replace(self, **kwargs) -> "FluidState":
        """Return new FluidState with specified fields replaced."""
        from dataclasses import replace as dc_replace
        return dc_replace(self, **kwargs)


# Register FluidState as a JAX pytree for JIT compatibility
def _state_flatten(state):
    children = (state.density, state.velocity, state.time, state.step)
    aux_data = None
    return children, aux_data


def _state_unflatten(aux_data, children):
    density, velocity, time, step = children
    return FluidState(density=density, velocity=velocity, time=time, step=step)


jax.tree_util.register_pytree_node(FluidState, _state_flatten, _state_unflatten)
