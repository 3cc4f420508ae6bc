"""Tests for field solvers."""
import jax.numpy as jnp
import pytest

from jax_fluid.core.grid import Grid
from jax_fluid.core.state import FluidState
from jax_fluid.solvers.base import NumericalInstabilityError, Solver
from jax_fluid.solvers.advection import UpwindAdvectionSolver, upwind_rhs


def uniform_state(grid: Grid, velocity) -> FluidState:
    state = FluidState.zeros(grid)
    density = jnp.zeros(grid.shape).at[3, 4, 0].set(1.0)
    v = jnp.broadcast_to(jnp.asarray(velocity, dtype=float), grid.shape + (3,))
    return state.replace(density=density, velocity=v)


class TestUpwindAdvection:

    def test_zero_velocity_is_stationary(self, grid_2d):
        state = uniform_state(grid_2d, (0.0, 0.0, 0.0))
        rhs = upwind_rhs(state.density, state.velocity, grid_2d.dx)
        assert jnp.allclose(rhs, 0.0)

    def test_unit_courant_number_shifts_one_cell(self, grid_2d):
        state = uniform_state(grid_2d, (1.0, 0.0, 0.0))
        new_state = UpwindAdvectionSolver().advance(state, 1.0, grid_2d)
        assert jnp.allclose(new_state.density, jnp.roll(state.density, 1, axis=0))

    def test_negative_velocity_shifts_backward(self, grid_2d):
        state = uniform_state(grid_2d, (0.0, -1.0, 0.0))
        new_state = UpwindAdvectionSolver().advance(state, 1.0, grid_2d)
        assert jnp.allclose(new_state.density, jnp.roll(state.density, -1, axis=1))

    def test_mass_conserved(self, grid_3d):
        state = FluidState.zeros(grid_3d)
        density = jnp.zeros(grid_3d.shape).at[2, 2, 2].set(3.0).at[5, 1, 7].set(1.0)
        v = jnp.broadcast_to(jnp.array([0.7, -0.4, 0.2]), grid_3d.shape + (3,))
        state = state.replace(density=density, velocity=v)
        solver = UpwindAdvectionSolver()
        for _ in range(10):
            state = solver.advance(state, 0.5, grid_3d)
        assert float(jnp.sum(state.density)) == pytest.approx(4.0, rel=1e-5)

    def test_advance_updates_metadata(self, grid_2d):
        state = uniform_state(grid_2d, (0.5, 0.0, 0.0))
        new_state = UpwindAdvectionSolver().advance(state, 0.25, grid_2d)
        assert new_state.time == pytest.approx(0.25)
        assert new_state.step == 1


class TestSolverBase:

    def test_step_checked_detects_nan(self, grid_2d):
        state = uniform_state(grid_2d, (1.0, 0.0, 0.0))
        state = state.replace(density=state.density.at[0, 0, 0].set(jnp.nan))
        with pytest.raises(NumericalInstabilityError, match="NaN detected in density"):
            UpwindAdvectionSolver().step_checked(state, 0.5, grid_2d)

    def test_step_checked_detects_inf(self, grid_2d):
        state = uniform_state(grid_2d, (1.0, 0.0, 0.0))
        state = state.replace(velocity=state.velocity.at[0, 0, 0, 1].set(jnp.inf))
        with pytest.raises(NumericalInstabilityError, match="Inf detected in velocity"):
            UpwindAdvectionSolver()._check_state(state)

    def test_create_upwind(self):
        assert isinstance(Solver.create({"type": "upwind"}), UpwindAdvectionSolver)
        assert isinstance(Solver.create({}), UpwindAdvectionSolver)

    def test_create_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown solver type"):
            Solver.create({"type": "spectral"})
