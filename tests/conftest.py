"""Shared pytest fixtures."""
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from jax_fluid.core.grid import Grid
from jax_fluid.solvers.time_controller import TimeController


@pytest.fixture
def controller():
    """Controller with the construction defaults on a small 3D grid."""
    return TimeController(grid_resolution=(8, 8, 8), dimensionality=3)


@pytest.fixture
def make_controller():
    """Factory for controllers on a small 3D grid with stability overrides."""
    def make(**kwargs):
        return TimeController(grid_resolution=(8, 8, 8), dimensionality=3, **kwargs)
    return make


@pytest.fixture
def grid_2d():
    return Grid(resolution=(16, 16, 1), dimensionality=2)


@pytest.fixture
def grid_3d():
    return Grid(resolution=(8, 8, 8), dimensionality=3)


@pytest.fixture
def sim_config():
    """Minimal 2D advection config as loaded from YAML."""
    return {
        "grid": {"resolution": [16, 16, 1], "dimensionality": 2},
        "time": {
            "dt": 0.1,
            "dt_min": "1e-2",
            "dt_max": 0.4,
            "cfl_number": 0.5,
            "frame_length": 1.0,
        },
        "solver": {"type": "upwind"},
        "initial": {
            "velocity": [1.0, 0.5, 0.0],
            "blob": {"center": [8.0, 8.0, 0.0], "width": 2.0},
        },
        "run": {"frames": 3},
    }
