"""Diagnostics and output for JAX-Fluid simulation."""

from jax_fluid.diagnostics.progress import ProgressReporter
from jax_fluid.diagnostics.plotting import plot_timestep_history

__all__ = ["ProgressReporter", "plot_timestep_history"]
