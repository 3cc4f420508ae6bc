"""Plots of the timestep history of a run."""

from pathlib import Path
from typing import Optional, Sequence, Union
import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt

from jax_fluid.core.simulation import TimestepRecord


def plot_timestep_history(
    history: Sequence[TimestepRecord],
    save_path: Optional[Union[str, Path]] = None,
    frame_length: Optional[float] = None,
    dpi: int = 150,
) -> plt.Figure:
    """Plot dt per substep against simulated time.

    Substeps whose dt came from a frame split are drawn as hollow markers.
    Frame boundaries are drawn as vertical lines when frame_length is given.

    Args:
        history: Records collected by Simulation.step()
        save_path: File to write the figure to, None skips saving
        frame_length: Frame duration for boundary markers
        dpi: Resolution for saved figure

    Returns:
        Matplotlib Figure object
    """
    if len(history) == 0:
        raise ValueError("No timestep history to plot")

    time = np.array([r.time_total for r in history])
    dt = np.array([r.dt for r in history])
    locked = np.array([r.locked for r in history])

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(time, dt, color='0.6', linewidth=0.8)
    ax.scatter(time[~locked], dt[~locked], s=12, label='adapted')
    if np.any(locked):
        ax.scatter(time[locked], dt[locked], s=16, facecolors='none',
                   edgecolors='C3', label='split')
    if frame_length is not None:
        n_frames = int(np.ceil(time[-1] / frame_length))
        for k in range(1, n_frames + 1):
            ax.axvline(k * frame_length, color='0.85', linewidth=0.6, zorder=0)

    ax.set_xlabel('time')
    ax.set_ylabel('dt')
    ax.set_title(f'Timestep history ({len(history)} substeps)')
    ax.legend(loc='best')
    fig.tight_layout()

    if save_path is not None:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=dpi)
    return fig
