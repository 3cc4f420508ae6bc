#!/usr/bin/env python
# scripts/run_simulation.py
"""CLI entry point for running a simulation from a YAML config."""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from jax_fluid.config.loader import load_config, merge_overrides
from jax_fluid.core.simulation import Simulation
from jax_fluid.diagnostics.progress import ProgressReporter

log = logging.getLogger(__name__)


def parse_override(text: str):
    """Parse a ``section.key=value`` override from the command line."""
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Override must look like key=value: {text}")
    key, value = text.split("=", 1)
    try:
        value = float(value)
    except ValueError:
        pass
    return key, value


def run(config: dict, n_frames: int, progress: bool, plot_path: Path = None) -> Simulation:
    """Run n_frames frames of the configured simulation.

    Returns:
        The finished Simulation
    """
    sim = Simulation.from_config(config)
    reporter = ProgressReporter(n_frames=n_frames, enabled=progress)

    sim.run_frames(
        n_frames,
        on_substep=lambda state: reporter.report(sim.time_controller, len(sim.history)),
    )
    reporter.finish()

    tc = sim.time_controller
    log.info(
        f"Finished {tc.frame} frames in {len(sim.history)} substeps, t={tc.time_total:.6g}"
    )

    if plot_path is not None:
        from jax_fluid.diagnostics.plotting import plot_timestep_history
        plot_timestep_history(sim.history, save_path=plot_path,
                              frame_length=tc.frame_length)
        log.info(f"Timestep history written to {plot_path}")
    return sim


def main():
    parser = argparse.ArgumentParser(
        description="Run an adaptive-timestep simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s examples/advection_2d.yaml
  %(prog)s examples/advection_3d.yaml --frames 20 --plot dt.png
  %(prog)s examples/advection_2d.yaml --set time.cfl_number=0.25
        """
    )
    parser.add_argument('config', type=Path, help="YAML config file")
    parser.add_argument('--frames', type=int, default=None,
                        help="Number of frames (default: run.frames from config)")
    parser.add_argument('--set', dest='overrides', type=parse_override,
                        action='append', default=[],
                        help="Override a config value, e.g. time.dt_max=0.5")
    parser.add_argument('--plot', type=Path, default=None,
                        help="Write timestep history plot to this file")
    parser.add_argument('--progress', dest='progress', action='store_true', default=True,
                        help="Show progress line (default)")
    parser.add_argument('--no-progress', dest='progress', action='store_false',
                        help="Disable progress line")
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = merge_overrides(load_config(args.config), dict(args.overrides))
    n_frames = args.frames if args.frames is not None else int(
        config.get("run", {}).get("frames", 10)
    )

    run(config, n_frames, args.progress, args.plot)
    return 0


if __name__ == '__main__':
    sys.exit(main())
