"""CLI progress reporting for simulations."""

import sys
from dataclasses import dataclass, field
from typing import TextIO

from jax_fluid.solvers.time_controller import TimeController


@dataclass
class ProgressReporter:
    """Reports frame progress to stderr.

    Produces output like:
        [frame 3/10] t=3.41e+00 (34.1%) | substep 1200 | dt=4.1e-02 (locked)

    Attributes:
        n_frames: Target number of frames for percentage calculation
        output_interval: Only report every N calls (default 1 = every call)
        enabled: If False, report() does nothing
        stream: Output stream (default stderr)
    """

    n_frames: int
    output_interval: int = 1
    enabled: bool = True
    stream: TextIO = field(default_factory=lambda: sys.stderr)

    _call_count: int = field(default=0, init=False, repr=False)

    def report(self, tc: TimeController, substep: int) -> None:
        """Report current simulation progress.

        Args:
            tc: Time controller of the running simulation
            substep: Total substeps taken so far
        """
        if not self.enabled:
            return

        self._call_count += 1
        if self._call_count % self.output_interval != 0:
            return

        t = tc.time_total
        t_end = self.n_frames * tc.frame_length
        pct = (t / t_end * 100) if t_end > 0 else 0.0

        parts = [
            f"[frame {tc.frame}/{self.n_frames}]",
            f"t={t:.2e} ({pct:.1f}%)",
            f"| substep {substep}",
            f"| dt={tc.dt:.1e}",
        ]
        if tc.dt_locked:
            parts.append("(locked)")

        line = " ".join(parts)

        # Write with carriage return for in-place update
        self.stream.write(f"\r{line}")
        self.stream.flush()

    def finish(self) -> None:
        """Print final newline after progress reporting completes."""
        if self.enabled:
            self.stream.write("\n")
            self.stream.flush()
