"""Computational grid description."""

from dataclasses import dataclass
from typing import Tuple

from jax_fluid.input_validation import (
    ValidationError,
    validate_dimensionality,
    validate_grid_resolution,
    validate_positive,
)


@dataclass(frozen=True)
class Grid:
    """Uniform Cartesian grid with periodic boundaries.

    2D grids are stored as 3D grids with a single cell along z. A 4D grid
    is a 3D grid with ``use_4th_dimension=True``.
    """

    resolution: Tuple[int, int, int]
    dimensionality: int = 3
    use_4th_dimension: bool = False
    spacing: float = 1.0

    def __post_init__(self):
        validate_dimensionality(self.dimensionality, self.use_4th_dimension)
        validate_grid_resolution(self.resolution)
        validate_positive(self.spacing, "spacing")
        # normalize lists from YAML into an int tuple
        object.__setattr__(self, "resolution", tuple(int(n) for n in self.resolution))
        if self.dimensionality == 2 and self.resolution[2] != 1:
            raise ValidationError(
                f"2D grids must have a single cell along z, got {self.resolution}"
            )

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.resolution

    @property
    def n_cells(self) -> int:
        nx, ny, nz = self.resolution
        return nx * ny * nz

    @property
    def dx(self) -> float:
        """Cell size, identical along every axis."""
        return self.spacing

    @classmethod
    def from_config(cls, config: dict) -> "Grid":
        """Create Grid from configuration dictionary."""
        return cls(
            resolution=tuple(config["resolution"]),
            dimensionality=int(config.get("dimensionality", 3)),
            use_4th_dimension=bool(config.get("use_4th_dimension", False)),
            spacing=float(config.get("spacing", 1.0)),
        )
