"""Input validation utilities for simulation setup.

These functions provide runtime validation of simulation parameters
to catch configuration errors early and provide helpful error messages.
"""

import math
from typing import Sequence

import jax.numpy as jnp

Array = jnp.ndarray


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


class InvalidDimensionality(ValidationError):
    """Raised when a solver is requested with an unsupported dimensionality."""
    pass


def validate_positive(value: float, name: str) -> None:
    """Validate that a value is strictly positive.

    Args:
        value: The value to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If value <= 0, NaN or Inf
    """
    if not value > 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a scalar is finite and non-negative.

    Raises:
        ValidationError: If value < 0, NaN or Inf
    """
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")


def validate_finite(array: Array, name: str) -> None:
    """Validate that an array contains only finite values.

    Args:
        array: The array to check
        name: Array name for error messages

    Raises:
        ValidationError: If array contains NaN or Inf
    """
    if not jnp.all(jnp.isfinite(array)):
        n_nan = jnp.sum(jnp.isnan(array))
        n_inf = jnp.sum(jnp.isinf(array))
        raise ValidationError(
            f"{name} contains non-finite values: {n_nan} NaN, {n_inf} Inf"
        )


def validate_dimensionality(dim: int, use_4th_dimension: bool) -> None:
    """Validate the dimensionality encoding of a grid.

    Four-dimensional grids are stored as 3D grids with the fourth-dimension
    flag set, so ``dim == 4`` is rejected even when the flag is given.

    Raises:
        InvalidDimensionality: If dim is not 2 or 3
    """
    if dim == 4:
        raise InvalidDimensionality(
            "Don't create 4D solvers, use dimensionality=3 with "
            "use_4th_dimension=True instead."
        )
    if dim not in (2, 3):
        raise InvalidDimensionality(
            f"Only 2D and 3D solvers allowed, got dimensionality={dim}"
        )


def validate_grid_resolution(resolution: Sequence[int]) -> None:
    """Validate a three-component grid resolution.

    Raises:
        ValidationError: If resolution doesn't have three positive integers
    """
    if len(resolution) != 3:
        raise ValidationError(
            f"grid resolution must have 3 components, got {len(resolution)}"
        )
    for axis, n in zip("xyz", resolution):
        try:
            is_integer = int(n) == n
        except (TypeError, ValueError, OverflowError):
            is_integer = False
        if not is_integer or n < 1:
            raise ValidationError(
                f"grid resolution along {axis} must be a positive integer, got {n}"
            )
