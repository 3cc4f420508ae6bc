"""Three-component vector value type and field magnitude helpers."""

import math
from dataclasses import dataclass
from typing import Tuple, Union

import jax.numpy as jnp
from jax import Array

from jax_fluid.constants import VECTOR_EPSILON

Scalar = Union[int, float]


@dataclass(frozen=True)
class Vec3:
    """Immutable 3-vector with float components."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        """Component-wise product with a Vec3, or scaling by a scalar."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        return Vec3(self.x / other, self.y / other, self.z / other)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def scale(self, k: Scalar) -> "Vec3":
        return Vec3(self.x * k, self.y * k, self.z * k)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def minimum(self, other: "Vec3") -> "Vec3":
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def maximum(self, other: "Vec3") -> "Vec3":
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def abs(self) -> "Vec3":
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def sum(self) -> float:
        return self.x + self.y + self.z

    def norm_squared(self) -> float:
        return self.dot(self)

    def norm(self) -> float:
        """Length of the vector, snapped to exactly 0 or 1 within VECTOR_EPSILON."""
        ls = self.norm_squared()
        if ls <= VECTOR_EPSILON * VECTOR_EPSILON:
            return 0.0
        if abs(ls - 1.0) < VECTOR_EPSILON * VECTOR_EPSILON:
            return 1.0
        return math.sqrt(ls)

    def normalized(self) -> "Vec3":
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.norm()
        if length == 0.0:
            return Vec3()
        return self / length

    def project_normal_to(self, n: "Vec3") -> "Vec3":
        """Project into the plane normal to ``n``, which must have unit length."""
        return self - n * self.dot(n)

    def orthogonal(self) -> "Vec3":
        """Unit vector orthogonal to this one."""
        components = (abs(self.x), abs(self.y), abs(self.z))
        max_index = components.index(max(components))
        # cross with an axis other than the dominant one
        axis = [0.0, 0.0, 0.0]
        axis[(max_index + 1) % 3] = 1.0
        return self.cross(Vec3(*axis)).normalized()

    def to_angles(self) -> Tuple[float, float]:
        """Polar coordinates ``(phi, theta)``, phi in [0, 2pi), theta in [0, pi]."""
        if abs(self.y) < VECTOR_EPSILON:
            theta = math.pi / 2
        elif abs(self.x) < VECTOR_EPSILON and abs(self.z) < VECTOR_EPSILON:
            theta = 0.0 if self.y >= 0 else math.pi
        else:
            theta = math.atan(math.sqrt(self.x * self.x + self.z * self.z) / self.y)
        if theta < 0:
            theta += math.pi

        if abs(self.x) < VECTOR_EPSILON:
            phi = math.pi / 2
        else:
            phi = math.atan(self.z / self.x)
        if phi < 0:
            phi += math.pi
        if abs(self.z) < VECTOR_EPSILON:
            phi = 0.0 if self.x >= 0 else math.pi
        elif self.z < 0:
            phi += math.pi
        return phi, theta

    def reflect(self, n: "Vec3") -> "Vec3":
        """Reflect about the plane with unit normal ``n``."""
        nn = -n if self.dot(n) > 0 else n
        return self - nn * (2 * self.dot(nn))

    def refract(self, normal: "Vec3", n_t: float, n_air: float) -> "Vec3":
        """Refract through a surface; zero vector on total internal reflection."""
        eta = n_air / n_t
        n = -self.dot(normal)
        tt = 1 + eta * eta * (n * n - 1)
        if tt < 0:
            return Vec3()
        tt = eta * n - math.sqrt(tt)
        return self * eta + normal * tt

    def as_array(self) -> Array:
        return jnp.array([self.x, self.y, self.z])

    @classmethod
    def from_array(cls, a) -> "Vec3":
        return cls(float(a[0]), float(a[1]), float(a[2]))


def magnitude(field: Array) -> Array:
    """Pointwise magnitude of a vector field with trailing axis of size 3."""
    return jnp.sqrt(jnp.sum(field**2, axis=-1))


def max_magnitude(field: Array) -> float:
    """Largest vector magnitude in a field, as a Python float.

    This is the ``max_velocity_magnitude`` fed to the time controller.
    """
    if field.size == 0:
        return 0.0
    return float(jnp.max(magnitude(field)))
