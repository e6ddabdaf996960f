"""
Geometric Primitives for the scene model and the collision engine.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space representing a position, direction or displacement.
    Immutable, so it can be shared between scene snapshots.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> Vector:
        """
        Unit vector in the same direction. A zero vector is divided anyway,
        so degenerate input shows up as NaN components instead of an error.
        """
        mag = self.magnitude
        if mag == 0.0:
            return Vector(math.nan, math.nan, math.nan)
        return Vector(self.x / mag, self.y / mag, self.z / mag)

    def rotate_x(self, angle_rad: float) -> Vector:
        """Rotate vector around X axis."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x,
            self.y * cos_a - self.z * sin_a,
            self.y * sin_a + self.z * cos_a
        )

    def rotate_y(self, angle_rad: float) -> Vector:
        """Rotate vector around Y axis."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a + self.z * sin_a,
            self.y,
            -self.x * sin_a + self.z * cos_a
        )

    def rotate_z(self, angle_rad: float) -> Vector:
        """Rotate vector around Z axis."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
            self.z
        )

    def replace_component(self, axis: int, value: float) -> Vector:
        """Return a copy with component `axis` (0=x, 1=y, 2=z) set to `value`."""
        if axis not in (0, 1, 2):
            raise IndexError(f"Axis index must be 0, 1 or 2, got {axis}")
        components = [self.x, self.y, self.z]
        components[axis] = float(value)
        return Vector(*components)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ORIGIN = Vector(0.0, 0.0, 0.0)
