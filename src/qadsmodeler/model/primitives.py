"""
Solid Primitives
================
Data classes for the solids a scene is composed of.

Primitives are frozen: every edit produces a new instance via one of the
`with_*` helpers, so a scene snapshot handed to a renderer or to the exporter
never changes underneath it.

Classes:
    PrimitiveKind: Tag identifying the variant.
    Cylinder: Right circular cylinder centred on `position`.
    Sphere: Sphere centred on `position`.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Union
import math

from qadsmodeler import config
from qadsmodeler.model.geometry_primitives import Vector, ORIGIN
from qadsmodeler.model.materials import MaterialType, DEFAULT_MATERIAL
from qadsmodeler.model.orientation import Rotation, rotation_to_direction


class PrimitiveKind(StrEnum):
    CYLINDER = "cylinder"
    SPHERE = "sphere"


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not value > 0.0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Cylinder:
    """
    A cylinder whose axis passes through `position`.

    `rotation` holds three angles as multiples of pi, each in [-1, 1].
    The format only supports symmetric cylinders; `radius_top` and
    `radius_bottom` are kept equal by `with_radius`.
    """
    radius_top: float = config.DEFAULT_RADIUS
    radius_bottom: float = config.DEFAULT_RADIUS
    height: float = config.DEFAULT_HEIGHT
    position: Vector = ORIGIN
    rotation: Rotation = (0.0, 0.0, 0.0)
    material: MaterialType = DEFAULT_MATERIAL

    kind: PrimitiveKind = field(default=PrimitiveKind.CYLINDER, init=False, repr=False)

    @property
    def radius(self) -> float:
        return self.radius_top

    @property
    def direction(self) -> Vector:
        """Unit vector along the axis, derived from `rotation`."""
        return rotation_to_direction(self.rotation)

    @property
    def base(self) -> Vector:
        """Centre of the bottom cap."""
        return self.position - self.direction * (0.5 * self.height)

    @property
    def top(self) -> Vector:
        """Centre of the top cap."""
        return self.position + self.direction * (0.5 * self.height)

    def with_radius(self, radius: float) -> Cylinder:
        radius = _require_positive("Cylinder radius", radius)
        return replace(self, radius_top=radius, radius_bottom=radius)

    def with_height(self, height: float) -> Cylinder:
        return replace(self, height=_require_positive("Cylinder height", height))

    def with_position(self, position: Vector) -> Cylinder:
        return replace(self, position=position)

    def with_rotation(self, axis: int, value: float) -> Cylinder:
        if axis not in (0, 1, 2):
            raise IndexError(f"Axis index must be 0, 1 or 2, got {axis}")
        value = float(value)
        if math.isnan(value) or abs(value) > config.ROTATION_LIMIT:
            raise ValueError(
                f"Rotation must lie in [-{config.ROTATION_LIMIT}, {config.ROTATION_LIMIT}] "
                f"(multiples of pi), got {value}"
            )
        rotation = list(self.rotation)
        rotation[axis] = value
        return replace(self, rotation=(rotation[0], rotation[1], rotation[2]))

    def with_material(self, material: MaterialType) -> Cylinder:
        return replace(self, material=MaterialType(material))


@dataclass(frozen=True)
class Sphere:
    """A sphere centred on `position`."""
    radius: float = config.DEFAULT_RADIUS
    position: Vector = ORIGIN
    material: MaterialType = DEFAULT_MATERIAL

    kind: PrimitiveKind = field(default=PrimitiveKind.SPHERE, init=False, repr=False)

    def with_radius(self, radius: float) -> Sphere:
        return replace(self, radius=_require_positive("Sphere radius", radius))

    def with_position(self, position: Vector) -> Sphere:
        return replace(self, position=position)

    def with_material(self, material: MaterialType) -> Sphere:
        return replace(self, material=MaterialType(material))


# Union for type hinting
Primitive = Union[Cylinder, Sphere]
