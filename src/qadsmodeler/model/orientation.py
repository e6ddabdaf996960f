"""
Orientation Math
================
Conversion between the cylinder rotation fields and the axis direction
written to .qads files.

The rotation fields are Euler-like angles expressed as multiples of pi. The
axis of an unrotated cylinder points along +Y; the rotations are applied
about X, then Y, then Z. The external tool only ever sees the resulting axis
direction, so the mapping is part of the file format.

The mapping is not invertible: spinning about the resulting axis is lost, and
a Z rotation cannot be separated from an X rotation given only the direction.
`direction_to_rotation` therefore recovers X and Y only and sets Z to zero.
"""
from __future__ import annotations

import math

from qadsmodeler.model.geometry_primitives import Vector

REFERENCE_AXIS = Vector(0.0, 1.0, 0.0)

Rotation = tuple[float, float, float]


def euler_to_direction(rx: float, ry: float, rz: float) -> Vector:
    """
    Unit axis direction for rotation angles given in radians.

    Args:
        rx: Rotation about X (applied first).
        ry: Rotation about Y (applied second).
        rz: Rotation about Z (applied last).

    Returns:
        The rotated reference axis, re-normalized to absorb floating point drift.
    """
    v = REFERENCE_AXIS.rotate_x(rx).rotate_y(ry).rotate_z(rz)
    return v.normalize()


def rotation_to_direction(rotation: Rotation) -> Vector:
    """Axis direction for rotation fields stored as multiples of pi."""
    rx, ry, rz = (r * math.pi for r in rotation)
    return euler_to_direction(rx, ry, rz)


def direction_to_rotation(direction: Vector) -> Rotation:
    """
    Approximate rotation fields (multiples of pi) reproducing `direction`.

    The Z rotation is unrecoverable and always returned as 0. The direction
    does not need to be normalized; its length is ignored.
    """
    dx, dy, dz = direction.x, direction.y, direction.z
    rot_y = math.atan2(dx, dz) / math.pi
    rot_x = math.atan2(math.sqrt(dx * dx + dz * dz), dy) / math.pi
    return (rot_x, rot_y, 0.0)
