"""
Collision Detection
===================
Pairwise intersect/no-intersect tests between scene primitives.

The result only feeds a warning before export; nothing here mutates the
scene or prevents an action.

For collision purposes a cylinder is reduced to its axis segment plus one
radius. The cylinder-cylinder test goes further and compares the two
infinite lines containing the axes, so finite caps are ignored there, and
parallel cylinders compare their centre offset across the shared axis. Both are
accepted approximations of the export warning and must not be tightened
into exact segment distance without changing what users get warned about.

All comparisons are strict: touching primitives do not collide.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, product
from typing import Tuple, TYPE_CHECKING
import logging

import numpy as np

from qadsmodeler import config
from qadsmodeler.model.primitives import Cylinder, Sphere, Primitive, PrimitiveKind

if TYPE_CHECKING:
    import numpy.typing as npt
    from qadsmodeler.model.scene import Scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionPair:
    """Two colliding primitives, by identifier."""
    first: str
    second: str

    def __iter__(self):
        yield self.first
        yield self.second

    def __str__(self) -> str:
        return f"{self.first} and {self.second}"


def cylinder_axis(cylinder: Cylinder) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Axis segment of a cylinder.

    Returns:
        (start, axis) where `start` is the bottom cap centre and `axis` the
        full-length vector from bottom to top cap centre.
    """
    direction = cylinder.direction.to_array()
    center = cylinder.position.to_array()
    start = center - 0.5 * cylinder.height * direction
    end = center + 0.5 * cylinder.height * direction
    return start, end - start


def spheres_collide(a: Sphere, b: Sphere) -> bool:
    """Centre distance below the radius sum, less a small jitter margin."""
    distance = np.linalg.norm(b.position.to_array() - a.position.to_array())
    return bool(distance < a.radius + b.radius - config.SPHERE_CONTACT_EPSILON)


def cylinders_collide(a: Cylinder, b: Cylinder) -> bool:
    """
    Distance between the infinite lines carrying the two axes, compared with
    the radius sum. Nearly parallel axes compare the centre offset across the axis.
    """
    start_a, axis_a = cylinder_axis(a)
    start_b, axis_b = cylinder_axis(b)
    r_sum = a.radius + b.radius

    cross = np.cross(axis_a, axis_b)
    cross_mag = np.linalg.norm(cross)

    if cross_mag < config.PARALLEL_CROSS_TOLERANCE:
        # Not the plain centre distance: only the offset across the shared axis
        # counts, so collinear cylinders collide whatever their axial gap.
        # A zero-length axis gives NaN here and never collides.
        with np.errstate(invalid="ignore", divide="ignore"):
            axis_unit = axis_a / np.linalg.norm(axis_a)
        offset = b.position.to_array() - a.position.to_array()
        across = offset - np.dot(offset, axis_unit) * axis_unit
        return bool(np.linalg.norm(across) < r_sum)

    # Project the inter-origin vector onto the common normal
    distance = abs(np.dot(start_b - start_a, cross)) / cross_mag
    return bool(distance < r_sum)


def cylinder_sphere_collide(cylinder: Cylinder, sphere: Sphere) -> bool:
    """
    Closest point on the axis segment to the sphere centre decides which test
    applies: a radial check along the side, or a disk test at either cap.
    """
    start, axis = cylinder_axis(cylinder)
    center = sphere.position.to_array()
    axis_length_sq = np.dot(axis, axis)

    # A zero-length axis is not special-cased: t is NaN, clamps to the top
    # cap and the NaN cap tests report no collision
    with np.errstate(invalid="ignore", divide="ignore"):
        t = np.dot(center - start, axis) / axis_length_sq
    t_clamped = max(0.0, min(1.0, float(t)))

    if t_clamped == 0.0 or t_clamped == 1.0:
        cap_center = start if t_clamped == 0.0 else start + axis
        with np.errstate(invalid="ignore", divide="ignore"):
            axis_unit = axis / np.sqrt(axis_length_sq)
        offset = center - cap_center
        axial = np.dot(offset, axis_unit)
        radial = np.linalg.norm(offset - axial * axis_unit)

        if radial <= cylinder.radius_top:
            return bool(abs(axial) < sphere.radius)
        rim_distance = np.hypot(radial - cylinder.radius_top, axial)
        return bool(rim_distance < sphere.radius)

    closest = start + t_clamped * axis
    distance_to_axis = np.linalg.norm(center - closest)
    return bool(distance_to_axis < cylinder.radius + sphere.radius)


def primitives_collide(a: Primitive, b: Primitive) -> bool:
    """Dispatch on the kinds of both primitives."""
    if a.kind == PrimitiveKind.CYLINDER and b.kind == PrimitiveKind.CYLINDER:
        return cylinders_collide(a, b)
    if a.kind == PrimitiveKind.SPHERE and b.kind == PrimitiveKind.SPHERE:
        return spheres_collide(a, b)
    if a.kind == PrimitiveKind.CYLINDER and b.kind == PrimitiveKind.SPHERE:
        return cylinder_sphere_collide(a, b)
    if a.kind == PrimitiveKind.SPHERE and b.kind == PrimitiveKind.CYLINDER:
        return cylinder_sphere_collide(b, a)
    raise ValueError(f"Unsupported primitive pair: {a.kind} / {b.kind}")


def detect_collisions(scene: Scene) -> list[CollisionPair]:
    """
    Test every unordered pair of primitives in the scene.

    Pairs are reported cylinder-cylinder first, then sphere-sphere, then
    cylinder-sphere, each group following scene order.
    """
    cylinders = scene.cylinders
    spheres = scene.spheres
    collisions: list[CollisionPair] = []

    for (id_a, cyl_a), (id_b, cyl_b) in combinations(cylinders, 2):
        if cylinders_collide(cyl_a, cyl_b):
            collisions.append(CollisionPair(id_a, id_b))

    for (id_a, sph_a), (id_b, sph_b) in combinations(spheres, 2):
        if spheres_collide(sph_a, sph_b):
            collisions.append(CollisionPair(id_a, id_b))

    for (cyl_id, cyl), (sph_id, sph) in product(cylinders, spheres):
        if cylinder_sphere_collide(cyl, sph):
            collisions.append(CollisionPair(cyl_id, sph_id))

    if collisions:
        logger.warning(
            f"Detected {len(collisions)} collision(s): "
            + ", ".join(str(pair) for pair in collisions)
        )
    else:
        logger.debug(f"No collisions among {len(scene)} primitives.")
    return collisions
