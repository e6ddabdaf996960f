"""Tests for pairwise collision detection."""

from __future__ import annotations

import itertools
import warnings

import pytest

from qadsmodeler.model.collision import (
    CollisionPair,
    cylinder_sphere_collide,
    cylinders_collide,
    detect_collisions,
    primitives_collide,
    spheres_collide,
)
from qadsmodeler.model.geometry_primitives import Vector
from qadsmodeler.model.primitives import Cylinder, Sphere
from qadsmodeler.model.scene import Scene


def sphere(x: float, y: float = 0.0, z: float = 0.0, radius: float = 1.0) -> Sphere:
    return Sphere(radius=radius, position=Vector(x, y, z))


def cylinder(x: float, y: float = 0.0, z: float = 0.0, rotation=(0.0, 0.0, 0.0), radius: float = 1.0,
             height: float = 2.0) -> Cylinder:
    return Cylinder(radius_top=radius, radius_bottom=radius, height=height,
                    position=Vector(x, y, z), rotation=rotation)


# --- sphere / sphere ---

def test_unit_spheres_overlapping() -> None:
    scene = Scene.from_primitives([sphere(0.0), sphere(1.5)])
    assert detect_collisions(scene) == [CollisionPair("sphere1", "sphere2")]


def test_unit_spheres_touching_do_not_collide() -> None:
    scene = Scene.from_primitives([sphere(0.0), sphere(2.0)])
    assert detect_collisions(scene) == []


def test_near_tangent_spheres_within_margin() -> None:
    # 1.995 is inside r1 + r2 but within the 0.01 jitter margin
    assert not spheres_collide(sphere(0.0), sphere(1.995))
    assert spheres_collide(sphere(0.0), sphere(1.985))


def test_sphere_test_is_symmetric() -> None:
    spheres = [
        sphere(0.0), sphere(1.5), sphere(0.3, 2.0, -1.0, radius=0.5),
        sphere(5.0, radius=3.2), sphere(-1.0, -1.0, -1.0, radius=0.1),
    ]
    for a, b in itertools.combinations(spheres, 2):
        assert spheres_collide(a, b) == spheres_collide(b, a)


# --- cylinder / cylinder ---

def test_parallel_cylinders_side_by_side() -> None:
    assert cylinders_collide(cylinder(0.0), cylinder(1.5))
    assert not cylinders_collide(cylinder(0.0), cylinder(2.0))


def test_parallel_cylinders_far_apart_along_axis_still_collide() -> None:
    # Axial separation is ignored for parallel axes
    assert cylinders_collide(cylinder(0.0), cylinder(1.0, y=50.0))


def test_crossing_axes_collide() -> None:
    horizontal = cylinder(0.0, rotation=(0.5, 0.0, 0.0))  # axis along +Z
    assert cylinders_collide(cylinder(0.0), horizontal)


def test_skew_axes_compare_line_distance() -> None:
    assert not cylinders_collide(cylinder(0.0), cylinder(3.0, rotation=(0.5, 0.0, 0.0)))
    assert cylinders_collide(cylinder(0.0), cylinder(1.9, rotation=(0.5, 0.0, 0.0)))


def test_infinite_lines_ignore_caps() -> None:
    # The lines cross at y=100, far beyond the first cylinder's top cap
    assert cylinders_collide(cylinder(0.0), cylinder(0.0, y=100.0, rotation=(0.5, 0.0, 0.0)))


# --- cylinder / sphere ---

def test_sphere_against_cylinder_side() -> None:
    assert cylinder_sphere_collide(cylinder(0.0), sphere(1.5))
    assert not cylinder_sphere_collide(cylinder(0.0), sphere(2.5))
    assert not cylinder_sphere_collide(cylinder(0.0), sphere(2.0))


def test_sphere_above_cap_disk() -> None:
    assert cylinder_sphere_collide(cylinder(0.0), sphere(0.0, y=1.5))
    assert cylinder_sphere_collide(cylinder(0.0), sphere(0.0, y=-1.5))
    assert not cylinder_sphere_collide(cylinder(0.0), sphere(0.0, y=2.5))


def test_sphere_near_cap_rim() -> None:
    assert cylinder_sphere_collide(cylinder(0.0), sphere(1.5, y=1.5))
    assert not cylinder_sphere_collide(cylinder(0.0), sphere(2.0, y=2.0))
    assert cylinder_sphere_collide(cylinder(0.0), sphere(1.2, y=1.2, radius=0.5))


def test_rotated_cylinder_against_sphere() -> None:
    lying = cylinder(0.0, rotation=(0.0, 0.0, 0.5))  # axis along -X
    assert cylinder_sphere_collide(lying, sphere(0.0, y=1.5))
    assert not cylinder_sphere_collide(lying, sphere(2.5))


def test_mixed_dispatch_is_symmetric() -> None:
    cyl = cylinder(0.0)
    for sph in (sphere(1.5), sphere(2.5), sphere(0.0, y=1.5), sphere(2.0, y=2.0)):
        assert primitives_collide(cyl, sph) == primitives_collide(sph, cyl)


# --- scene scan ---

def test_default_scene_is_collision_free() -> None:
    assert detect_collisions(Scene.default()) == []


def test_pairs_are_grouped_by_kind() -> None:
    scene = Scene.from_primitives([
        sphere(0.5),
        cylinder(0.0),
        sphere(0.5, z=0.5),
        cylinder(1.0),
    ])
    assert detect_collisions(scene) == [
        CollisionPair("cylinder1", "cylinder2"),
        CollisionPair("sphere1", "sphere2"),
        CollisionPair("cylinder1", "sphere1"),
        CollisionPair("cylinder1", "sphere2"),
        CollisionPair("cylinder2", "sphere1"),
        CollisionPair("cylinder2", "sphere2"),
    ]


def test_detection_does_not_modify_scene() -> None:
    scene = Scene.from_primitives([sphere(0.0), sphere(1.0)])
    before = scene.entries
    detect_collisions(scene)
    assert scene.entries == before


def test_collision_pair_text() -> None:
    pair = CollisionPair("cylinder1", "sphere2")
    assert str(pair) == "cylinder1 and sphere2"
    assert tuple(pair) == ("cylinder1", "sphere2")


# --- degenerate input ---

def test_zero_length_cylinder_never_collides_and_stays_quiet() -> None:
    flat = cylinder(0.0, height=0.0)
    scene = Scene.from_primitives([flat, cylinder(0.0, height=0.0), sphere(0.0)])

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert not cylinder_sphere_collide(flat, sphere(0.0))
        assert not cylinders_collide(flat, cylinder(0.0))
        assert detect_collisions(scene) == []
