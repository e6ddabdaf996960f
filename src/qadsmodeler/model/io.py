"""
Input/Output Manager (.qads text format)
Handles exporting a Scene to the geometry description read by the analysis
tool, and parsing such files back into a Scene.

File layout::

    rcc <n> <baseX> <baseY> <baseZ> <dirX> <dirY> <dirZ> <radius>
    sph <n> <cx> <cy> <cz> <radius>
    end body
    zn<n> 1 <n>
    end zone
    <m1> <m2> ... <mK>
    end geom

Bodies share one running 1-based index, cylinders first. The material line
carries one integer code per body in body order; position is the only link
between a body and its material.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence
import logging
import math
import os
import re

from qadsmodeler import config
from qadsmodeler.model.collision import CollisionPair, detect_collisions
from qadsmodeler.model.geometry_primitives import Vector
from qadsmodeler.model.materials import MaterialType
from qadsmodeler.model.orientation import direction_to_rotation
from qadsmodeler.model.primitives import Cylinder, Sphere, Primitive, PrimitiveKind
from qadsmodeler.model.scene import Scene

# Get module logger
logger = logging.getLogger(__name__)

# One or more whitespace separated integers and nothing else
MATERIAL_LINE_PATTERN = re.compile(r"^\d+(\s+\d+)*$")

ConfirmCallback = Callable[[Sequence[CollisionPair]], bool]
SaveCallback = Callable[[bytes, str], None]


class QadsFormatError(ValueError):
    """Base class for problems with .qads content."""


class EmptySceneError(QadsFormatError):
    """The file contained no recognizable cylinder or sphere record."""


@dataclass(frozen=True)
class ImportResult:
    scene: Scene
    selection: Optional[str]
    materials_applied: bool
    skipped_lines: int = 0


@dataclass(frozen=True)
class ExportOutcome:
    saved: bool
    collisions: tuple[CollisionPair, ...] = ()


# ---- EXPORT ----

def format_real(value: float) -> str:
    # Adding 0.0 folds negative zero into zero
    return f"{value + 0.0:.{config.COORDINATE_DECIMALS}f}"


def _cylinder_line(index: int, cylinder: Cylinder) -> str:
    direction = cylinder.direction
    base = cylinder.position - direction * (0.5 * cylinder.height)
    extent = direction * cylinder.height
    values = [*base, *extent, cylinder.radius_top]
    return f"{config.CYLINDER_KEYWORD} {index} " + " ".join(format_real(v) for v in values)


def _sphere_line(index: int, sphere: Sphere) -> str:
    values = [*sphere.position, sphere.radius]
    return f"{config.SPHERE_KEYWORD} {index} " + " ".join(format_real(v) for v in values)


def export_scene(scene: Scene) -> str:
    """Serialize a scene. Deterministic for a given scene; never raises."""
    bodies = scene.export_order()
    lines: list[str] = []

    for index, (_, primitive) in enumerate(bodies, start=1):
        if primitive.kind == PrimitiveKind.CYLINDER:
            lines.append(_cylinder_line(index, primitive))
        elif primitive.kind == PrimitiveKind.SPHERE:
            lines.append(_sphere_line(index, primitive))
    lines.append(config.END_BODY_LINE)

    for index in range(1, len(bodies) + 1):
        lines.append(f"{config.ZONE_PREFIX}{index} {config.ZONE_GROUP_ID} {index}")
    lines.append(config.END_ZONE_LINE)

    lines.append(" ".join(str(primitive.material.code) for _, primitive in bodies))
    lines.append(config.FOOTER_LINE)

    return "\n".join(lines) + "\n"


def encode_scene(scene: Scene) -> bytes:
    return export_scene(scene).encode(config.FILE_ENCODING)


# ---- IMPORT ----

def _parse_real(token: str) -> float:
    """Numbers are not validated: anything unparsable becomes NaN."""
    try:
        return float(token)
    except ValueError:
        logger.debug(f"Non-numeric token '{token}' read as NaN.")
        return math.nan


def _parse_cylinder(parts: list[str]) -> Cylinder:
    bx, by, bz, dx, dy, dz, radius = (_parse_real(p) for p in parts[2:9])
    extent = Vector(dx, dy, dz)
    base = Vector(bx, by, bz)
    return Cylinder(
        radius_top=radius,
        radius_bottom=radius,
        height=extent.magnitude,
        position=base + extent * 0.5,
        rotation=direction_to_rotation(extent),
    )


def _parse_sphere(parts: list[str]) -> Sphere:
    cx, cy, cz, radius = (_parse_real(p) for p in parts[2:6])
    return Sphere(radius=radius, position=Vector(cx, cy, cz))


def parse_scene(text: str) -> ImportResult:
    """
    Parse a whole .qads buffer.

    Unrecognized lines are skipped. The last all-integer line is the
    candidate material list; it is applied only when it carries exactly one
    code per body in the whole file, otherwise every body keeps the default.

    Raises:
        EmptySceneError: No cylinder or sphere record was found.
    """
    primitives: list[Primitive] = []
    material_codes: Optional[list[int]] = None
    skipped = 0

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split()

        if line.startswith(config.CYLINDER_KEYWORD):
            if len(parts) >= config.CYLINDER_TOKEN_COUNT:
                primitives.append(_parse_cylinder(parts))
                continue
        elif line.startswith(config.SPHERE_KEYWORD):
            if len(parts) >= config.SPHERE_TOKEN_COUNT:
                primitives.append(_parse_sphere(parts))
                continue
        elif MATERIAL_LINE_PATTERN.match(line):
            material_codes = [int(p) for p in parts]
            continue

        skipped += 1
        logger.debug(f"Line {line_no}: skipped '{line}'.")

    if not primitives:
        raise EmptySceneError("No valid cylinder or sphere data found in the file.")

    materials_applied = material_codes is not None and len(material_codes) == len(primitives)
    if materials_applied:
        primitives = [
            prim.with_material(MaterialType.from_code(code))
            for prim, code in zip(primitives, material_codes, strict=True)
        ]
    elif material_codes is not None:
        logger.warning(
            f"Material list has {len(material_codes)} codes for {len(primitives)} bodies; "
            f"all bodies default to {MaterialType.CONCRETE}."
        )

    # Cylinders and spheres are numbered independently
    scene = Scene.from_primitives(primitives)
    return ImportResult(
        scene=scene,
        selection=scene.default_selection(),
        materials_applied=materials_applied,
        skipped_lines=skipped,
    )


class IOManager:

    @staticmethod
    def export_scene(
        scene: Scene,
        save: SaveCallback,
        confirm: Optional[ConfirmCallback] = None,
        filename: str = config.DEFAULT_EXPORT_FILENAME,
    ) -> ExportOutcome:
        """
        Check the scene for collisions, ask for confirmation when there are
        any, then hand the encoded file to `save`.

        Export goes ahead unless `confirm` explicitly answers False.
        """
        collisions = detect_collisions(scene)
        if collisions and confirm is not None and not confirm(collisions):
            logger.info("Export cancelled by user after collision warning.")
            return ExportOutcome(saved=False, collisions=tuple(collisions))

        payload = encode_scene(scene)
        logger.info(f"Exporting {len(scene)} bodies as '{filename}' ({len(payload)} bytes).")
        save(payload, filename)
        return ExportOutcome(saved=True, collisions=tuple(collisions))

    @staticmethod
    def save_to_file(scene: Scene, filepath: str) -> None:
        logger.info(f"Saving geometry to: {filepath}")
        try:
            with open(filepath, "wb") as f:
                f.write(encode_scene(scene))
        except OSError as e:
            logger.exception(f"Failed to save geometry: {e}")
            raise

    @staticmethod
    def read_text(filepath: str) -> str:
        """Read a whole file; undecodable bytes are replaced rather than fatal."""
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Geometry file not found: {filepath}")
        with open(filepath, "r", encoding=config.FILE_ENCODING, errors="replace") as f:
            return f.read()

    @staticmethod
    def load_from_file(filepath: str) -> ImportResult:
        logger.info(f"Loading geometry from: {filepath}")
        result = parse_scene(IOManager.read_text(filepath))
        logger.info(f"Loaded {len(result.scene)} bodies from: {filepath}")
        return result
