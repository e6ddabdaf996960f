"""
Scene (Data Model)
==================
The set of primitives the user is composing.

A Scene is an immutable, insertion-ordered mapping from identifier to
primitive. The insertion order matters beyond display: it is the order in
which primitives are written to a .qads file, and the material list in that
file is matched back to primitives purely by position.

Every edit returns a new Scene. The controller swaps the whole value, so a
reader holding the previous snapshot never sees a half-applied change.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple
import logging

from qadsmodeler import config
from qadsmodeler.model.geometry_primitives import Vector
from qadsmodeler.model.primitives import Cylinder, Sphere, Primitive, PrimitiveKind

logger = logging.getLogger(__name__)

SceneEntry = Tuple[str, Primitive]


def make_identifier(kind: PrimitiveKind, number: int) -> str:
    """Identifier of the `number`-th primitive of `kind`, e.g. 'cylinder2'."""
    return f"{kind.value}{number}"


@dataclass(frozen=True)
class Scene(Mapping):
    entries: Tuple[SceneEntry, ...] = ()
    _index: Dict[str, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        index: Dict[str, int] = {}
        for position, (object_id, _) in enumerate(self.entries):
            if object_id in index:
                raise ValueError(f"Duplicate object id '{object_id}' in scene.")
            index[object_id] = position
        object.__setattr__(self, "_index", index)

    # --- Mapping protocol ---

    def __getitem__(self, object_id: str) -> Primitive:
        return self.entries[self._index[object_id]][1]

    def __iter__(self) -> Iterator[str]:
        return (object_id for object_id, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._index

    # --- Queries ---

    def of_kind(self, kind: PrimitiveKind) -> list[SceneEntry]:
        """Entries of one kind, in insertion order."""
        return [(object_id, prim) for object_id, prim in self.entries if prim.kind == kind]

    @property
    def cylinders(self) -> list[Tuple[str, Cylinder]]:
        return self.of_kind(PrimitiveKind.CYLINDER)  # type: ignore[return-value]

    @property
    def spheres(self) -> list[Tuple[str, Sphere]]:
        return self.of_kind(PrimitiveKind.SPHERE)  # type: ignore[return-value]

    def export_order(self) -> list[SceneEntry]:
        """Cylinders first, then spheres, each group in insertion order."""
        return self.cylinders + self.spheres

    def count(self, kind: PrimitiveKind) -> int:
        return sum(1 for _, prim in self.entries if prim.kind == kind)

    def next_identifier(self, kind: PrimitiveKind) -> str:
        return make_identifier(kind, self.count(kind) + 1)

    def default_selection(self) -> Optional[str]:
        """First cylinder, or the first sphere when there are no cylinders."""
        for kind in (PrimitiveKind.CYLINDER, PrimitiveKind.SPHERE):
            entries = self.of_kind(kind)
            if entries:
                return entries[0][0]
        return None

    # --- Copy-on-write edits ---

    def with_primitive(self, object_id: str, primitive: Primitive) -> Scene:
        """
        Return a new scene where `object_id` maps to `primitive`.
        Existing ids keep their position; new ids are appended.
        """
        if object_id in self._index:
            existing = self[object_id]
            if existing.kind != primitive.kind:
                raise TypeError(
                    f"Cannot replace {existing.kind} '{object_id}' with a {primitive.kind}."
                )
            entries = list(self.entries)
            entries[self._index[object_id]] = (object_id, primitive)
            return Scene(tuple(entries))
        return Scene(self.entries + ((object_id, primitive),))

    def add(self, kind: PrimitiveKind) -> Tuple[Scene, str]:
        """
        Append a primitive of `kind` with default dimensions, placed along X
        by the number of primitives of that kind already present.
        """
        count = self.count(kind)
        object_id = make_identifier(kind, count + 1)
        position = Vector(count * config.DEFAULT_SPACING, 0.0, 0.0)
        if kind == PrimitiveKind.CYLINDER:
            primitive: Primitive = Cylinder(position=position)
        elif kind == PrimitiveKind.SPHERE:
            primitive = Sphere(position=position)
        else:
            raise ValueError(f"Unknown primitive kind: {kind}")
        logger.debug(f"Adding {kind} '{object_id}' at {position.to_tuple()}.")
        return self.with_primitive(object_id, primitive), object_id

    # --- Factories ---

    @staticmethod
    def from_primitives(primitives: Iterable[Primitive]) -> Scene:
        """
        Build a scene from primitives in order, numbering identifiers
        sequentially per kind starting at 1.
        """
        counters = {kind: 0 for kind in PrimitiveKind}
        entries = []
        for primitive in primitives:
            counters[primitive.kind] += 1
            entries.append((make_identifier(primitive.kind, counters[primitive.kind]), primitive))
        return Scene(tuple(entries))

    @staticmethod
    def default() -> Scene:
        """Start-up scene: two cylinders side by side and one sphere."""
        return Scene.from_primitives([
            Cylinder(position=Vector(0.0, 0.0, 0.0)),
            Cylinder(position=Vector(config.DEFAULT_SPACING, 0.0, 0.0)),
            Sphere(position=Vector(2 * config.DEFAULT_SPACING, 0.0, 0.0)),
        ])
