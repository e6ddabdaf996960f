"""
Material Definitions
====================
Defines the material tags a primitive can carry and their integer codes in
the .qads material list.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class MaterialType(StrEnum):
    CONCRETE = "concrete"
    STEEL = "steel"
    WOOD = "wood"
    STANDARD = "standard"

    @property
    def code(self) -> int:
        """Serialization integer written to the material list."""
        return MATERIAL_METADATA[self].code

    @property
    def label(self) -> str:
        return MATERIAL_METADATA[self].label

    @staticmethod
    def from_code(code: Optional[int]) -> MaterialType:
        """
        Resolve a material list integer. Unknown or missing codes fall back
        to concrete, which is what the analysis tool assumes as well.
        """
        material = _CODE_TO_MATERIAL.get(code) if code is not None else None
        if material is None:
            logger.debug(f"Unknown material code {code!r}, using {DEFAULT_MATERIAL}.")
            return DEFAULT_MATERIAL
        return material


@dataclass(frozen=True)
class MaterialMetadata:
    code: int
    label: str


# Codes are part of the file format and must stay stable
MATERIAL_METADATA: Dict[MaterialType, MaterialMetadata] = {
    MaterialType.CONCRETE: MaterialMetadata(code=1, label="Concrete"),
    MaterialType.STEEL: MaterialMetadata(code=2, label="Steel"),
    MaterialType.WOOD: MaterialMetadata(code=3, label="Wood"),
    MaterialType.STANDARD: MaterialMetadata(code=4, label="Standard"),
}

_CODE_TO_MATERIAL: Dict[int, MaterialType] = {
    meta.code: material for material, meta in MATERIAL_METADATA.items()
}

DEFAULT_MATERIAL = MaterialType.CONCRETE
