"""
Configuration & Format Constants
================================
This module serves as the central registry for the constants of the .qads
geometry format and the modeling defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tolerances, keywords, default
   dimensions) from being scattered throughout the model and codec.
2. Contract: The export keywords and footer are read by an external analysis
   tool, so they live in one place where they can be checked against it.

Exports:
    FILE_EXTENSION (str): Extension of exported geometry files.
    DEFAULT_EXPORT_FILENAME (str): Suggested filename handed to the save dialog.
    FOOTER_LINE (str): Sentinel line that terminates a geometry file.
"""
from typing import Final

# --- File format ---
FILE_EXTENSION: Final[str] = ".qads"
DEFAULT_EXPORT_FILENAME: Final[str] = f"model{FILE_EXTENSION}"
FILE_ENCODING: Final[str] = "utf-8"

CYLINDER_KEYWORD: Final[str] = "rcc"
SPHERE_KEYWORD: Final[str] = "sph"
ZONE_PREFIX: Final[str] = "zn"
END_BODY_LINE: Final[str] = "end body"
END_ZONE_LINE: Final[str] = "end zone"
FOOTER_LINE: Final[str] = "end geom"

# Every zone references the same material group
ZONE_GROUP_ID: Final[int] = 1
COORDINATE_DECIMALS: Final[int] = 6

# Minimum token counts (keyword + index + values)
CYLINDER_TOKEN_COUNT: Final[int] = 9
SPHERE_TOKEN_COUNT: Final[int] = 6

# --- Collision tolerances ---
SPHERE_CONTACT_EPSILON: Final[float] = 0.01
PARALLEL_CROSS_TOLERANCE: Final[float] = 1e-3

# --- Modeling defaults ---
DEFAULT_RADIUS: Final[float] = 1.0
DEFAULT_HEIGHT: Final[float] = 2.0
DEFAULT_SPACING: Final[float] = 2.0
ROTATION_LIMIT: Final[float] = 1.0  # rotation fields are multiples of pi
