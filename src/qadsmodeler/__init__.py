"""
qadsmodeler: compose cylinders and spheres and exchange them with analysis
tools through the .qads geometry description format.
"""
from qadsmodeler.model.materials import MaterialType
from qadsmodeler.model.primitives import Cylinder, Sphere, PrimitiveKind
from qadsmodeler.model.scene import Scene
from qadsmodeler.model.collision import CollisionPair, detect_collisions
from qadsmodeler.model.io import EmptySceneError, export_scene, parse_scene

__all__ = [
    'MaterialType',
    'Cylinder',
    'Sphere',
    'PrimitiveKind',
    'Scene',
    'CollisionPair',
    'detect_collisions',
    'EmptySceneError',
    'export_scene',
    'parse_scene',
]
