"""
Scene Store (Controller State)
==============================
Owns the Scene being edited and exposes every change as a Qt signal.

The store is the only writer of the scene. Each edit builds a new Scene and
swaps it in whole, so views (panels, the 3D preview) can keep references to
the snapshot they were given without locking.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional, Sequence
import logging

from PySide6.QtCore import QObject, Signal

from qadsmodeler import config
from qadsmodeler.controller.workers import FileReadWorker
from qadsmodeler.model.collision import CollisionPair, detect_collisions
from qadsmodeler.model.io import EmptySceneError, ImportResult, IOManager, ConfirmCallback, SaveCallback, parse_scene
from qadsmodeler.model.materials import MaterialType
from qadsmodeler.model.primitives import Cylinder, Primitive, PrimitiveKind
from qadsmodeler.model.scene import Scene

logger = logging.getLogger(__name__)


class ImportState(IntEnum):
    """Progress of a file import. Only READING blocks another import."""
    IDLE = 0
    READING = 1
    LOADED = 2
    EMPTY_FAILURE = 3


class ImportBusyError(RuntimeError):
    """An import was requested while another one is still reading."""


class UnknownObjectError(KeyError):
    """The requested object id is not part of the scene."""


def collision_message(collisions: Sequence[CollisionPair]) -> str:
    """Warning text shown before exporting a scene with collisions."""
    pairs = ", ".join(str(pair) for pair in collisions)
    return (
        "COLLISION WARNING\n\n"
        f"Detected collisions between: {pairs}\n\n"
        "Objects are intersecting and may cause issues in your model. "
        "Please adjust their positions or sizes before exporting.\n\n"
        "Do you want to export anyway?"
    )


class SceneStore(QObject):
    """Central scene store with signals for panel/preview sync."""
    scene_changed = Signal(object)
    selection_changed = Signal(str)
    import_state_changed = Signal(object)
    import_failed = Signal(str)
    export_finished = Signal(bool)

    def __init__(self, scene: Optional[Scene] = None) -> None:
        super().__init__()
        self._scene: Scene = scene if scene is not None else Scene.default()
        self._selected_id: Optional[str] = self._scene.default_selection()
        self._import_state = ImportState.IDLE
        self._worker: Optional[FileReadWorker] = None

    # --- Read access ---

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Primitive:
        if self._selected_id is None:
            raise UnknownObjectError("No object is selected.")
        return self._scene[self._selected_id]

    @property
    def import_state(self) -> ImportState:
        return self._import_state

    def is_busy(self) -> bool:
        return self._import_state == ImportState.READING

    # --- Internal setters ---

    def _set_scene(self, scene: Scene) -> None:
        self._scene = scene
        self.scene_changed.emit(self._scene)

    def _set_selection(self, object_id: Optional[str]) -> None:
        self._selected_id = object_id
        if object_id is not None:
            self.selection_changed.emit(object_id)

    def _set_import_state(self, state: ImportState) -> None:
        if state != self._import_state:
            logger.debug(f"Import state: {self._import_state.name} -> {state.name}")
            self._import_state = state
            self.import_state_changed.emit(state)

    def _replace_selected(self, update: Callable[[Primitive], Primitive]) -> Primitive:
        primitive = update(self.selected)
        self._set_scene(self._scene.with_primitive(self._selected_id, primitive))
        return primitive

    def _selected_cylinder(self) -> Cylinder:
        primitive = self.selected
        if primitive.kind != PrimitiveKind.CYLINDER:
            raise TypeError(f"'{self._selected_id}' is a {primitive.kind}, not a cylinder.")
        return primitive

    # --- Editing ---

    def select(self, object_id: str) -> None:
        if object_id not in self._scene:
            raise UnknownObjectError(f"Object '{object_id}' not found.")
        self._set_selection(object_id)

    def add_object(self, kind: PrimitiveKind) -> str:
        """Append a default primitive of `kind` and select it."""
        scene, object_id = self._scene.add(PrimitiveKind(kind))
        self._set_scene(scene)
        self._set_selection(object_id)
        logger.info(f"Added {object_id}.")
        return object_id

    def update_radius(self, value: float) -> None:
        """Cylinders get both radii set, keeping them symmetric."""
        self._replace_selected(lambda prim: prim.with_radius(value))

    def update_height(self, value: float) -> None:
        cylinder = self._selected_cylinder()
        self._replace_selected(lambda _: cylinder.with_height(value))

    def update_position(self, axis: int, value: float) -> None:
        self._replace_selected(
            lambda prim: prim.with_position(prim.position.replace_component(axis, value))
        )

    def update_rotation(self, axis: int, value: float) -> None:
        cylinder = self._selected_cylinder()
        self._replace_selected(lambda _: cylinder.with_rotation(axis, value))

    def update_material(self, material: MaterialType) -> None:
        self._replace_selected(lambda prim: prim.with_material(MaterialType(material)))

    # --- Import ---

    def begin_import(self) -> None:
        if self.is_busy():
            raise ImportBusyError("An import is already in progress.")
        self._set_import_state(ImportState.READING)

    def finish_import(self, text: str) -> Optional[ImportResult]:
        """
        Parse the full file content and replace the scene in one step.

        Returns:
            The import result, or None when the file held no bodies, in which
            case the current scene is left untouched.
        """
        if not self.is_busy():
            raise RuntimeError("finish_import() called without begin_import().")
        try:
            result = parse_scene(text)
        except EmptySceneError as e:
            logger.warning(f"Import failed: {e}")
            self._set_import_state(ImportState.EMPTY_FAILURE)
            self.import_failed.emit(str(e))
            return None

        self._set_scene(result.scene)
        self._set_selection(result.selection)
        self._set_import_state(ImportState.LOADED)
        logger.info(f"Imported {len(result.scene)} bodies.")
        return result

    def fail_import(self, message: str) -> None:
        """The file could not be read; the scene stays as it was."""
        logger.error(f"Import aborted: {message}")
        self._set_import_state(ImportState.IDLE)
        self.import_failed.emit(message)

    def import_file(self, filepath: str) -> FileReadWorker:
        """Read `filepath` in a background thread and import its content."""
        self.begin_import()
        worker = FileReadWorker(filepath)
        worker.text_loaded.connect(self.finish_import)
        worker.error_occurred.connect(self.fail_import)
        worker.finished.connect(self._on_worker_finished)
        self._worker = worker
        worker.start()
        return worker

    def _on_worker_finished(self) -> None:
        self._worker = None

    # --- Export ---

    def collisions(self) -> list[CollisionPair]:
        return detect_collisions(self._scene)

    def export(
        self,
        save: SaveCallback,
        confirm: Optional[ConfirmCallback] = None,
        filename: str = config.DEFAULT_EXPORT_FILENAME,
    ) -> bool:
        """
        Export the current scene. `confirm` is only asked when collisions
        were found; returning False cancels the export.

        Returns:
            True when the file was handed to `save`.
        """
        snapshot = self._scene
        outcome = IOManager.export_scene(snapshot, save=save, confirm=confirm, filename=filename)
        if outcome.saved:
            self.export_finished.emit(bool(outcome.collisions))
        return outcome.saved
