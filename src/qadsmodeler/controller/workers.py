"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for work that must not block the
control thread.

Why is this file needed?
------------------------
1. Responsiveness: Reading a user-selected file may stall on slow or remote
   storage. The read happens in a background thread.
2. Signals: The whole file content is delivered back in a single Qt Signal,
   so the scene is only touched once the complete buffer is available.

Classes:
    FileReadWorker: Reads a geometry file into memory.
"""
import logging

from PySide6.QtCore import QThread, Signal

from qadsmodeler.model.io import IOManager

logger = logging.getLogger(__name__)


class FileReadWorker(QThread):
    # Signals to deliver results from the background
    text_loaded = Signal(str)
    error_occurred = Signal(str)

    def __init__(self, filepath: str):
        super().__init__()
        self.filepath = filepath

    def run(self):
        try:
            logger.info(f"Reading geometry file in background: {self.filepath}")
            text = IOManager.read_text(self.filepath)
            logger.debug(f"Read {len(text)} characters from {self.filepath}")
            self.text_loaded.emit(text)
        except OSError as e:
            logger.error(f"Could not read '{self.filepath}': {e}")
            self.error_occurred.emit(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while reading '{self.filepath}': {e}")
            self.error_occurred.emit(str(e))
