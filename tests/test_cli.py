"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from qadsmodeler.__main__ import EXIT_COLLISIONS, EXIT_INVALID, EXIT_OK, main
from qadsmodeler.model.io import IOManager, export_scene
from qadsmodeler.model.scene import Scene


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("qadsmodeler")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_check_clean_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "model.qads"
    IOManager.save_to_file(Scene.default(), str(path))

    assert main(["check", str(path)]) == EXIT_OK
    assert "no collisions" in capsys.readouterr().out


def test_check_reports_collisions(tmp_path: Path, capsys) -> None:
    path = tmp_path / "overlap.qads"
    path.write_text("sph 1 0 0 0 1\nsph 2 1 0 0 1\n", encoding="utf-8")

    assert main(["check", str(path)]) == EXIT_COLLISIONS
    assert "collision: sphere1 and sphere2" in capsys.readouterr().out


def test_check_rejects_empty_and_missing_files(tmp_path: Path) -> None:
    empty = tmp_path / "empty.qads"
    empty.write_text("end body\nend zone\n", encoding="utf-8")

    assert main(["check", str(empty)]) == EXIT_INVALID
    assert main(["check", str(tmp_path / "absent.qads")]) == EXIT_INVALID


def test_normalize_writes_canonical_form(tmp_path: Path) -> None:
    source = tmp_path / "loose.qads"
    source.write_text("  sph 9 4 0 0 1  \r\nrcc 1 0 -1 0 0 2 0 1\nrcc 2 2 -1 0 0 2 0 1\n1 1 1\n", encoding="utf-8")
    output = tmp_path / "clean.qads"

    assert main(["normalize", str(source), "-o", str(output)]) == EXIT_OK
    assert output.read_text(encoding="utf-8") == export_scene(Scene.default())


def test_log_records_stay_off_stdout(tmp_path: Path, capsys) -> None:
    path = tmp_path / "model.qads"
    IOManager.save_to_file(Scene.default(), str(path))
    log_file = tmp_path / "check.log"

    assert main(["--log-file", str(log_file), "check", str(path)]) == EXIT_OK

    captured = capsys.readouterr()
    assert captured.out == "no collisions\n"
    assert "INFO qadsmodeler.cli: 2 cylinder(s), 1 sphere(s)" in captured.err
    assert "cylinder1: Concrete at (0.0, 0.0, 0.0)" in log_file.read_text(encoding="utf-8")
