"""
Command-line interface.

Usage:
    $ python -m qadsmodeler check model.qads
    $ python -m qadsmodeler normalize model.qads -o clean.qads
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from qadsmodeler.logging_config import setup_logging
from qadsmodeler.model.collision import detect_collisions
from qadsmodeler.model.io import EmptySceneError, IOManager

logger = logging.getLogger("qadsmodeler.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_COLLISIONS = 2


def _check(args: argparse.Namespace) -> int:
    result = IOManager.load_from_file(args.file)
    scene = result.scene
    logger.info(
        f"{len(scene.cylinders)} cylinder(s), {len(scene.spheres)} sphere(s), "
        f"materials {'applied' if result.materials_applied else 'defaulted'}, "
        f"{result.skipped_lines} line(s) skipped."
    )
    for object_id, primitive in scene.items():
        logger.info(f"  {object_id}: {primitive.material.label} at {primitive.position.to_tuple()}")

    collisions = detect_collisions(scene)
    if collisions:
        for pair in collisions:
            print(f"collision: {pair}")
        return EXIT_COLLISIONS
    print("no collisions")
    return EXIT_OK


def _normalize(args: argparse.Namespace) -> int:
    result = IOManager.load_from_file(args.file)
    IOManager.save_to_file(result.scene, args.output)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qadsmodeler", description="Inspect .qads geometry files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", help="also write the log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="parse a file and report collisions")
    check.add_argument("file")
    check.set_defaults(handler=_check)

    normalize = sub.add_parser("normalize", help="re-export a file in canonical form")
    normalize.add_argument("file")
    normalize.add_argument("-o", "--output", required=True)
    normalize.set_defaults(handler=_normalize)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    try:
        return args.handler(args)
    except (OSError, EmptySceneError) as e:
        logger.error(str(e))
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
