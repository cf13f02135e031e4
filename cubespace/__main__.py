"""
Command-line entry point.

Usage:
    python -m cubespace --rotation-frame world

Left-drag spins the highlighted cube, right-drag orbits the camera.
"""

import argparse
import sys

from cubespace import log
from cubespace.config import RotationFrame, SceneConfig, SceneConfigError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cubespace",
        description="Grid of cubes with drag-to-rotate camera and cube controls",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="JSON scene configuration file",
    )
    parser.add_argument(
        "--rotation-frame",
        choices=[frame.value for frame in RotationFrame],
        default=None,
        help="Frame for cube drags: world (default) or local",
    )
    parser.add_argument(
        "--width", "-W",
        type=int,
        default=960,
        help="Window width (default: 960)",
    )
    parser.add_argument(
        "--height", "-H",
        type=int,
        default=640,
        help="Window height (default: 640)",
    )
    parser.add_argument(
        "--title", "-t",
        type=str,
        default="cubespace",
        help="Window title",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.name.lower() for level in log.Level],
        default="info",
        help="Logging level (default: info)",
    )
    return parser


def load_config(args) -> SceneConfig:
    config = SceneConfig.load(args.config) if args.config else SceneConfig()
    if args.rotation_frame is not None:
        config.rotation_frame = RotationFrame(args.rotation_frame)
    return config.validate()


def main(argv=None):
    args = build_parser().parse_args(argv)
    log.configure(log.Level[args.log_level.upper()])

    try:
        config = load_config(args)
    except SceneConfigError as e:
        log.error(f"Invalid configuration: {e}")
        sys.exit(2)

    from cubespace.app import run

    run(config, width=args.width, height=args.height, title=args.title)


if __name__ == "__main__":
    main()
