"""Command line entry point for the track marker recorder."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .config import load_config
from .recorder import TrackRecorder


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Record a marker travelling along a path to a video.")
    parser.add_argument(
        "config",
        type=Path,
        help="Path to the JSON or YAML configuration file containing the path and marker options.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log playback transitions and frame counts.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    animation_config = load_config(args.config)
    recorder = TrackRecorder(animation_config)
    output_path = recorder.render()
    print(f"Saved animation to {output_path}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
