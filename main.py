"""
Entry point for the falling-block game.

Supports two modes:
  - play:     Play manually with keyboard controls in a pygame window.
  - simulate: Run a game headlessly on a fixed-step clock and print the result.

Usage:
    python main.py --mode play
    python main.py --mode play --config config/game.yaml
    python main.py --mode simulate --frames 0 --seed 42
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty for an empty file).

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file does not contain a mapping.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, frames, seed and fps attributes.
    """
    parser = argparse.ArgumentParser(
        description="Falling-block puzzle game: play it, or simulate it headlessly.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (manual play), 'simulate' (headless run, no input).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/game.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=3600,
        help="Number of frames to run in 'simulate' mode (0 = until game over).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for piece selection (overrides the config file).",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frame rate cap for 'play' mode (overrides the config file).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.seed is not None:
        config["seed"] = args.seed
    if args.fps is not None:
        config["fps"] = args.fps

    try:
        if args.mode == "play":
            from src.play import play_manual
            play_manual(config)

        elif args.mode == "simulate":
            from src.play import simulate
            simulate(config, frames=args.frames)

        else:
            print(f"Unknown mode: {args.mode}", file=sys.stderr)
            sys.exit(1)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
