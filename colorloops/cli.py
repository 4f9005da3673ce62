"""
CLI: build the palette x resolution matrix of stills, loops and transitions.
Usage:
  colorloops -c colors.yaml -r resolutions.yaml
  colorloops -c colors.yaml -r resolutions.yaml -o out/ --dry-run
  colorloops -c colors.yaml -r resolutions.yaml --verbose --config config/default.yaml
"""
import argparse
import logging
import os
import sys
from pathlib import Path

from .commands import CommandBuilder, EncoderSettings
from .config import ConfigError, load_config, load_palette, load_resolutions
from .orchestrator import BuildOrchestrator
from .pipeline import generate_matrix
from .runner import CommandRunner

logger = logging.getLogger("colorloops")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colorloops",
        description="Generate solid-color images, looping videos and cross-fade transitions for every color and resolution.",
    )
    parser.add_argument(
        "--colors",
        "-c",
        type=Path,
        default=None,
        help="Required: path to colors YAML file (list of {name, hex}).",
    )
    parser.add_argument(
        "--resolutions",
        "-r",
        type=Path,
        default=None,
        help="Required: path to resolutions YAML file (list of {width, height}).",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Output path for generated files (default: current directory).",
    )
    parser.add_argument(
        "--dry-run",
        "-d",
        action="store_true",
        help="Don't create anything; print the commands that would run.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output (skipped files, commands before they run).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to encoder settings YAML (default: config/default.yaml).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    # basicConfig is a no-op when the root logger is already configured
    logging.getLogger("colorloops").setLevel(logging.DEBUG if args.verbose else logging.INFO)

    # Missing inputs show usage and exit 0, as the tool always has.
    if args.colors is None or args.resolutions is None:
        parser.print_help(sys.stderr)
        return 0

    output_dir = args.output_dir
    if output_dir is None:
        try:
            output_dir = Path(os.getcwd())
        except OSError as e:
            logger.error("Cannot get current working directory: %s", e)
            return 1

    try:
        palette = load_palette(args.colors)
        resolutions = load_resolutions(args.resolutions)
        settings = EncoderSettings.from_config(load_config(args.config))
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    orchestrator = BuildOrchestrator(
        CommandRunner(dry_run=args.dry_run),
        CommandBuilder(settings),
    )
    generate_matrix(palette, resolutions, output_dir, orchestrator=orchestrator)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
