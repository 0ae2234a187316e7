# dot_gen/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .assembler import DiagramAssembler
from .config import load_config
from .constants import IMAGE_FORMAT_DEFAULT
from .errors import DotGenError
from .graphviz import render_command, render_image
from .io import load_document
from .parse import parse_diagram
from .samples import create_sample_files
from .validate import validate_diagram
from .writer import write_dot

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dot-gen",
        description="Convert JSON data models to DOT (Graphviz) diagrams.",
    )
    parser.add_argument("input", nargs="?", type=Path, help="Input JSON (or YAML) model")
    parser.add_argument("output", nargs="?", type=Path, help="Output DOT file")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Custom configuration file (YAML) merged over the built-in defaults",
    )
    parser.add_argument(
        "--create-sample",
        metavar="PREFIX",
        default=None,
        help="Write PREFIX_sample.json and PREFIX_config.yaml and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "-f",
        "--format",
        default=IMAGE_FORMAT_DEFAULT,
        help="Image format for --render and the suggested command (png, svg, pdf)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Run Graphviz on the written DOT file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=(
            "Fail on validation warnings (unknown relationship endpoints, duplicate "
            "or unquoted-unsafe entity ids). By default they are only reported."
        ),
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Render entities and relationships on N threads (output order is unchanged)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _create_samples(prefix: str) -> int:
    json_path, config_path = create_sample_files(prefix)
    print("Sample files created:")
    print(f"  JSON model: {json_path}")
    print(f"  Config file: {config_path}")
    print()
    print("Usage examples:")
    print(f"  dot-gen {json_path} output.dot")
    print(f"  dot-gen {json_path} output.dot --config {config_path}")
    print(f"  dot-gen {json_path} output.dot --render --format png")
    return 0


def _convert(args: argparse.Namespace) -> int:
    input_path: Path = args.input
    output_path: Path = args.output

    if args.verbose:
        print(f"Reading model from: {input_path.resolve()}")
        if args.config is not None:
            print(f"Using config file: {args.config.resolve()}")

    diagram = parse_diagram(load_document(input_path))

    errors, warnings = validate_diagram(diagram, strict=args.strict)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)
    if errors:
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        return 1

    config = load_config(args.config)
    dot_content = DiagramAssembler(config, max_workers=args.workers).assemble(diagram)

    write_dot(output_path, dot_content)
    print(f"Successfully converted {input_path} to {output_path}")
    if args.verbose:
        print(f"Output file size: {output_path.stat().st_size} bytes")
        print(f"Absolute path: {output_path.resolve()}")

    if args.render:
        image = render_image(output_path, args.format)
        print(f"Diagram rendered: {image}")
        return 0

    print("To generate diagram, run: " + " ".join(render_command(output_path, args.format)))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint. Returns the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on usage errors and 0 after --help or --version.
        return 0 if e.code in (0, None) else 1
    _configure_logging(args.verbose)

    try:
        if args.create_sample is not None:
            return _create_samples(args.create_sample)

        if args.input is None or args.output is None:
            print("error: both input and output files must be specified", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1

        return _convert(args)
    except DotGenError as e:
        LOG.debug("conversion failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
