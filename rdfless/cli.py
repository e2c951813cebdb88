"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path

from rdfless.config import ConfigError, load_config
from rdfless.formatter import Args, process_input
from rdfless.model import InputFormat, detect_format_from_path
from rdfless.parser import ParseError

_VERSION = "0.1.9"

_FORMAT_CHOICES = {
    "turtle": InputFormat.TURTLE,
    "trig": InputFormat.TRIG,
}


@dataclass
class CliArgs(Args):
    """Options from the command line, including the input files."""

    files: list[Path] = field(default_factory=list)

    def expand(self, config):
        """Whether prefixes are expanded; ``--compact`` wins over ``--expand``."""
        return super().expand(config)

    def format(self) -> InputFormat | None:
        """The explicit format, else one guessed from the first file, else Turtle."""
        if self.input_format is not None:
            return self.input_format
        if self.files:
            return detect_format_from_path(self.files[0])
        return InputFormat.TURTLE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdfless",
        description="A pretty printer for RDF data with ANSI colors",
    )
    parser.add_argument("files", metavar="FILE", nargs="*", help="Input files (Turtle or TriG format)")
    parser.add_argument(
        "--expand", action="store_true", help="Expand prefixes instead of showing PREFIX declarations"
    )
    parser.add_argument("--compact", action="store_true", help="Compact mode (opposite of 'expand')")
    parser.add_argument(
        "--format",
        choices=sorted(_FORMAT_CHOICES),
        help="Override the input format (auto-detected from file extension by default)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    return parser


def _cli_args(namespace: argparse.Namespace) -> CliArgs:
    return CliArgs(
        expand_prefixes=namespace.expand,
        compact=namespace.compact,
        input_format=_FORMAT_CHOICES.get(namespace.format) if namespace.format else None,
        files=[Path(name) for name in namespace.files],
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = _cli_args(parser.parse_args(argv))

    try:
        config = load_config()
        colors = config.colors
        if not args.files:
            stdin = sys.stdin
            if stdin is None or stdin.isatty():
                print("No input files provided and no input piped to stdin.", file=sys.stderr)
                parser.print_help()
                return 1
            process_input(getattr(stdin, "buffer", stdin), args, colors, config)
            return 0
        for path in args.files:
            try:
                handle = path.open("rb")
            except OSError as exc:
                print(f"Error: Failed to open file: {path}: {exc}", file=sys.stderr)
                return 1
            with handle:
                process_input(handle, args, colors, config)
    except (ConfigError, ParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0