"""Command-line interface for orsonlex."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from orsonlex.dialect import mode_from_config, read_toml
from orsonlex.errors import DialectError
from orsonlex.mode import ORSON_MODE, ModeDescriptor, mode_for_path

FORMATS = ("spans", "json", "html", "ansi")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    output_format: str
    start: int
    end: int | None
    mode: ModeDescriptor
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="orsonlex",
        description="Classify the tokens of an Orson source file",
    )
    p.add_argument("input", help="Input Orson source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: spans)",
    )
    p.add_argument(
        "--range",
        metavar="START:END",
        help="Character range to classify (either side may be omitted)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover orsonlex.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump the classification to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def parse_range_arg(s: str) -> tuple[int, int | None]:
    """Parse a START:END string into (start, end); END may be None."""
    if ":" not in s:
        raise argparse.ArgumentTypeError(f"invalid range format (expected START:END): {s}")
    lo, _, hi = s.partition(":")
    try:
        start = int(lo) if lo.strip() else 0
        end = int(hi) if hi.strip() else None
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid range bounds: {s}") from None
    if start < 0 or (end is not None and end < start):
        raise argparse.ArgumentTypeError(f"invalid range bounds: {s}")
    return start, end


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "orsonlex.toml"

    if not path.is_file():
        return {}

    return read_toml(path)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: built-in mode < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    source_path = config_path if config_path is not None else input_dir / "orsonlex.toml"

    base = mode_for_path(input_file) or ORSON_MODE
    mode = mode_from_config(config, base, source_path) if config else base

    # Output format: config < CLI
    output_format = "spans"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if isinstance(cfg_format, str):
            if cfg_format not in FORMATS:
                raise DialectError(
                    f"unknown output format '{cfg_format}'", source_path, "output.format"
                )
            output_format = cfg_format
    if args.format is not None:
        output_format = args.format

    start, end = parse_range_arg(args.range) if args.range else (0, None)
    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=output_format,
        start=start,
        end=end,
        mode=mode,
        debug=args.debug,
    )


def format_result(options: CliOptions, text: str) -> str:
    """Classify ``text`` and render it in the requested output format."""
    from orsonlex.debug import dump_classification
    from orsonlex.engine import classify
    from orsonlex.render import render_ansi, render_html

    result = classify(text, options.start, options.end, options.mode)

    if options.debug:
        dump_classification(text, result)

    if options.output_format == "html":
        return render_html(text, result)
    if options.output_format == "ansi":
        return render_ansi(text, result)
    if options.output_format == "json":
        payload = {
            "range": [result.start, result.end],
            "spans": [
                {"start": s.start, "end": s.end, "class": s.cls.name.lower()} for s in result.spans
            ],
            "regions": [
                {
                    "kind": r.kind.name.lower(),
                    "open": r.open,
                    "close": r.close,
                    "terminated": r.terminated,
                }
                for r in result.regions
            ],
            "fences": {str(k): v.name.lower() for k, v in sorted(result.fences.items())},
        }
        return json.dumps(payload, indent=2) + "\n"

    lines = [f"{s.start}\t{s.end}\t{s.cls.name}\t{s.text(text)!r}" for s in result.spans]
    return "".join(line + "\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except DialectError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        text = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 1

    output = format_result(options, text)

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
