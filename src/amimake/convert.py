#!/usr/bin/env python3
"""
Converts a build file from one Amiga makefile dialect to another.

Wires the pieces together: read the source, detect its dialect, parse it
into a BuildModel, pick the target dialect (explicitly or from the
default table) and render. Nothing is written unless every earlier step
succeeded.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from amimake.detect import detect_lines, find_makefile
from amimake.errors import (
    ConversionError,
    DestinationExistsError,
    DestinationUnwritableError,
    DetectionError,
    UnknownDialectError,
)
from amimake.model import (
    DEFAULT_FILENAMES,
    BuildModel,
    Dialect,
    default_target,
    display_name,
    parse_dialect_name,
    summarize,
)
from amimake.parse import Diagnostic, DiagnosticSink, ParseLimits, get_parser
from amimake.render import render
from amimake.source import destination_available, read_lines


class ConversionResult(NamedTuple):
    """Outcome of a successful conversion."""
    source_dialect: Dialect
    target_dialect: Dialect
    destination: Path | None
    model: BuildModel
    text: str


def resolve_dialect(value: Dialect | str | None, role: str = "target") -> Dialect | None:
    """Turn a Dialect or a user-supplied name into a Dialect. None stays None."""
    if value is None:
        return None
    dialect = value if isinstance(value, Dialect) else parse_dialect_name(value)
    if dialect is Dialect.UNKNOWN:
        name = value.value if isinstance(value, Dialect) else value
        raise UnknownDialectError(name, role)
    return dialect


def resolve_target(target: Dialect | str | None, source: Dialect) -> Dialect:
    """Return the explicit target, or the default target for source."""
    explicit = resolve_dialect(target)
    if explicit is not None:
        return explicit
    fallback = default_target(source)
    if fallback is Dialect.UNKNOWN:
        raise UnknownDialectError(display_name(source))
    return fallback


def source_dialect_of(path: Path, lines: list[str], dialect: Dialect | str | None = None) -> Dialect:
    """Return the forced source dialect, or detect it from lines."""
    forced = resolve_dialect(dialect, "source")
    if forced is not None:
        return forced
    detected = detect_lines(lines)
    if detected is Dialect.UNKNOWN:
        raise DetectionError(path)
    return detected


def check_destination(destination: Path, force: bool = False) -> None:
    """Raise if destination cannot be written without clobbering something."""
    if destination.is_dir():
        raise DestinationUnwritableError(destination, "is a directory")
    if not destination_available(destination, force):
        raise DestinationExistsError(destination)


def convert(
    source: Path,
    destination: Path | None = None,
    target: Dialect | str | None = None,
    dialect: Dialect | str | None = None,
    force: bool = False,
    limits: ParseLimits | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> ConversionResult:
    """
    Convert the build file at source.

    target may be a Dialect or a name such as 'smake' or 'gnu'; without
    it the default table decides. dialect forces the source dialect and
    skips detection. Output goes to destination, or standard output when
    destination is None. An existing destination is only replaced when
    force is set.
    """
    source = Path(source)
    lines = read_lines(source)

    source_dialect = source_dialect_of(source, lines, dialect)
    target_dialect = resolve_target(target, source_dialect)

    if destination is not None:
        destination = Path(destination)
        check_destination(destination, force)

    parser = get_parser(source_dialect, limits, on_diagnostic)
    model = parser.parse_lines(lines, BuildModel(filename=str(source)))

    text = render(model, target_dialect, destination, force=force)
    return ConversionResult(source_dialect, target_dialect, destination, model, text)


def print_diagnostic(diagnostic: Diagnostic) -> None:
    print(f"amimake: line {diagnostic.line_number}: {diagnostic.kind}: {diagnostic.text}", file=sys.stderr)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amimake",
        description="Convert between Amiga makefile formats (GNU Make, SAS/C, DICE, Lattice)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported formats:
  smake, smakefile, sasc    - SAS/C SMakefile format
  dmake, dmakefile, dice    - DICE dmakefile format
  makefile, make, gnu, gcc  - GNU Makefile format
  lmk, lmkfile, lattice     - Lattice lmkfile format

Default conversions:
  GNU Makefile -> SAS/C SMakefile
  Lattice lmkfile -> SAS/C SMakefile
  DICE dmakefile -> GNU Makefile
  SAS/C smakefile -> GNU Makefile

Examples:
  %(prog)s                                  # Auto-detect and convert to stdout
  %(prog)s --from makefile --filetype sasc  # Convert to SAS/C format
  %(prog)s --from lmkfile --to Makefile     # Convert to GNU Make
        """,
    )
    parser.add_argument("--from", dest="source", help="Input makefile (default: search the current directory)")
    parser.add_argument("--to", dest="destination", help="Output file (default: standard output)")
    parser.add_argument("--filetype", help="Target format (default: depends on the source format)")
    parser.add_argument("--dialect", help="Source format, skipping detection")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write to the target format's conventional file name when --to is not given",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite an existing output file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed conversion information")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_argument_parser().parse_args(argv)

    try:
        if args.source:
            source = Path(args.source)
        else:
            source = find_makefile(Path("."))
            if args.verbose:
                print(f"amimake: Found makefile: {source}", file=sys.stderr)

        destination = Path(args.destination) if args.destination else None
        if destination is None and args.save:
            source_dialect = source_dialect_of(source, read_lines(source), args.dialect)
            destination = Path(DEFAULT_FILENAMES[resolve_target(args.filetype, source_dialect)])

        result = convert(
            source,
            destination,
            target=args.filetype,
            dialect=args.dialect,
            force=args.force,
            on_diagnostic=print_diagnostic if args.verbose else None,
        )
    except ConversionError as e:
        print(f"amimake: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"amimake: Detected source format: {display_name(result.source_dialect)}", file=sys.stderr)
        print(f"amimake: Target format: {display_name(result.target_dialect)}", file=sys.stderr)
        print(summarize(result.model), file=sys.stderr)

    if result.destination is not None:
        print(f"amimake: Successfully converted to '{result.destination}'")

    return 0


if __name__ == "__main__":
    sys.exit(main())
