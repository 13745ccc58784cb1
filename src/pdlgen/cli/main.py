# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the pdlgen command-line interface."""

import argparse
import sys
from pathlib import Path

from pdlgen.compiler.artifact import serialize_artifact, write_artifact
from pdlgen.compiler.build import CompilerError, compile_files, load_files
from pdlgen.compiler.semantic_analysis import analyze
from pdlgen.compiler.writer import serialize
from pdlgen.config.logging import configure_logging
from pdlgen.config.tables import ConfigError, FixupTables, default_tables, load_tables

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the pdlgen CLI."""
    parser = argparse.ArgumentParser(
        prog="pdlgen",
        description="pdlgen: protocol definition (PDL) parser and normalizer",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit log records as JSON lines on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check PDL files for structural errors",
        description="Parse and combine PDL files, then report duplicate names, malformed types and "
        "unresolved references.",
    )
    check_parser.add_argument("files", nargs="+", type=Path, help="PDL files to check")
    _add_config_argument(check_parser)

    # format subcommand
    format_parser = subparsers.add_parser(
        "format",
        help="Rewrite PDL files in canonical form",
        description="Parse and combine PDL files and write them back as a single canonical PDL document.",
    )
    format_parser.add_argument("files", nargs="+", type=Path, help="PDL files to format")
    _add_output_argument(format_parser)

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Run the full pipeline and write the normalized protocol",
        description="Parse, combine and fix up PDL files, writing the result as PDL or as a JSON artifact.",
    )
    build_parser.add_argument("files", nargs="+", type=Path, help="PDL files to build")
    _add_output_argument(build_parser)
    _add_config_argument(build_parser)
    build_parser.add_argument(
        "--json",
        action="store_true",
        help="Write a JSON artifact instead of PDL text",
    )
    build_parser.add_argument(
        "--prune",
        action="store_true",
        help="Drop deprecated domains and deprecated or redirected items before the fix-up pass",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(verbose=args.verbose, log_json=args.log_json)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: standard output)",
    )


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with fix-up tables (default: the bundled tables)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "format":
        return _cmd_format(args)
    if args.command == "build":
        return _cmd_build(args)
    return 0


def _load_tables(args: argparse.Namespace) -> FixupTables:
    if args.config is None:
        return default_tables()
    return load_tables(args.config)


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        tables = _load_tables(args)
        protocol = load_files(args.files)
    except (ConfigError, CompilerError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Checking {len(args.files)} PDL file(s)...")
    errors = analyze(protocol, tables)
    for error in errors:
        print(f"Error: {error.message}", file=sys.stderr)
    if errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    """Handle the format subcommand."""
    try:
        protocol = load_files(args.files)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _emit(serialize(protocol), args.output)
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """Handle the build subcommand."""
    try:
        tables = _load_tables(args)
        protocol = compile_files(args.files, tables, prune=args.prune)
    except (ConfigError, CompilerError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json and args.output is not None:
        write_artifact(protocol, args.output)
    elif args.json:
        sys.stdout.write(serialize_artifact(protocol) + "\n")
    else:
        _emit(serialize(protocol), args.output)
    return 0
