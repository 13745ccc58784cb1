# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler workflow for .pdl files.

Reads every source file, parses it, combines the results into a single
protocol, optionally prunes deprecated entries and finally runs the fix-up
pass with reference verification.  Any failure aborts the whole build; no
partial model is returned.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from pdlgen.compiler.fixup import EnumCollisionError, fix_domains
from pdlgen.compiler.merge import combine
from pdlgen.compiler.parser import parse
from pdlgen.compiler.prune import prune as prune_protocol
from pdlgen.compiler.resolver import ResolutionError
from pdlgen.compiler.scanner import ParseError
from pdlgen.config.tables import FixupTables
from pdlgen.model.entities import Protocol

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when the compiler encounters any unrecoverable error.

    Covers unreadable files, parse errors, enum collisions and references
    that do not resolve after the fix-up pass.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


def load_files(files: list[Path]) -> Protocol:
    """Read and parse *files*, combining them into one protocol.

    Raises:
        CompilerError: If a file cannot be read or parsed.
    """
    protocols: list[Protocol] = []
    for path in files:
        log.debug("loading", path=str(path))
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CompilerError(f"Cannot read '{path}': {exc}") from exc
        try:
            protocol = parse(source)
        except ParseError as exc:
            raise CompilerError(f"Parse error in '{path}': {exc}") from exc
        log.info("parsed", path=str(path), domains=len(protocol.domains))
        protocols.append(protocol)
    return combine(*protocols)


def compile_files(
    files: list[Path],
    tables: FixupTables,
    *,
    prune: bool = False,
    fixup: bool = True,
) -> Protocol:
    """Compile a list of .pdl source files into one normalized protocol.

    Args:
        files: Paths of the source files, combined in the given order.
        tables: Fix-up tables driving normalization.
        prune: Drop deprecated domains and deprecated or redirected items
            before the fix-up pass.
        fixup: Run the fix-up pass and reference verification.

    Returns:
        The combined (and, unless disabled, fixed-up) protocol.

    Raises:
        CompilerError: On unreadable files, parse errors, enum collisions or
            unresolved references.
    """
    protocol = load_files(files)
    if prune:
        prune_protocol(protocol)
    if not fixup:
        return protocol

    try:
        fix_domains(protocol.domains, tables)
    except EnumCollisionError as exc:
        raise CompilerError(f"Fix-up failed: {exc}") from exc
    except ResolutionError as exc:
        raise CompilerError(f"Unresolved reference: {exc}") from exc
    return protocol
