# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for PDL files: scanning, parsing, resolution and fix-up."""

from pdlgen.compiler.artifact import (
    ARTIFACT_SUFFIX,
    deserialize_artifact,
    read_artifact,
    serialize_artifact,
    write_artifact,
)
from pdlgen.compiler.build import CompilerError, compile_files, load_files
from pdlgen.compiler.fixup import EnumCollisionError, fix_domains, verify_references
from pdlgen.compiler.merge import combine
from pdlgen.compiler.parser import parse
from pdlgen.compiler.resolver import Resolution, ResolutionError, resolve
from pdlgen.compiler.scanner import ParseError
from pdlgen.compiler.semantic_analysis import SemanticError, analyze
from pdlgen.compiler.writer import serialize

__all__ = [
    "parse",
    "ParseError",
    "resolve",
    "Resolution",
    "ResolutionError",
    "fix_domains",
    "verify_references",
    "EnumCollisionError",
    "combine",
    "serialize",
    "analyze",
    "SemanticError",
    "serialize_artifact",
    "deserialize_artifact",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "compile_files",
    "load_files",
    "CompilerError",
]
