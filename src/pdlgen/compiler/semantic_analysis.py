# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis for parsed PDL protocols.

Checks structural correctness of the parsed model: duplicate names, types
whose shape is contradictory and references that do not resolve.  Unlike the
fix-up pass, analysis never mutates the model and reports every problem it
finds instead of stopping at the first.
"""

from __future__ import annotations

from dataclasses import dataclass

from pdlgen.compiler.resolver import resolve_all
from pdlgen.config.tables import FixupTables
from pdlgen.model.entities import Domain, Protocol
from pdlgen.model.types import Type, TypeKind

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SemanticError:
    """A structural error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


def analyze(protocol: Protocol, tables: FixupTables | None = None) -> list[SemanticError]:
    """Perform semantic analysis on a parsed Protocol.

    Checks performed:
    - Duplicate domain names.
    - Duplicate type, command and event names within each domain.
    - Duplicate member names within each properties, parameters and
      returns list.
    - Duplicate enum literals.
    - Shape consistency: an array must have an element type, properties
      belong only to object types, and a reference cannot also carry a
      primitive kind.
    - Every reference must resolve to a known type.

    Args:
        protocol: The parsed Protocol to analyze.
        tables: Fix-up tables providing the shared-type predicate.  The
            empty table set is used when omitted.

    Returns:
        A list of :class:`SemanticError` instances.  An empty list means the
        protocol is semantically valid.
    """
    tables = tables if tables is not None else FixupTables()
    errors: list[SemanticError] = []

    _check_duplicates(
        [d.domain for d in protocol.domains],
        "domain",
        "protocol",
        errors,
    )
    for domain in protocol.domains:
        _check_domain(domain, errors)

    for exc in resolve_all(protocol, tables.is_shared):
        errors.append(SemanticError(message=str(exc)))
    return errors


# ################
# Implementation
# ################


def _check_duplicates(names: list[str], kind: str, context: str, errors: list[SemanticError]) -> None:
    """Append one error per name that appears more than once."""
    seen: set[str] = set()
    reported: set[str] = set()
    for name in names:
        if name in seen and name not in reported:
            errors.append(SemanticError(message=f"Duplicate {kind} name '{name}' in {context}"))
            reported.add(name)
        seen.add(name)


def _check_domain(domain: Domain, errors: list[SemanticError]) -> None:
    ctx = f"domain '{domain.domain}'"
    _check_duplicates([t.name for t in domain.types], "type", ctx, errors)
    _check_duplicates([c.name for c in domain.commands], "command", ctx, errors)
    _check_duplicates([e.name for e in domain.events], "event", ctx, errors)

    for kind, items in (("type", domain.types), ("command", domain.commands), ("event", domain.events)):
        for item in items:
            _check_type(item, f"{kind} '{domain.domain}.{item.name}'", errors)


def _check_type(typ: Type, context: str, errors: list[SemanticError]) -> None:
    if typ.kind == TypeKind.ARRAY and typ.items is None:
        errors.append(SemanticError(message=f"{context}: array without an element type"))
    if typ.properties is not None and typ.kind not in (TypeKind.OBJECT, None):
        errors.append(SemanticError(message=f"{context}: properties on a non-object type"))
    if typ.ref and typ.kind is not None:
        errors.append(SemanticError(message=f"{context}: reference '{typ.ref}' together with kind '{typ.kind.value}'"))
    if typ.enum is not None:
        _check_duplicates(typ.enum, "enum literal", context, errors)

    for section in ("properties", "parameters", "returns"):
        members: list[Type] | None = getattr(typ, section)
        if members is None:
            continue
        _check_duplicates([m.name for m in members], "member", f"{context} {section}", errors)
        for member in members:
            _check_type(member, f"{context} member '{member.name}'", errors)

    if typ.items is not None:
        _check_type(typ.items, f"{context} items", errors)
