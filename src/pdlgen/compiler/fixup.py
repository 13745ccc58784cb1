# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Normalization pass over parsed PDL domains.

Runs once over the complete model, after parsing (and merging), and mutates
it in place.  For each domain, in order:

1. Add the synthesized types configured for the domain.
2. Point configured members (``Domain.Owner.member``) at fixed references.
3. Rename types listed in the rename table.
4. Turn configured types into timestamp and map kinds.
5. Convert the members of every type, event and command: promote inline
   enums to named types, apply field-name references, follow renames and
   drop stuttering domain prefixes from references.
6. Strip the domain name from type names that start with it.

Every protocol-specific decision comes from :class:`FixupTables`.  Once all
domains are processed every reference is resolved again; an unresolvable
reference is fatal.
"""

from __future__ import annotations

import structlog

from pdlgen.compiler.naming import camel_identifier
from pdlgen.compiler.resolver import iter_refs, resolve, split_ref
from pdlgen.config.tables import FixupTables
from pdlgen.model.entities import Domain
from pdlgen.model.types import Type, TypeKind

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


class EnumCollisionError(Exception):
    """Raised when promoted enum literals claim a name already used by an incompatible type.

    Attributes:
        name: The contested type name.
        domain: The domain the collision happened in.
    """

    def __init__(self, name: str, domain: str) -> None:
        super().__init__(f"enum '{name}' in domain {domain} collides with an existing non-enum type")
        self.name = name
        self.domain = domain


def fix_domains(domains: list[Domain], tables: FixupTables, *, verify: bool = True) -> None:
    """Normalize *domains* in place.

    Args:
        domains: All domains of the model; references are resolved across them.
        tables: Curated tables driving the protocol-specific fixes.
        verify: Re-resolve every reference once all domains are processed.

    Raises:
        EnumCollisionError: If an inline enum cannot be merged into an
            existing type of the same name.
        ResolutionError: If *verify* is set and a reference no longer resolves.
    """
    for domain in domains:
        _DomainFixer(domain, tables).run()
    if verify:
        verify_references(domains, tables)


def verify_references(domains: list[Domain], tables: FixupTables) -> None:
    """Resolve every reference in *domains*, raising on the first failure.

    Raises:
        ResolutionError: If a reference cannot be resolved.
    """
    for domain in domains:
        for _path, typ in iter_refs(domain):
            if typ.no_resolve:
                continue
            resolve(
                typ.ref,
                domain,
                domains,
                tables.is_shared,
                shared_namespace=tables.shared_namespace,
            )


def strip_prefix(name: str, prefix: str) -> str:
    """Drop *prefix* from *name*, unless nothing would be left."""
    stripped = name.removeprefix(prefix)
    return stripped or name


# ################
# Implementation
# ################


def _make_ref(typ: Type, ref: str) -> None:
    """Turn *typ* into a plain reference to *ref*."""
    typ.ref = ref
    typ.kind = None
    typ.items = None
    typ.enum = None


class _DomainFixer:
    """Applies the fix-up steps to one domain."""

    def __init__(self, domain: Domain, tables: FixupTables) -> None:
        self._domain = domain
        self._name = domain.domain
        self._tables = tables

    def run(self) -> None:
        self._add_synthesized_types()
        self._apply_member_refs()
        self._rename_types()
        self._convert_kinds()

        for typ in self._domain.types:
            if typ.ref:
                typ.ref = self._normalize_ref(typ.ref)
            if typ.items is not None and typ.items.ref:
                typ.items.ref = self._normalize_ref(typ.items.ref)
            if typ.properties is not None:
                typ.properties = self._convert_members(typ.properties, typ.name)
        for item in [*self._domain.events, *self._domain.commands]:
            if item.parameters is not None:
                item.parameters = self._convert_members(item.parameters, item.name)
            if item.returns is not None:
                item.returns = self._convert_members(item.returns, item.name)

        self._strip_type_stutter()

    # ------------------------------------------------------------------
    # Table-driven type fixes
    # ------------------------------------------------------------------

    def _add_synthesized_types(self) -> None:
        for spec in self._tables.synthesized_types:
            if spec.domain != self._name or self._domain.find_type(spec.name) is not None:
                continue
            self._domain.types.append(
                Type(
                    name=spec.name,
                    kind=spec.kind,
                    description=spec.description,
                    enum=list(spec.enum),
                    enum_bitmask=spec.bitmask,
                )
            )
            log.debug("added type", domain=self._name, type=spec.name)

    def _apply_member_refs(self) -> None:
        owners = [*self._domain.types, *self._domain.commands, *self._domain.events]
        for owner in owners:
            for member in owner.members():
                ref = self._tables.member_refs.get(f"{self._name}.{owner.name}.{member.name}")
                if ref is not None:
                    _make_ref(member, ref)

    def _rename_types(self) -> None:
        for typ in self._domain.types:
            new_name = self._tables.type_renames.get(f"{self._name}.{typ.name}")
            if new_name is not None:
                log.debug("renamed type", domain=self._name, old=typ.name, new=new_name)
                typ.name = new_name

    def _convert_kinds(self) -> None:
        for typ in self._domain.types:
            key = f"{self._name}.{typ.name}"
            unit = self._tables.timestamps.get(key)
            if unit is not None:
                typ.kind = TypeKind.TIMESTAMP
                typ.timestamp_type = unit
            if key in self._tables.map_types:
                typ.kind = TypeKind.MAP
                typ.ref = ""

    def _strip_type_stutter(self) -> None:
        for typ in self._domain.types:
            if typ.no_expose or typ.no_resolve:
                continue
            typ.name = strip_prefix(typ.name, self._name)

    # ------------------------------------------------------------------
    # Member conversion
    # ------------------------------------------------------------------

    def _convert_members(self, members: list[Type], owner: str) -> list[Type]:
        return [self._convert_member(member, owner) for member in members]

    def _convert_member(self, member: Type, owner: str) -> Type:
        if member.items is not None:
            if member.enum:
                # 'array of enum' carries its literals on the array itself.
                member.items.enum = member.enum
                member.enum = None
            member.items = self._convert_member(member.items, f"{owner}.{member.name}")
            return member

        if member.enum:
            self._promote_enum(member, owner)
            return member

        field_ref = self._tables.field_refs.get(member.name)
        if field_ref is not None:
            _make_ref(member, field_ref)

        if member.ref and not member.no_expose and not member.no_resolve:
            member.ref = self._normalize_ref(member.ref)
        return member

    def _promote_enum(self, member: Type, owner: str) -> None:
        """Replace the inline enum on *member* with a reference to a named type."""
        literals = member.enum or []
        fqname = f"{self._name}.{owner}.{member.name}".removesuffix(".")
        name = self._tables.enum_names.get(fqname) or camel_identifier(f"{owner}.{member.name}")

        existing = self._domain.find_type(name)
        if existing is None:
            self._domain.types.append(
                Type(
                    name=name,
                    kind=TypeKind.STRING,
                    description=member.description,
                    enum=list(literals),
                )
            )
        else:
            if existing.kind != TypeKind.STRING or existing.enum is None:
                raise EnumCollisionError(name, self._name)
            for literal in literals:
                if literal not in existing.enum:
                    existing.enum.append(literal)

        log.debug("promoted enum", domain=self._name, field=fqname, type=name)
        _make_ref(member, self._normalize_ref(name))

    def _normalize_ref(self, ref: str) -> str:
        """Follow type renames and drop the stuttering domain prefix from *ref*."""
        target, name = split_ref(ref, self._name)
        qualified = "." in ref

        new_name = self._tables.type_renames.get(f"{target}.{name}")
        if new_name is not None:
            name = new_name
        name = strip_prefix(name, target)

        if qualified:
            return f"{target}.{name}"
        return name
