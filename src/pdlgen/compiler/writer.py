# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Round-trip writer producing PDL text from a Protocol model.

Output layout: the copyright block, the version block, then the domains
sorted by name.  Inside each domain the dependencies come first, followed by
types, commands and events, each group sorted by name.  Parsing the output
and writing it again yields the same text.
"""

from __future__ import annotations

from pdlgen.model.entities import Domain, Protocol
from pdlgen.model.types import Type, TypeKind

# ###############
# Public Interface
# ###############


def serialize(protocol: Protocol) -> str:
    """Serialize *protocol* to PDL source text ending in a single newline."""
    writer = _Writer()
    writer.write_protocol(protocol)
    text = "\n".join(writer.lines).rstrip() + "\n"
    if not protocol.copyright and text.startswith("#"):
        # Keep a leading description from being read back as the copyright.
        text = "\n" + text
    return text


def base_name(typ: Type) -> str:
    """Return the base type token for *typ* as written in PDL."""
    if typ.kind == TypeKind.ARRAY and typ.items is not None:
        return "array of " + base_name(typ.items)
    if typ.ref:
        return typ.ref
    if typ.kind is not None:
        return typ.kind.value
    return "any"


# ################
# Implementation
# ################


class _Writer:
    """Accumulates output lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_protocol(self, protocol: Protocol) -> None:
        if protocol.copyright:
            self._description(protocol.copyright, "")
            self.lines.append("")

        if protocol.version is not None:
            self.lines.append("version")
            self.lines.append(f"  major {protocol.version.major}")
            self.lines.append(f"  minor {protocol.version.minor}")
            self.lines.append("")

        for domain in sorted(protocol.domains, key=lambda d: d.domain):
            self._domain(domain)

    def _domain(self, domain: Domain) -> None:
        self._declaration(
            ["domain", domain.domain],
            domain.description,
            "",
            experimental=domain.experimental,
            deprecated=domain.deprecated,
        )
        for dependency in domain.dependencies:
            self.lines.append(f"  depends on {dependency}")
        self.lines.append("")

        for typ in sorted(domain.types, key=lambda t: t.name):
            self._declaration(
                ["type", typ.name, "extends", base_name(typ)],
                typ.description,
                "  ",
                experimental=typ.experimental,
                deprecated=typ.deprecated,
            )
            self._redirect(typ)
            if typ.enum:
                self.lines.append("    enum")
                self.lines.extend(f"      {literal}" for literal in typ.enum)
            self._members("properties", typ.properties)
            self.lines.append("")

        for keyword, items in (("command", domain.commands), ("event", domain.events)):
            for item in sorted(items, key=lambda t: t.name):
                self._declaration(
                    [keyword, item.name],
                    item.description,
                    "  ",
                    experimental=item.experimental,
                    deprecated=item.deprecated,
                )
                self._redirect(item)
                self._members("parameters", item.parameters)
                if keyword == "command":
                    self._members("returns", item.returns)
                self.lines.append("")

    def _members(self, section: str, members: list[Type] | None) -> None:
        if not members:
            return
        self.lines.append(f"    {section}")
        for member in members:
            if member.kind == TypeKind.ARRAY and member.enum:
                base = "array of enum"
            elif member.enum:
                base = "enum"
            else:
                base = base_name(member)
            self._declaration(
                [base, member.name],
                member.description,
                "      ",
                experimental=member.experimental,
                deprecated=member.deprecated,
                optional=member.optional,
            )
            if member.enum:
                self.lines.extend(f"        {literal}" for literal in member.enum)

    def _redirect(self, item: Type) -> None:
        if item.redirect is None:
            return
        if item.redirect.name:
            self.lines.append(f"    # Use '{item.redirect}' instead")
        self.lines.append(f"    redirect {item.redirect.domain}")

    def _declaration(
        self,
        words: list[str],
        description: str,
        indent: str,
        *,
        experimental: bool = False,
        deprecated: bool = False,
        optional: bool = False,
    ) -> None:
        self._description(description, indent)
        modifiers = [
            name
            for name, flag in (
                ("experimental", experimental),
                ("deprecated", deprecated),
                ("optional", optional),
            )
            if flag
        ]
        self.lines.append(indent + " ".join([*modifiers, *words]))

    def _description(self, description: str, indent: str) -> None:
        if not description:
            return
        for line in description.split("\n"):
            self.lines.append(f"{indent}# {line}" if line else f"{indent}#")
