# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Single-pass parser for PDL files.

Consumes the classified lines produced by the scanner, top to bottom, and
builds a Protocol semantic model.  All parser state lives in an explicit
ParserContext that is threaded through the :func:`step` reducer, so partial
line sequences can be fed and the resulting context inspected.
"""

import enum
import re
from dataclasses import dataclass, field

from pdlgen.compiler.scanner import Line, LineKind, ParseError, classify, scan
from pdlgen.model.entities import Domain, Protocol, Version
from pdlgen.model.types import PRIMITIVE_KINDS, Redirect, Type, TypeKind

# ###############
# Public Interface
# ###############


class Slot(enum.Enum):
    """A list on a Type that the parser can append to."""

    PROPERTIES = "properties"
    PARAMETERS = "parameters"
    RETURNS = "returns"
    ENUM = "enum"


@dataclass(frozen=True)
class InsertionTarget:
    """Where the next member or enum literal is appended.

    Attributes:
        slot: Which list on the owner receives new entries.
        owner: The Type owning the list.
    """

    slot: Slot
    owner: Type

    def items(self) -> list:
        """Return the owner's live list for this slot."""
        values = getattr(self.owner, self.slot.value)
        if values is None:
            values = []
            setattr(self.owner, self.slot.value, values)
        return values


@dataclass
class ParserContext:
    """State carried across the single pass over the source lines.

    Attributes:
        protocol: The model being built.
        domain: The most recently opened domain.
        item: The most recently opened type, command or event.
        sub_items: Target for member declarations.
        enum_literals: Target for enum literal lines.
        description: Pending comment lines for the next declaration.
        copyright_captured: Whether the file-level copyright has been taken.
    """

    protocol: Protocol = field(default_factory=Protocol)
    domain: Domain | None = None
    item: Type | None = None
    sub_items: InsertionTarget | None = None
    enum_literals: InsertionTarget | None = None
    description: list[str] = field(default_factory=list)
    copyright_captured: bool = False

    def pending_description(self) -> str:
        """Return the pending comment block as one newline-joined string."""
        return "\n".join(self.description).strip()


def parse(source: str) -> Protocol:
    """Parse PDL source text into a Protocol model.

    Args:
        source: The full text of a PDL file.

    Returns:
        A Protocol with domains in declaration order.

    Raises:
        ParseError: If a line is not recognized or appears where the block
            structure does not allow it.
    """
    context = ParserContext()
    for line in scan(source):
        step(context, line)
    return context.protocol


def step(context: ParserContext, line: Line | str, index: int = 0) -> None:
    """Apply one source line to *context*.

    Accepts either an already classified Line or a raw string, which is
    classified first using *index* for error reporting.
    """
    if isinstance(line, str):
        line = classify(line, index)

    if line.kind == LineKind.COMMENT:
        context.description.append(line.groups[0])
        return

    if not context.copyright_captured:
        context.protocol.copyright = context.pending_description()
        context.copyright_captured = True

    try:
        handler = _HANDLERS.get(line.kind)
        if handler is not None:
            handler(context, line)
    finally:
        context.description.clear()


def assign_type(target: Type, token: str, is_array: bool) -> None:
    """Assign the base type named by *token* to *target*.

    Arrays get an ``items`` Type assigned recursively.  The pseudo base type
    ``enum`` is a string whose literals follow on later lines.  Any token that
    is not a primitive kind is stored as a reference.
    """
    if is_array:
        target.kind = TypeKind.ARRAY
        target.items = Type()
        assign_type(target.items, token, False)
        return

    if token == "enum":
        token = "string"

    kind = PRIMITIVE_KINDS.get(token)
    if kind is not None:
        target.kind = kind
    else:
        target.ref = token


# ################
# Implementation
# ################

_REDIRECT_COMMENT = re.compile(r"^Use '([^']+)' instead$")

_SECTION_SLOTS: dict[str, Slot] = {
    "parameters": Slot.PARAMETERS,
    "returns": Slot.RETURNS,
    "properties": Slot.PROPERTIES,
}


def _require_domain(context: ParserContext, line: Line) -> Domain:
    if context.domain is None:
        raise ParseError(f"{line.kind.value} line outside of a domain", line.index, line.text)
    return context.domain


def _require_item(context: ParserContext, line: Line) -> Type:
    if context.item is None:
        raise ParseError(
            f"{line.kind.value} line outside of a type, command or event",
            line.index,
            line.text,
        )
    return context.item


def _require_version(context: ParserContext, line: Line) -> Version:
    if context.protocol.version is None:
        raise ParseError(f"{line.kind.value} line before 'version'", line.index, line.text)
    return context.protocol.version


def _on_domain(context: ParserContext, line: Line) -> None:
    experimental, deprecated, name = line.groups
    domain = Domain(
        domain=name.strip(),
        experimental=experimental != "",
        deprecated=deprecated != "",
        description=context.pending_description(),
    )
    context.protocol.domains.append(domain)
    context.domain = domain
    context.item = None
    context.sub_items = None
    context.enum_literals = None


def _on_depends(context: ParserContext, line: Line) -> None:
    _require_domain(context, line).dependencies.append(line.groups[0])


def _on_type(context: ParserContext, line: Line) -> None:
    domain = _require_domain(context, line)
    experimental, deprecated, name, array_of, base = line.groups
    item = Type(
        name=name.strip(),
        experimental=experimental != "",
        deprecated=deprecated != "",
        description=context.pending_description(),
    )
    assign_type(item, base, array_of != "")
    domain.types.append(item)
    _open_item(context, item)


def _on_command_event(context: ParserContext, line: Line) -> None:
    domain = _require_domain(context, line)
    experimental, deprecated, keyword, name = line.groups
    item = Type(
        name=name.strip(),
        experimental=experimental != "",
        deprecated=deprecated != "",
        description=context.pending_description(),
    )
    if keyword == "command":
        domain.commands.append(item)
    else:
        domain.events.append(item)
    _open_item(context, item)


def _open_item(context: ParserContext, item: Type) -> None:
    context.item = item
    context.sub_items = None
    context.enum_literals = None


def _on_member(context: ParserContext, line: Line) -> None:
    if context.sub_items is None:
        raise ParseError("member declared before a parameters, returns or properties section", line.index, line.text)
    experimental, deprecated, optional, array_of, base, name = line.groups
    member = Type(
        name=name,
        experimental=experimental != "",
        deprecated=deprecated != "",
        optional=optional != "",
        description=context.pending_description(),
    )
    assign_type(member, base, array_of != "")
    if base == "enum":
        member.enum = []
        context.enum_literals = InsertionTarget(Slot.ENUM, member)
    context.sub_items.items().append(member)


def _on_section(context: ParserContext, line: Line) -> None:
    item = _require_item(context, line)
    slot = _SECTION_SLOTS[line.groups[0]]
    setattr(item, slot.value, [])
    context.sub_items = InsertionTarget(slot, item)


def _on_enum(context: ParserContext, line: Line) -> None:
    item = _require_item(context, line)
    item.enum = []
    context.enum_literals = InsertionTarget(Slot.ENUM, item)


def _on_version(context: ParserContext, line: Line) -> None:
    context.protocol.version = Version()


def _on_major(context: ParserContext, line: Line) -> None:
    _require_version(context, line).major = int(line.groups[0])


def _on_minor(context: ParserContext, line: Line) -> None:
    _require_version(context, line).minor = int(line.groups[0])


def _on_redirect(context: ParserContext, line: Line) -> None:
    item = _require_item(context, line)
    redirect = Redirect(domain=line.groups[0])
    match = _REDIRECT_COMMENT.match(context.pending_description())
    if match is not None:
        redirect.name = match.group(1).rsplit(".", 1)[-1]
    item.redirect = redirect


def _on_enum_literal(context: ParserContext, line: Line) -> None:
    if context.enum_literals is None:
        raise ParseError("enum literal outside of an enum block", line.index, line.text)
    context.enum_literals.items().append(line.groups[0])


_HANDLERS = {
    LineKind.DOMAIN: _on_domain,
    LineKind.DEPENDS: _on_depends,
    LineKind.TYPE: _on_type,
    LineKind.COMMAND_EVENT: _on_command_event,
    LineKind.MEMBER: _on_member,
    LineKind.SECTION: _on_section,
    LineKind.ENUM: _on_enum,
    LineKind.VERSION: _on_version,
    LineKind.MAJOR: _on_major,
    LineKind.MINOR: _on_minor,
    LineKind.REDIRECT: _on_redirect,
    LineKind.ENUM_LITERAL: _on_enum_literal,
}
