# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type system representations for the PDL semantic model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

# ###############
# Public Interface
# ###############


class TypeKind(Enum):
    """Base kinds a PDL type can have.

    ``TIMESTAMP`` and ``MAP`` never come out of the parser; they are assigned
    by the fix-up pass.
    """

    ANY = "any"
    ARRAY = "array"
    BINARY = "binary"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"
    TIMESTAMP = "timestamp"
    MAP = "map"


# Kinds that can be written as a base type in PDL source.
PRIMITIVE_KINDS: dict[str, TypeKind] = {
    "any": TypeKind.ANY,
    "array": TypeKind.ARRAY,
    "binary": TypeKind.BINARY,
    "boolean": TypeKind.BOOLEAN,
    "integer": TypeKind.INTEGER,
    "number": TypeKind.NUMBER,
    "object": TypeKind.OBJECT,
    "string": TypeKind.STRING,
}


class TimestampType(Enum):
    """Unit of a timestamp type."""

    MILLISECOND = "millisecond"
    SECOND = "second"
    MONOTONIC = "monotonic"


class Redirect(BaseModel):
    """Marks a type, command or event as superseded by one in another domain."""

    domain: str
    name: str = ""

    def __str__(self) -> str:
        if self.name:
            return f"{self.domain}.{self.name}"
        return self.domain


class Type(BaseModel):
    """A PDL type, command, event, or any nested property/parameter/return.

    Attributes:
        kind: Base kind, or None for references and for commands/events.
        name: Declared name (empty for array items).
        ref: Referenced type name (``Name`` or ``Domain.Name``) when the type
            aliases another type.
        items: Element type for arrays.
        properties: Object properties; None until a ``properties`` section
            is seen.
        parameters: Command/event parameters.
        returns: Command return values.
        enum: String enum literals.
        timestamp_type: Unit for ``TIMESTAMP`` kinds.
        no_expose: The type is internal and never exposed by name.
        no_resolve: The type is not resolved against a domain.
        enum_bitmask: Integer enum whose values are bit flags.
    """

    kind: TypeKind | None = None
    name: str = ""
    description: str = ""
    experimental: bool = False
    deprecated: bool = False
    optional: bool = False
    ref: str = ""
    items: Type | None = None
    properties: list[Type] | None = None
    parameters: list[Type] | None = None
    returns: list[Type] | None = None
    redirect: Redirect | None = None
    enum: list[str] | None = None
    timestamp_type: TimestampType | None = None
    no_expose: bool = False
    no_resolve: bool = False
    enum_bitmask: bool = False

    def members(self) -> list[Type]:
        """Return properties, parameters and returns in that order."""
        return [*(self.properties or []), *(self.parameters or []), *(self.returns or [])]


# Resolve forward references in self-referential models.
Type.model_rebuild()
