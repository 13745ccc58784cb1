# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for PDL files (domains, types, commands, events)."""

from pdlgen.model.entities import Domain, Protocol, Version
from pdlgen.model.types import (
    PRIMITIVE_KINDS,
    Redirect,
    TimestampType,
    Type,
    TypeKind,
)

__all__ = [
    # Type system
    "TypeKind",
    "TimestampType",
    "PRIMITIVE_KINDS",
    "Redirect",
    "Type",
    # Entities
    "Version",
    "Domain",
    "Protocol",
]
