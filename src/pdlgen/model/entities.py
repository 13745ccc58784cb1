# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Domains and protocol containers for the PDL semantic model."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

from pdlgen.model.types import Type

# ###############
# Public Interface
# ###############


class Version(BaseModel):
    """Protocol version information."""

    major: int = 0
    minor: int = 0


class Domain(BaseModel):
    """A named namespace grouping related types, commands and events."""

    domain: str
    description: str = ""
    experimental: bool = False
    deprecated: bool = False
    dependencies: list[str] = _Field(default_factory=list)
    types: list[Type] = _Field(default_factory=list)
    commands: list[Type] = _Field(default_factory=list)
    events: list[Type] = _Field(default_factory=list)

    def find_type(self, name: str) -> Type | None:
        """Return the first type declared under *name*, or None."""
        for typ in self.types:
            if typ.name == name:
                return typ
        return None


class Protocol(BaseModel):
    """Top-level model representing one or more parsed PDL files."""

    copyright: str = ""
    version: Version | None = None
    domains: list[Domain] = _Field(default_factory=list)

    def find_domain(self, name: str) -> Domain | None:
        """Return the first domain called *name*, or None."""
        for domain in self.domains:
            if domain.domain == name:
                return domain
        return None
