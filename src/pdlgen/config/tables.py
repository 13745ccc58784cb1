# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the curated fix-up tables.

The fix-up pass is generic; every protocol-specific exception (circular
dependencies, enum names, renames, timestamp types, ...) is data loaded from
a YAML file.  A default table set ships with the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

import yaml

from pdlgen.model.types import PRIMITIVE_KINDS, TimestampType, TypeKind

# ###############
# Public Interface
# ###############

DEFAULT_TABLES_RESOURCE = "fixups.yaml"

DEFAULT_SHARED_NAMESPACE = "cdp"


class ConfigError(Exception):
    """Raised when a fix-up table file is invalid or cannot be loaded."""


@dataclass
class SynthesizedType:
    """A type added to a domain by the fix-up pass."""

    domain: str
    name: str
    kind: TypeKind
    description: str = ""
    enum: list[str] = field(default_factory=list)
    bitmask: bool = False


@dataclass
class FixupTables:
    """Curated exception tables consumed by the fix-up pass.

    Keys of the form ``Domain.Type`` or ``Domain.Owner.member`` are matched
    exactly; circular-dependency entries are matched case-insensitively.

    Attributes:
        shared_namespace: Namespace that hoisted shared types live in.
        circular_dependencies: ``domain.type`` entries causing import cycles.
        enum_names: Explicit names for promoted enums, by qualified field.
        type_renames: New bare names for types, by ``Domain.OldName``.
        timestamps: Timestamp unit for types, by ``Domain.Type``.
        map_types: Types that become string-to-any mappings.
        field_refs: Reference assigned to any member with the given name.
        member_refs: Reference assigned to specific qualified members.
        synthesized_types: Types added to their domain before conversion.
    """

    shared_namespace: str = DEFAULT_SHARED_NAMESPACE
    circular_dependencies: list[str] = field(default_factory=list)
    enum_names: dict[str, str] = field(default_factory=dict)
    type_renames: dict[str, str] = field(default_factory=dict)
    timestamps: dict[str, TimestampType] = field(default_factory=dict)
    map_types: list[str] = field(default_factory=list)
    field_refs: dict[str, str] = field(default_factory=dict)
    member_refs: dict[str, str] = field(default_factory=dict)
    synthesized_types: list[SynthesizedType] = field(default_factory=list)

    def is_shared(self, domain: str, name: str) -> bool:
        """Return whether ``domain.name`` is hoisted into the shared namespace."""
        key = f"{domain}.{name}".lower()
        return any(entry.lower() == key for entry in self.circular_dependencies)


def load_tables(path: Path) -> FixupTables:
    """Load fix-up tables from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        A FixupTables instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or its content is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Fix-up table file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read fix-up table file: {exc}") from exc

    return parse_tables(text, source_label=str(path))


def default_tables() -> FixupTables:
    """Load the table set bundled with the package."""
    text = resources.files("pdlgen.config").joinpath(DEFAULT_TABLES_RESOURCE).read_text(encoding="utf-8")
    return parse_tables(text, source_label=DEFAULT_TABLES_RESOURCE)


def parse_tables(text: str, source_label: str = "<string>") -> FixupTables:
    """Parse fix-up table YAML text.

    An empty document yields empty tables.

    Raises:
        ConfigError: If the YAML is invalid or a table has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return FixupTables()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: fix-up tables must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    tables = FixupTables()
    if "shared-namespace" in data:
        tables.shared_namespace = _require_string(data, "shared-namespace", source_label)
    tables.circular_dependencies = _string_list(data, "circular-dependencies", source_label)
    tables.enum_names = _string_map(data, "enum-names", source_label)
    tables.type_renames = _string_map(data, "type-renames", source_label)
    tables.map_types = _string_list(data, "map-types", source_label)
    tables.field_refs = _string_map(data, "field-refs", source_label)
    tables.member_refs = _string_map(data, "member-refs", source_label)

    for key, unit in _string_map(data, "timestamps", source_label).items():
        try:
            tables.timestamps[key] = TimestampType(unit)
        except ValueError:
            raise ConfigError(
                f"{source_label}: timestamps['{key}'] must be one of "
                f"{', '.join(t.value for t in TimestampType)}, got '{unit}'"
            ) from None

    raw_types = data.get("synthesized-types", [])
    if not isinstance(raw_types, list):
        raise ConfigError(f"{source_label}: 'synthesized-types' must be a list")
    for index, entry in enumerate(raw_types):
        tables.synthesized_types.append(_parse_synthesized_type(entry, index, source_label))

    return tables


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset(
    {
        "shared-namespace",
        "circular-dependencies",
        "enum-names",
        "type-renames",
        "timestamps",
        "map-types",
        "field-refs",
        "member-refs",
        "synthesized-types",
    }
)


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising ConfigError if missing."""
    if key not in mapping:
        raise ConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _string_list(mapping: dict[str, object], key: str, source_label: str) -> list[str]:
    value = mapping.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{source_label}: '{key}' must be a list of strings")
    return list(value)


def _string_map(mapping: dict[str, object], key: str, source_label: str) -> dict[str, str]:
    value = mapping.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
        raise ConfigError(f"{source_label}: '{key}' must be a mapping of strings to strings")
    return dict(value)


def _parse_synthesized_type(entry: object, index: int, source_label: str) -> SynthesizedType:
    """Parse a single synthesized type entry from the YAML list."""
    location = f"{source_label}: synthesized-types[{index}]"

    if not isinstance(entry, dict):
        raise ConfigError(f"{location} must be a YAML mapping")

    domain = _require_string(entry, "domain", location)
    name = _require_string(entry, "name", location)
    kind_name = _require_string(entry, "kind", location)
    kind = PRIMITIVE_KINDS.get(kind_name)
    if kind is None:
        raise ConfigError(f"{location} '{name}': unknown kind '{kind_name}'")

    description = entry.get("description", "")
    if not isinstance(description, str):
        raise ConfigError(f"{location} '{name}': 'description' must be a string")
    enum = _string_list(entry, "enum", location)
    bitmask = entry.get("bitmask", False)
    if not isinstance(bitmask, bool):
        raise ConfigError(f"{location} '{name}': 'bitmask' must be a boolean")

    return SynthesizedType(
        domain=domain,
        name=name,
        kind=kind,
        description=description,
        enum=enum,
        bitmask=bitmask,
    )
