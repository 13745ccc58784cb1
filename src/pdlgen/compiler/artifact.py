# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of Protocol artifacts.

Artifacts are stored as compact JSON files for caching and diffing.  The
format is versioned so future schema changes can be detected.  Unlike the
PDL writer, artifacts also carry the fix-up-only attributes (timestamp and
map kinds, exposure flags, bitmask enums).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pdlgen.model.entities import Domain, Protocol, Version
from pdlgen.model.types import Redirect, TimestampType, Type, TypeKind

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"

ARTIFACT_SUFFIX = ".pdl.json"


def serialize_artifact(protocol: Protocol) -> str:
    """Serialize a Protocol to a compact JSON string."""
    return json.dumps(_protocol_to_dict(protocol), separators=(",", ":"))


def deserialize_artifact(data: str) -> Protocol:
    """Deserialize a Protocol from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize_artifact`.

    Returns:
        The reconstructed :class:`Protocol` model.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _protocol_from_dict(obj)


def write_artifact(protocol: Protocol, path: Path) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_artifact(protocol), encoding="utf-8")


def read_artifact(path: Path) -> Protocol:
    """Read and deserialize an artifact from *path*."""
    return deserialize_artifact(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################

_FLAGS = ("experimental", "deprecated", "optional", "no_expose", "no_resolve", "enum_bitmask")

_LISTS = ("properties", "parameters", "returns")


def _protocol_to_dict(protocol: Protocol) -> dict[str, Any]:
    d: dict[str, Any] = {
        "v": ARTIFACT_FORMAT_VERSION,
        "copyright": protocol.copyright,
        "domains": [_domain_to_dict(dom) for dom in protocol.domains],
    }
    if protocol.version is not None:
        d["version"] = [protocol.version.major, protocol.version.minor]
    return d


def _protocol_from_dict(obj: dict[str, Any]) -> Protocol:
    version = None
    if "version" in obj:
        major, minor = obj["version"]
        version = Version(major=major, minor=minor)
    return Protocol(
        copyright=obj.get("copyright", ""),
        version=version,
        domains=[_domain_from_dict(dom) for dom in obj.get("domains", [])],
    )


def _domain_to_dict(domain: Domain) -> dict[str, Any]:
    d: dict[str, Any] = {
        "domain": domain.domain,
        "dependencies": domain.dependencies,
        "types": [_type_to_dict(t) for t in domain.types],
        "commands": [_type_to_dict(c) for c in domain.commands],
        "events": [_type_to_dict(e) for e in domain.events],
    }
    if domain.description:
        d["description"] = domain.description
    if domain.experimental:
        d["experimental"] = True
    if domain.deprecated:
        d["deprecated"] = True
    return d


def _domain_from_dict(obj: dict[str, Any]) -> Domain:
    return Domain(
        domain=obj["domain"],
        description=obj.get("description", ""),
        experimental=obj.get("experimental", False),
        deprecated=obj.get("deprecated", False),
        dependencies=obj.get("dependencies", []),
        types=[_type_from_dict(t) for t in obj.get("types", [])],
        commands=[_type_from_dict(c) for c in obj.get("commands", [])],
        events=[_type_from_dict(e) for e in obj.get("events", [])],
    )


def _type_to_dict(typ: Type) -> dict[str, Any]:
    d: dict[str, Any] = {}
    if typ.name:
        d["name"] = typ.name
    if typ.kind is not None:
        d["kind"] = typ.kind.value
    if typ.ref:
        d["ref"] = typ.ref
    if typ.description:
        d["description"] = typ.description
    for flag in _FLAGS:
        if getattr(typ, flag):
            d[flag] = True
    if typ.items is not None:
        d["items"] = _type_to_dict(typ.items)
    for key in _LISTS:
        members = getattr(typ, key)
        if members is not None:
            d[key] = [_type_to_dict(m) for m in members]
    if typ.redirect is not None:
        d["redirect"] = {"domain": typ.redirect.domain, "name": typ.redirect.name}
    if typ.enum is not None:
        d["enum"] = typ.enum
    if typ.timestamp_type is not None:
        d["timestamp"] = typ.timestamp_type.value
    return d


def _type_from_dict(obj: dict[str, Any]) -> Type:
    typ = Type(
        name=obj.get("name", ""),
        kind=TypeKind(obj["kind"]) if "kind" in obj else None,
        ref=obj.get("ref", ""),
        description=obj.get("description", ""),
        enum=obj.get("enum"),
        timestamp_type=TimestampType(obj["timestamp"]) if "timestamp" in obj else None,
    )
    for flag in _FLAGS:
        setattr(typ, flag, obj.get(flag, False))
    if "items" in obj:
        typ.items = _type_from_dict(obj["items"])
    for key in _LISTS:
        if key in obj:
            setattr(typ, key, [_type_from_dict(m) for m in obj[key]])
    if "redirect" in obj:
        typ.redirect = Redirect(domain=obj["redirect"]["domain"], name=obj["redirect"].get("name", ""))
    return typ
