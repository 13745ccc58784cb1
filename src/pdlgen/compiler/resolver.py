# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference resolution across PDL domains.

This is the single resolution entry point: the fix-up pass, semantic
analysis and any downstream emitter all resolve dotted references through
:func:`resolve`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from pdlgen.compiler.naming import camel_identifier
from pdlgen.config.tables import DEFAULT_SHARED_NAMESPACE
from pdlgen.model.entities import Domain, Protocol
from pdlgen.model.types import Type

# ###############
# Public Interface
# ###############

# Predicate answering whether (domain, type name) lives in the shared namespace.
SharedPredicate = Callable[[str, str], bool]


class ResolutionError(Exception):
    """Raised when a dotted reference does not name a known type.

    Attributes:
        ref: The unresolved reference string.
        domain: Name of the domain the reference was made from.
    """

    def __init__(self, ref: str, domain: str) -> None:
        super().__init__(f"could not resolve type {ref} in domain {domain}")
        self.ref = ref
        self.domain = domain


class Resolution(NamedTuple):
    """Result of resolving a reference.

    Attributes:
        domain: Name of the domain the type lives in.
        type: The resolved Type.
        qualified_name: Display name, prefixed with a namespace when needed.
    """

    domain: str
    type: Type
    qualified_name: str


def split_ref(ref: str, current: str) -> tuple[str, str]:
    """Split a reference into (domain name, bare type name).

    A reference without a dot refers to a type in the *current* domain.
    """
    domain, dot, name = ref.partition(".")
    if not dot:
        return current, ref
    return domain, name


def resolve(
    ref: str,
    domain: Domain,
    domains: list[Domain],
    is_shared: SharedPredicate,
    *,
    shared_namespace: str = DEFAULT_SHARED_NAMESPACE,
) -> Resolution:
    """Resolve *ref* as seen from *domain*.

    Args:
        ref: ``Name`` or ``Domain.Name``.
        domain: The domain making the reference.
        domains: All known domains.
        is_shared: Predicate flagging types hoisted into the shared namespace.
        shared_namespace: Name of the shared namespace.

    Returns:
        The target domain name, the target Type and its qualified display name.

    Raises:
        ResolutionError: If no such type exists.
    """
    target_domain, name = split_ref(ref, domain.domain)

    found: Type | None = None
    for candidate in domains:
        if candidate.domain == target_domain:
            found = candidate.find_type(name)
            break
    if found is None:
        raise ResolutionError(ref, domain.domain)

    prefix = ""
    if is_shared(target_domain, name):
        if domain.domain != shared_namespace:
            prefix = shared_namespace + "."
    elif target_domain != domain.domain:
        prefix = target_domain.lower() + "."

    return Resolution(target_domain, found, prefix + camel_identifier(name))


def is_circular_dependency(domain: str, name: str, table: Iterable[str]) -> bool:
    """Return whether ``domain.name`` is listed in the circular-dependency *table*."""
    key = f"{domain}.{name}".lower()
    return any(entry.lower() == key for entry in table)


def iter_refs(domain: Domain) -> Iterator[tuple[str, Type]]:
    """Yield ``(owner path, member)`` for every referencing member of *domain*.

    Covers type aliases, properties, parameters, returns and array items.
    """
    for kind, items in (("type", domain.types), ("command", domain.commands), ("event", domain.events)):
        for item in items:
            path = f"{kind} '{domain.domain}.{item.name}'"
            yield from _walk(path, item)


def resolve_all(protocol: Protocol, is_shared: SharedPredicate) -> list[ResolutionError]:
    """Resolve every reference in *protocol*, returning the failures."""
    errors: list[ResolutionError] = []
    for domain in protocol.domains:
        for _path, typ in iter_refs(domain):
            if typ.no_resolve:
                continue
            try:
                resolve(typ.ref, domain, protocol.domains, is_shared)
            except ResolutionError as exc:
                errors.append(exc)
    return errors


# ################
# Implementation
# ################


def _walk(path: str, typ: Type) -> Iterator[tuple[str, Type]]:
    if typ.ref:
        yield path, typ
    if typ.items is not None:
        yield from _walk(path, typ.items)
    for member in typ.members():
        yield from _walk(f"{path} member '{member.name}'", member)
