# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for cross-domain reference resolution."""

import pytest

from pdlgen.compiler.parser import parse
from pdlgen.compiler.resolver import (
    ResolutionError,
    is_circular_dependency,
    iter_refs,
    resolve,
    resolve_all,
    split_ref,
)
from pdlgen.config.tables import FixupTables
from pdlgen.model.entities import Domain

# ###############
# Test Helpers
# ###############

_SOURCE = """\
domain DOM
  type NodeId extends integer

  type Node extends object
    properties
      NodeId nodeId

domain Page
  type FrameId extends string

  type Frame extends object
    properties
      FrameId id
      DOM.NodeId ownerNode
      optional array of DOM.Node nodes

domain cdp
  type Shared extends string
"""


def _domains() -> list[Domain]:
    return parse(_SOURCE).domains


def _by_name(domains: list[Domain], name: str) -> Domain:
    for domain in domains:
        if domain.domain == name:
            return domain
    raise AssertionError(f"no domain {name}")


def _never_shared(domain: str, name: str) -> bool:
    return False


def _shared_tables() -> FixupTables:
    return FixupTables(circular_dependencies=["dom.nodeid", "cdp.shared"])


# ###############
# Splitting
# ###############


class TestSplitRef:
    def test_bare_name_uses_current_domain(self) -> None:
        assert split_ref("NodeId", "DOM") == ("DOM", "NodeId")

    def test_qualified_name(self) -> None:
        assert split_ref("DOM.NodeId", "Page") == ("DOM", "NodeId")

    def test_splits_on_first_dot_only(self) -> None:
        assert split_ref("A.B.C", "Page") == ("A", "B.C")


# ###############
# Resolution
# ###############


class TestResolve:
    def test_local_reference_has_no_prefix(self) -> None:
        domains = _domains()
        page = _by_name(domains, "Page")
        result = resolve("FrameId", page, domains, _never_shared)
        assert result.domain == "Page"
        assert result.type.name == "FrameId"
        assert result.qualified_name == "FrameID"

    def test_cross_domain_reference_uses_lowercase_domain(self) -> None:
        domains = _domains()
        result = resolve("DOM.NodeId", _by_name(domains, "Page"), domains, _never_shared)
        assert result.domain == "DOM"
        assert result.qualified_name == "dom.NodeID"

    def test_shared_type_uses_shared_namespace(self) -> None:
        domains = _domains()
        tables = _shared_tables()
        result = resolve("DOM.NodeId", _by_name(domains, "Page"), domains, tables.is_shared)
        assert result.qualified_name == "cdp.NodeID"

    def test_shared_type_from_its_own_domain_is_still_prefixed(self) -> None:
        domains = _domains()
        tables = _shared_tables()
        result = resolve("NodeId", _by_name(domains, "DOM"), domains, tables.is_shared)
        assert result.qualified_name == "cdp.NodeID"

    def test_shared_type_inside_shared_namespace_is_not_prefixed(self) -> None:
        domains = _domains()
        tables = _shared_tables()
        result = resolve("Shared", _by_name(domains, "cdp"), domains, tables.is_shared)
        assert result.qualified_name == "Shared"

    def test_custom_shared_namespace(self) -> None:
        domains = _domains()
        tables = _shared_tables()
        result = resolve(
            "DOM.NodeId",
            _by_name(domains, "Page"),
            domains,
            tables.is_shared,
            shared_namespace="common",
        )
        assert result.qualified_name == "common.NodeID"

    def test_unknown_domain_raises(self) -> None:
        domains = _domains()
        with pytest.raises(ResolutionError) as exc_info:
            resolve("NoSuchDomain.Nothing", _by_name(domains, "Page"), domains, _never_shared)
        assert exc_info.value.ref == "NoSuchDomain.Nothing"
        assert exc_info.value.domain == "Page"
        assert str(exc_info.value) == "could not resolve type NoSuchDomain.Nothing in domain Page"

    def test_unknown_type_raises(self) -> None:
        domains = _domains()
        with pytest.raises(ResolutionError):
            resolve("DOM.Missing", _by_name(domains, "Page"), domains, _never_shared)

    def test_only_first_domain_with_matching_name_is_searched(self) -> None:
        first = Domain(domain="DOM")
        second = parse("domain DOM\n  type NodeId extends integer\n").domains[0]
        with pytest.raises(ResolutionError):
            resolve("DOM.NodeId", first, [first, second], _never_shared)


class TestCircularDependency:
    def test_lookup_is_case_insensitive(self) -> None:
        table = ["dom.nodeid", "page.frameid"]
        assert is_circular_dependency("DOM", "NodeId", table)
        assert is_circular_dependency("Page", "FrameId", table)
        assert not is_circular_dependency("Page", "Frame", table)

    def test_tables_predicate_matches_same_entries(self) -> None:
        tables = FixupTables(circular_dependencies=["DOM.NodeId"])
        assert tables.is_shared("dom", "nodeid")
        assert not tables.is_shared("DOM", "Node")


# ###############
# Walking References
# ###############


class TestIterRefs:
    def test_yields_properties_and_array_items(self) -> None:
        page = _by_name(_domains(), "Page")
        refs = [typ.ref for _path, typ in iter_refs(page)]
        assert refs == ["FrameId", "DOM.NodeId", "DOM.Node"]

    def test_paths_name_the_owner(self) -> None:
        dom = _by_name(_domains(), "DOM")
        paths = [path for path, _typ in iter_refs(dom)]
        assert paths == ["type 'DOM.Node' member 'nodeId'"]


class TestResolveAll:
    def test_clean_protocol(self) -> None:
        assert resolve_all(parse(_SOURCE), _never_shared) == []

    def test_collects_every_failure(self) -> None:
        source = "domain A\n  type T extends object\n    properties\n      Missing one\n      B.Gone two\n"
        errors = resolve_all(parse(source), _never_shared)
        assert [e.ref for e in errors] == ["Missing", "B.Gone"]

    def test_no_resolve_members_are_skipped(self) -> None:
        protocol = parse("domain A\n  type T extends Missing\n")
        protocol.domains[0].types[0].no_resolve = True
        assert resolve_all(protocol, _never_shared) == []
