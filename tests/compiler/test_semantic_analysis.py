# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the pdlgen semantic analysis module."""

from pdlgen.compiler.parser import parse
from pdlgen.compiler.semantic_analysis import SemanticError, analyze
from pdlgen.config.tables import FixupTables
from pdlgen.model.entities import Domain, Protocol
from pdlgen.model.types import Type, TypeKind

# ###############
# Test Helpers
# ###############


def _analyze(source: str) -> list[SemanticError]:
    """Parse source and run semantic analysis."""
    return analyze(parse(source))


def _messages(errors: list[SemanticError]) -> list[str]:
    """Extract error messages from a list of SemanticError instances."""
    return [e.message for e in errors]


def _assert_clean(source: str) -> None:
    """Assert that a source string produces no semantic errors."""
    errors = _analyze(source)
    assert errors == [], f"Expected no errors but got: {_messages(errors)}"


def _assert_error(source: str, expected_fragment: str) -> None:
    """Assert that a semantic error containing expected_fragment is produced."""
    messages = _messages(_analyze(source))
    assert any(expected_fragment in m for m in messages), (
        f"Expected error containing {expected_fragment!r} but got: {messages}"
    )


def _analyze_domain(domain: Domain) -> list[str]:
    return _messages(analyze(Protocol(domains=[domain])))


# ###############
# Clean Files
# ###############


class TestCleanFile:
    def test_empty_file_has_no_errors(self) -> None:
        _assert_clean("")

    def test_cross_domain_references(self) -> None:
        _assert_clean(
            "domain DOM\n"
            "  type NodeId extends integer\n"
            "\n"
            "domain Page\n"
            "  command getFrameOwner\n"
            "    returns\n"
            "      DOM.NodeId backendNodeId\n"
            "      optional array of DOM.NodeId children\n"
        )

    def test_same_member_name_in_different_sections(self) -> None:
        _assert_clean(
            "domain Runtime\n"
            "  command evaluate\n"
            "    parameters\n"
            "      string result\n"
            "    returns\n"
            "      string result\n"
        )

    def test_tables_are_accepted(self) -> None:
        protocol = parse("domain DOM\n  type NodeId extends integer\n")
        assert analyze(protocol, FixupTables(circular_dependencies=["dom.nodeid"])) == []


# ###############
# Duplicate Names
# ###############


class TestDuplicates:
    def test_duplicate_domain(self) -> None:
        _assert_error("domain DOM\n\ndomain DOM\n", "Duplicate domain name 'DOM'")

    def test_duplicate_type(self) -> None:
        _assert_error(
            "domain DOM\n  type NodeId extends integer\n  type NodeId extends string\n",
            "Duplicate type name 'NodeId' in domain 'DOM'",
        )

    def test_duplicate_command_and_event(self) -> None:
        messages = _messages(_analyze("domain DOM\n  command enable\n  command enable\n  event ready\n  event ready\n"))
        assert "Duplicate command name 'enable' in domain 'DOM'" in messages
        assert "Duplicate event name 'ready' in domain 'DOM'" in messages

    def test_duplicate_reported_once(self) -> None:
        messages = _messages(_analyze("domain D\n  command a\n  command a\n  command a\n"))
        assert len(messages) == 1

    def test_command_and_event_may_share_a_name(self) -> None:
        _assert_clean("domain DOM\n  command reset\n  event reset\n")

    def test_duplicate_member(self) -> None:
        _assert_error(
            "domain D\n  type T extends object\n    properties\n      string id\n      integer id\n",
            "Duplicate member name 'id' in type 'D.T' properties",
        )

    def test_duplicate_enum_literal(self) -> None:
        _assert_error(
            "domain D\n  type Color extends string\n    enum\n      red\n      red\n",
            "Duplicate enum literal name 'red' in type 'D.Color'",
        )


# ###############
# Shapes
# ###############


class TestShapes:
    def test_array_without_items(self) -> None:
        messages = _analyze_domain(Domain(domain="D", types=[Type(name="List", kind=TypeKind.ARRAY)]))
        assert "type 'D.List': array without an element type" in messages

    def test_properties_on_primitive(self) -> None:
        _assert_error(
            "domain D\n  type T extends string\n    properties\n      string id\n",
            "type 'D.T': properties on a non-object type",
        )

    def test_reference_with_kind(self) -> None:
        domain = Domain(
            domain="D",
            types=[Type(name="Target", kind=TypeKind.STRING), Type(name="T", kind=TypeKind.STRING, ref="Target")],
        )
        assert "type 'D.T': reference 'Target' together with kind 'string'" in _analyze_domain(domain)

    def test_nested_member_shapes_are_checked(self) -> None:
        member = Type(name="values", kind=TypeKind.ARRAY)
        domain = Domain(domain="D", commands=[Type(name="run", parameters=[member])])
        assert "command 'D.run' member 'values': array without an element type" in _analyze_domain(domain)


# ###############
# References
# ###############


class TestReferences:
    def test_unresolved_local_reference(self) -> None:
        _assert_error(
            "domain Page\n  type Frame extends object\n    properties\n      FrameId id\n",
            "could not resolve type FrameId in domain Page",
        )

    def test_unresolved_cross_domain_reference(self) -> None:
        _assert_error(
            "domain Page\n  command c\n    parameters\n      NoSuchDomain.Nothing x\n",
            "could not resolve type NoSuchDomain.Nothing in domain Page",
        )

    def test_every_problem_is_reported(self) -> None:
        source = (
            "domain D\n"
            "  type T extends object\n"
            "    properties\n"
            "      Missing a\n"
            "      Gone b\n"
            "  type T extends string\n"
        )
        assert len(_analyze(source)) == 3
