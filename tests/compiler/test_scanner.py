# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the PDL line classifier."""

import pytest

from pdlgen.compiler.scanner import Line, LineKind, ParseError, classify, scan

# ###############
# Test Helpers
# ###############


def _kind(line: str) -> LineKind:
    """Return the kind a single line is classified as."""
    return classify(line).kind


# ###############
# Comments and Blank Lines
# ###############


class TestCommentsAndBlanks:
    def test_comment_group_is_trimmed_text_after_hash(self) -> None:
        line = classify("    #   Unique DOM node identifier.  ")
        assert line.kind == LineKind.COMMENT
        assert line.groups == ("Unique DOM node identifier.",)

    def test_empty_comment(self) -> None:
        line = classify("#")
        assert line.kind == LineKind.COMMENT
        assert line.groups == ("",)

    def test_blank_line(self) -> None:
        assert _kind("") == LineKind.BLANK

    def test_whitespace_only_is_blank(self) -> None:
        assert _kind("   \t ") == LineKind.BLANK

    def test_raw_text_is_kept_untrimmed(self) -> None:
        line = classify("  # note", 7)
        assert line.text == "  # note"
        assert line.index == 7


# ###############
# Declarations
# ###############


class TestDeclarations:
    def test_domain(self) -> None:
        line = classify("domain DOM")
        assert line.kind == LineKind.DOMAIN
        assert line.groups == ("", "", "DOM")

    def test_domain_with_modifiers(self) -> None:
        line = classify("experimental deprecated domain Console")
        assert line.groups == ("experimental ", "deprecated ", "Console")

    def test_depends(self) -> None:
        line = classify("  depends on Runtime")
        assert line.kind == LineKind.DEPENDS
        assert line.groups == ("Runtime",)

    def test_type(self) -> None:
        line = classify("  type NodeId extends integer")
        assert line.kind == LineKind.TYPE
        assert line.groups == ("", "", "NodeId", "", "integer")

    def test_array_type(self) -> None:
        line = classify("  experimental type Quads extends array of Quad")
        assert line.kind == LineKind.TYPE
        assert line.groups == ("experimental ", "", "Quads", "array of ", "Quad")

    def test_command(self) -> None:
        line = classify("  deprecated command hideHighlight")
        assert line.kind == LineKind.COMMAND_EVENT
        assert line.groups == ("", "deprecated ", "command", "hideHighlight")

    def test_event(self) -> None:
        line = classify("  event documentUpdated")
        assert line.kind == LineKind.COMMAND_EVENT
        assert line.groups[2] == "event"


# ###############
# Members, Sections and Markers
# ###############


class TestMembers:
    def test_plain_member(self) -> None:
        line = classify("      string id")
        assert line.kind == LineKind.MEMBER
        assert line.groups == ("", "", "", "", "string", "id")

    def test_member_with_all_modifiers(self) -> None:
        line = classify("      experimental deprecated optional array of DOM.NodeId nodeIds")
        assert line.kind == LineKind.MEMBER
        assert line.groups == ("experimental ", "deprecated ", "optional ", "array of ", "DOM.NodeId", "nodeIds")

    def test_enum_member(self) -> None:
        line = classify("      enum type")
        assert line.kind == LineKind.MEMBER
        assert line.groups[4:] == ("enum", "type")

    def test_member_wins_over_enum_literal(self) -> None:
        """Two tokens at member indentation are a member, never a literal."""
        assert _kind("      Render process") == LineKind.MEMBER


class TestMarkers:
    @pytest.mark.parametrize("section", ["parameters", "returns", "properties"])
    def test_section(self, section: str) -> None:
        line = classify(f"    {section}")
        assert line.kind == LineKind.SECTION
        assert line.groups == (section,)

    def test_enum_marker(self) -> None:
        assert _kind("    enum") == LineKind.ENUM

    def test_version_block(self) -> None:
        assert _kind("version") == LineKind.VERSION
        assert classify("  major 1").groups == ("1",)
        assert classify("  minor 3").groups == ("3",)
        assert _kind("  major 1") == LineKind.MAJOR
        assert _kind("  minor 3") == LineKind.MINOR

    def test_redirect(self) -> None:
        line = classify("    redirect Overlay")
        assert line.kind == LineKind.REDIRECT
        assert line.groups == ("Overlay",)


class TestEnumLiterals:
    def test_literal_at_six_spaces(self) -> None:
        line = classify("      CSSTransition")
        assert line.kind == LineKind.ENUM_LITERAL
        assert line.groups == ("CSSTransition",)

    def test_literal_at_eight_spaces(self) -> None:
        line = classify("        before")
        assert line.kind == LineKind.ENUM_LITERAL
        assert line.groups == ("before",)

    def test_literal_with_punctuation(self) -> None:
        assert classify("      -webkit-box").groups == ("-webkit-box",)


# ###############
# Errors
# ###############


class TestErrors:
    def test_unknown_line_raises(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            classify("garbage here", 4)
        assert exc_info.value.index == 4
        assert exc_info.value.line == "garbage here"
        assert "Line 4" in str(exc_info.value)
        assert "unknown token" in str(exc_info.value)

    def test_wrong_indentation_raises(self) -> None:
        with pytest.raises(ParseError):
            classify(" type NodeId extends integer")


# ###############
# Scanning
# ###############


class TestScan:
    def test_indexes_are_zero_based(self) -> None:
        lines = list(scan("domain DOM\n\n  type NodeId extends integer"))
        assert [line.index for line in lines] == [0, 1, 2]
        assert [line.kind for line in lines] == [LineKind.DOMAIN, LineKind.BLANK, LineKind.TYPE]

    def test_scan_is_lazy(self) -> None:
        lines = scan("domain DOM\n???")
        first = next(lines)
        assert isinstance(first, Line)
        assert first.kind == LineKind.DOMAIN
        with pytest.raises(ParseError) as exc_info:
            next(lines)
        assert exc_info.value.index == 1
