# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line classifier for PDL files.

PDL is line oriented: every physical line is classified on its own against a
fixed, ordered list of line shapes.  Several shapes overlap textually (a
member line and an enum literal can both be a bare token indented by six
spaces), so the first pattern that matches in priority order wins.
"""

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class LineKind(enum.Enum):
    """All line shapes recognized by the classifier."""

    COMMENT = "comment"
    BLANK = "blank"
    DOMAIN = "domain"
    DEPENDS = "depends"
    TYPE = "type"
    COMMAND_EVENT = "command/event"
    MEMBER = "member"
    SECTION = "section"
    ENUM = "enum"
    VERSION = "version"
    MAJOR = "major"
    MINOR = "minor"
    REDIRECT = "redirect"
    ENUM_LITERAL = "enum literal"


@dataclass(frozen=True)
class Line:
    """A classified source line.

    Attributes:
        kind: The shape the line matched.
        text: The raw line, untrimmed.
        index: 0-based line index in the source.
        groups: Captured sub-fields; unmatched optional groups are empty strings.
    """

    kind: LineKind
    text: str
    index: int
    groups: tuple[str, ...] = ()


class ParseError(Exception):
    """Raised when a line cannot be classified or violates the block structure.

    Attributes:
        index: 0-based line index of the error.
        line: The raw offending line.
    """

    def __init__(self, message: str, index: int, line: str) -> None:
        super().__init__(f"Line {index}: {message}: {line!r}")
        self.index = index
        self.line = line


def classify(line: str, index: int = 0) -> Line:
    """Classify a single physical line of PDL source.

    Args:
        line: The line without its trailing newline, not yet trimmed.
        index: 0-based position of the line, used for error reporting.

    Returns:
        The classified Line.

    Raises:
        ParseError: If the line matches none of the known shapes.
    """
    trimmed = line.strip()
    if trimmed.startswith("#"):
        return Line(LineKind.COMMENT, line, index, (trimmed[1:].strip(),))
    if not trimmed:
        return Line(LineKind.BLANK, line, index)

    for kind, pattern in _PATTERNS:
        match = pattern.match(line)
        if match is not None:
            groups = tuple(g or "" for g in match.groups())
            if kind == LineKind.ENUM_LITERAL:
                groups = (trimmed,)
            return Line(kind, line, index, groups)

    raise ParseError("unknown token", index, line)


def scan(source: str) -> Iterator[Line]:
    """Classify every line of *source* in order.

    Lines are classified lazily, so an unrecognized line only raises once the
    consumer reaches it.
    """
    for index, line in enumerate(source.split("\n")):
        yield classify(line, index)


# ################
# Implementation
# ################

# Priority order matters: see the module docstring.
_PATTERNS: list[tuple[LineKind, re.Pattern[str]]] = [
    (LineKind.DOMAIN, re.compile(r"^(experimental )?(deprecated )?domain (.*)")),
    (LineKind.DEPENDS, re.compile(r"^  depends on ([^\s]+)")),
    (
        LineKind.TYPE,
        re.compile(r"^  (experimental )?(deprecated )?type (.*) extends (array of )?([^\s]+)"),
    ),
    (
        LineKind.COMMAND_EVENT,
        re.compile(r"^  (experimental )?(deprecated )?(command|event) (.*)"),
    ),
    (
        LineKind.MEMBER,
        re.compile(r"^      (experimental )?(deprecated )?(optional )?(array of )?([^\s]+) ([^\s]+)"),
    ),
    (LineKind.SECTION, re.compile(r"^    (parameters|returns|properties)")),
    (LineKind.ENUM, re.compile(r"^    enum")),
    (LineKind.VERSION, re.compile(r"^version")),
    (LineKind.MAJOR, re.compile(r"^  major (\d+)")),
    (LineKind.MINOR, re.compile(r"^  minor (\d+)")),
    (LineKind.REDIRECT, re.compile(r"^    redirect ([^\s]+)")),
    (LineKind.ENUM_LITERAL, re.compile(r"^      (  )?[^\s]+$")),
]
