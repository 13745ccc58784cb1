# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier casing for display names and synthesized type names."""

import re

# ###############
# Public Interface
# ###############

# Words always written in upper case inside identifiers.
INITIALISMS: frozenset[str] = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "DOM", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS", "RPC",
        "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID",
        "URI", "URL", "UTF8", "UUID", "VM", "XML", "XMPP", "XSRF", "XSS",
    }
)  # fmt: skip


def split_words(name: str) -> list[str]:
    """Split *name* into words on separators and case boundaries.

    ``"backendNodeId"`` gives ``["backend", "Node", "Id"]`` and
    ``"HTMLElement"`` gives ``["HTML", "Element"]``.
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(name):
        words.extend(_WORD.findall(chunk))
    return words


def camel_identifier(name: str) -> str:
    """Return *name* as an exported CamelCase identifier.

    Dots, underscores and dashes separate words; known initialisms are upper
    cased (``"nodeId"`` becomes ``"NodeID"``).
    """
    parts: list[str] = []
    for word in split_words(name):
        upper = word.upper()
        if upper in INITIALISMS or word.isupper():
            parts.append(upper)
        else:
            parts.append(word[0].upper() + word[1:])
    result = "".join(parts)
    if result and result[0].isdigit():
        result = "_" + result
    return result


# ################
# Implementation
# ################

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
