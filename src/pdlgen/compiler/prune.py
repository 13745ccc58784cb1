# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Removal of deprecated and redirected entries from a PDL model.

Generators usually skip deprecated domains and anything deprecated or
redirected inside the remaining domains before running the fix-up pass.
"""

from __future__ import annotations

import structlog

from pdlgen.model.entities import Protocol
from pdlgen.model.types import Type

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


def prune(protocol: Protocol) -> Protocol:
    """Drop deprecated domains and deprecated or redirected items, in place.

    Members (properties, parameters, returns) are pruned recursively.  Each
    dropped entry is logged.

    Returns:
        The same *protocol*, for chaining.
    """
    kept = []
    for domain in protocol.domains:
        if domain.deprecated:
            log.info("skipping", kind="domain", name=domain.domain, reason="deprecated")
            continue
        domain.types = _prune_items("type", domain.domain, domain.types)
        domain.events = _prune_items("event", domain.domain, domain.events)
        domain.commands = _prune_items("command", domain.domain, domain.commands)
        kept.append(domain)
    protocol.domains = kept
    return protocol


# ################
# Implementation
# ################


def _prune_items(kind: str, owner: str, items: list[Type]) -> list[Type]:
    kept: list[Type] = []
    for item in items:
        path = f"{owner}.{item.name}"
        if item.deprecated:
            log.info("skipping", kind=kind, name=path, reason="deprecated")
            continue
        if item.redirect is not None:
            log.info("skipping", kind=kind, name=path, reason=f"redirect:{item.redirect}")
            continue

        if item.properties is not None:
            item.properties = _prune_items(f"{kind} property", path, item.properties)
        if item.parameters is not None:
            item.parameters = _prune_items(f"{kind} parameter", path, item.parameters)
        if item.returns is not None:
            item.returns = _prune_items(f"{kind} return value", path, item.returns)
        kept.append(item)
    return kept
