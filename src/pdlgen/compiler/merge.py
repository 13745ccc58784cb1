# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Combining several parsed PDL models into one."""

from __future__ import annotations

from pdlgen.model.entities import Domain, Protocol, Version

# ###############
# Public Interface
# ###############


def combine(*protocols: Protocol) -> Protocol:
    """Merge *protocols* into a single model.

    - The copyright comes from the first source that has one.
    - The version is the highest one seen: a higher major wins outright, the
      minor is only compared between equal majors.  The result always carries
      a version (0.0 when no source declares one).
    - Domains are concatenated in source order.  Domains sharing a name are
      kept as separate entries; no de-duplication is attempted.

    The sources are not copied; the result shares their Domain objects.
    """
    copyright_text = ""
    version = Version()
    domains: list[Domain] = []
    for protocol in protocols:
        if not copyright_text:
            copyright_text = protocol.copyright
        if protocol.version is not None:
            _merge_version(version, protocol.version)
        domains.extend(protocol.domains)
    return Protocol(copyright=copyright_text, version=version, domains=domains)


# ################
# Implementation
# ################


def _merge_version(into: Version, other: Version) -> None:
    if other.major > into.major:
        into.major = other.major
        into.minor = other.minor
    elif other.major == into.major and other.minor > into.minor:
        into.minor = other.minor
