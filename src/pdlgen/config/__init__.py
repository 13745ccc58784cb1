# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for pdlgen: fix-up tables and logging."""

from pdlgen.config.logging import configure_logging
from pdlgen.config.tables import (
    DEFAULT_SHARED_NAMESPACE,
    ConfigError,
    FixupTables,
    SynthesizedType,
    default_tables,
    load_tables,
    parse_tables,
)

__all__ = [
    "DEFAULT_SHARED_NAMESPACE",
    "ConfigError",
    "FixupTables",
    "SynthesizedType",
    "configure_logging",
    "default_tables",
    "load_tables",
    "parse_tables",
]
