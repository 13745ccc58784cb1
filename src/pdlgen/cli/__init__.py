# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for pdlgen."""
