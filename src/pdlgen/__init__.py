# Copyright 2026 pdlgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""pdlgen: parser, resolver and fix-up pass for protocol definition (PDL) files."""
