# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Output runtime for chromacut.

Formats a generated Palette for delivery:

1. JSON -- Full palette data for tooling
2. CSS -- Custom properties for UI theming
3. Markdown -- Human-readable table
4. Text -- Plain console listing

Formatting never modifies the palette.
"""

from chromacut.runtime.serializers import (
    SerializerFormat,
    serialize,
    to_css_variables,
    to_json,
    to_markdown,
    to_text,
)

__all__ = [
    "serialize",
    "to_json",
    "to_css_variables",
    "to_markdown",
    "to_text",
    "SerializerFormat",
]
