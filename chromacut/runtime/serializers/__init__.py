# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Serializers for Palette output.

Each serializer formats a Palette for a specific consumer.
All serializers preserve the palette exactly -- no modification or inference.
"""

from chromacut.runtime.serializers.base import SerializerFormat, serialize, to_json
from chromacut.runtime.serializers.css import to_css_variables
from chromacut.runtime.serializers.markdown import to_markdown
from chromacut.runtime.serializers.text import to_text

__all__ = [
    "SerializerFormat",
    "serialize",
    "to_json",
    "to_css_variables",
    "to_markdown",
    "to_text",
]
