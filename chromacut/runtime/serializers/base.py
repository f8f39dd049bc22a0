# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from chromacut.palette import Palette
from chromacut.runtime.serializers.css import to_css_variables
from chromacut.runtime.serializers.markdown import to_markdown
from chromacut.runtime.serializers.text import to_text


class SerializerFormat(Enum):
    """Output format for serializers."""

    TEXT = "text"
    JSON = "json"
    CSS = "css"
    MARKDOWN = "markdown"


def to_json(palette: Palette, indent: Optional[int] = 2) -> str:
    """Serialize a palette as JSON (see Palette.to_dict for the layout)."""
    return palette.to_json(indent=indent)


def serialize(palette: Palette, format: SerializerFormat = SerializerFormat.TEXT) -> str:
    """Serialize a palette in the given format."""
    if format == SerializerFormat.JSON:
        return to_json(palette)
    elif format == SerializerFormat.CSS:
        return to_css_variables(palette)
    elif format == SerializerFormat.MARKDOWN:
        return to_markdown(palette)
    else:
        return to_text(palette)
