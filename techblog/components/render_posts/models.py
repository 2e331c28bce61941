"""
Render posts component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

# --- Fragments ---

FragmentKind = Literal[
    "prose",
    "heading",
    "paragraph",
    "code_block",
    "quote",
    "divider",
    "container",
    "inline_code",
]


@dataclass(frozen=True)
class Fragment:
    """
    A unit of rendered output.

    Fragments are presentation-neutral: ``kind`` names the layout rule that
    produced it and ``children`` holds nested fragments or literal text.
    """

    kind: FragmentKind
    children: tuple[Piece, ...] = ()
    tag: str | None = None


# Rendered output is either a fragment or a literal text run
Piece = Union[Fragment, str]


# --- Validation Error ---


@dataclass(frozen=True)
class RenderPostsValidationError:
    """Render posts validation error."""

    code: str
    message: str
    field: str | None = None


# --- Heading Model ---


@dataclass(frozen=True)
class Heading:
    """Extracted heading for TOC."""

    level: int
    text: str
    id: str


# --- Input Models ---


@dataclass(frozen=True)
class RenderPostInput:
    """Input for rendering a post content field to HTML."""

    content: str | bytes | dict[str, Any]


@dataclass(frozen=True)
class ExtractTextInput:
    """Input for extracting plain text from post content."""

    content: str | bytes | dict[str, Any]


# --- Output Models ---


@dataclass(frozen=True)
class RenderPostOutput:
    """Output containing the fragment tree and its HTML."""

    fragment: Fragment | None
    html: str
    errors: list[RenderPostsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class TextOutput:
    """Output containing extracted plain text."""

    text: str
    reading_time: int = 1
    headings: tuple[Heading, ...] = ()
    errors: list[RenderPostsValidationError] = field(default_factory=list)
    success: bool = True
