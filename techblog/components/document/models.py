"""
Document component models - the rich text document tree and I/O models.

A post body is a tree rooted at a single ``root`` node. Block nodes hold an
ordered tuple of children; text leaves hold a string and a format bitmask.

Invariants:
- I1: A TextNode never has children
- I2: Non-text nodes never carry text
- I3: Nodes are immutable once parsed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# Format bitmask flag for monospace/code text
FORMAT_CODE = 16

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
DEFAULT_HEADING_TAG = "h1"


# --- Errors ---


class MalformedDocument(ValueError):
    """Raised when a stored content field cannot be parsed into a tree."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message if path is None else f"{message} (at {path})")
        self.message = message
        self.path = path


@dataclass(frozen=True)
class DocumentError:
    """Document parse error."""

    code: str
    message: str
    path: str | None = None


# --- Document Tree ---


@dataclass(frozen=True)
class TextNode:
    """Leaf text unit with a format bitmask."""

    text: str
    format: int = 0

    @property
    def is_code(self) -> bool:
        return bool(self.format & FORMAT_CODE)


@dataclass(frozen=True)
class HeadingNode:
    tag: str = DEFAULT_HEADING_TAG
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class ParagraphNode:
    # Aggregate format of the paragraph; FORMAT_CODE marks a code block
    text_format: int = 0
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class QuoteNode:
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class HorizontalRuleNode:
    pass


@dataclass(frozen=True)
class UnknownNode:
    """Any node kind the renderer has no dedicated rule for."""

    type: str
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class RootNode:
    children: tuple[Node, ...] = ()


Node = Union[
    RootNode,
    HeadingNode,
    ParagraphNode,
    QuoteNode,
    HorizontalRuleNode,
    TextNode,
    UnknownNode,
]


# --- Input Models ---


@dataclass(frozen=True)
class ParseDocumentInput:
    """Input for parsing a stored content field."""

    content: str | bytes | dict[str, Any]


# --- Output Models ---


@dataclass(frozen=True)
class ParseDocumentOutput:
    """Output containing the parsed root node."""

    root: RootNode | None
    errors: list[DocumentError] = field(default_factory=list)
    success: bool = True
