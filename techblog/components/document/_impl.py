"""
Document parser - normalize a stored content field into a document tree.

Accepts either the serialized JSON string kept in the content store or an
already-decoded mapping, and returns the RootNode. All decode and shape
failures surface as MalformedDocument so rendering code never has to deal
with raw payloads.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from .models import (
    DEFAULT_HEADING_TAG,
    HEADING_TAGS,
    HeadingNode,
    HorizontalRuleNode,
    MalformedDocument,
    Node,
    ParagraphNode,
    QuoteNode,
    RootNode,
    TextNode,
    UnknownNode,
)

# Deepest node level accepted below the root; rendering recurses once per level.
MAX_DEPTH = 100


def _as_int(value: Any, default: int = 0) -> int:
    # bool is an int subclass but never a valid bitmask
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _heading_tag(data: Mapping[str, Any]) -> str:
    """Resolve heading level from either a tag string or an integer level."""
    tag = data.get("tag")
    if isinstance(tag, str) and tag.lower() in HEADING_TAGS:
        return tag.lower()

    level = data.get("level", data.get("headingLevel"))
    if isinstance(level, int) and not isinstance(level, bool) and 1 <= level <= 6:
        return f"h{level}"

    return DEFAULT_HEADING_TAG


def _parse_children(data: Mapping[str, Any], path: str, depth: int) -> tuple[Node, ...]:
    raw = data.get("children")
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise MalformedDocument("children must be a list", f"{path}.children")
    return tuple(
        parse_node(child, f"{path}.children[{i}]", depth + 1) for i, child in enumerate(raw)
    )


def _parse_text(data: Mapping[str, Any], path: str, depth: int) -> TextNode:
    text = data.get("text", "")
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise MalformedDocument("text must be a string", f"{path}.text")
    return TextNode(text=text, format=_as_int(data.get("format")))


def _parse_heading(data: Mapping[str, Any], path: str, depth: int) -> HeadingNode:
    return HeadingNode(tag=_heading_tag(data), children=_parse_children(data, path, depth))


def _parse_paragraph(data: Mapping[str, Any], path: str, depth: int) -> ParagraphNode:
    # Paragraph "format" is usually an alignment string; the aggregate text
    # format lives in textFormat.
    if "textFormat" in data:
        text_format = _as_int(data.get("textFormat"))
    else:
        text_format = _as_int(data.get("format"))
    return ParagraphNode(text_format=text_format, children=_parse_children(data, path, depth))


def _parse_quote(data: Mapping[str, Any], path: str, depth: int) -> QuoteNode:
    return QuoteNode(children=_parse_children(data, path, depth))


def _parse_rule(data: Mapping[str, Any], path: str, depth: int) -> HorizontalRuleNode:
    return HorizontalRuleNode()


def _parse_root(data: Mapping[str, Any], path: str, depth: int = 0) -> RootNode:
    return RootNode(children=_parse_children(data, path, depth))


NODE_PARSERS: dict[str, Callable[[Mapping[str, Any], str, int], Node]] = {
    "root": _parse_root,
    "text": _parse_text,
    "heading": _parse_heading,
    "paragraph": _parse_paragraph,
    "quote": _parse_quote,
    "horizontalrule": _parse_rule,
    "horizontal-rule": _parse_rule,
}


def parse_node(data: Any, path: str = "root", depth: int = 0) -> Node:
    """Parse a single serialized node (and its subtree)."""
    if depth > MAX_DEPTH:
        raise MalformedDocument("document nested too deeply", path)
    if not isinstance(data, Mapping):
        raise MalformedDocument("node must be an object", path)

    node_type = data.get("type", "")
    if not isinstance(node_type, str):
        raise MalformedDocument("node type must be a string", f"{path}.type")

    parser = NODE_PARSERS.get(node_type)
    if parser:
        return parser(data, path, depth)

    # Unknown kinds keep their children so they can degrade to a container
    return UnknownNode(type=node_type, children=_parse_children(data, path, depth))


def parse_document(value: str | bytes | Mapping[str, Any]) -> RootNode:
    """
    Normalize a post content field into its root node.

    Args:
        value: JSON string/bytes or an already-decoded mapping with a
            top-level ``root`` object.

    Returns:
        The parsed RootNode.

    Raises:
        MalformedDocument: if decoding fails or there is no root node.
    """
    if isinstance(value, (str, bytes, bytearray)):
        try:
            data = json.loads(value)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocument(f"Invalid JSON: {e}") from e
        except RecursionError as e:
            raise MalformedDocument("document nested too deeply") from e
    else:
        data = value

    if not isinstance(data, Mapping):
        raise MalformedDocument("document must be an object")

    root = data.get("root")
    if not isinstance(root, Mapping):
        raise MalformedDocument("document has no root node", "root")

    root_type = root.get("type", "root")
    if root_type != "root":
        raise MalformedDocument(f"expected root node, got '{root_type}'", "root.type")

    return _parse_root(root, "root", 0)
