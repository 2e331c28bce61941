"""
Post renderer - Render a document tree to fragments and HTML.

Rendering happens in two passes:
1. render_node walks the document tree and produces a presentation-neutral
   fragment tree, dropping empty containers on the way.
2. render_html serializes a fragment tree to escaped HTML.

Key behaviors:
- Empty containers render to None and are omitted by their parent
- A paragraph whose aggregate format is the code flag renders as a code block
- Text with the code bit set renders as inline code
- Unknown node kinds degrade to a generic container, never an error
- Child order is always preserved
"""

from __future__ import annotations

import html
import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from techblog.components.document import (
    FORMAT_CODE,
    HeadingNode,
    HorizontalRuleNode,
    MalformedDocument,
    Node,
    ParagraphNode,
    QuoteNode,
    RootNode,
    TextNode,
    UnknownNode,
    parse_document,
)
from techblog.domain.entities import slugify

from .models import (
    Fragment,
    Heading,
    Piece,
    RenderPostOutput,
    RenderPostsValidationError,
)

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class RenderConfig:
    """HTML rendering configuration."""

    prose_class: str = "prose"
    code_block_class: str = "code-block"
    inline_code_class: str = "inline-code"
    quote_class: str = "quote"
    divider_class: str = "divider"
    add_heading_ids: bool = True


DEFAULT_RENDER_CONFIG = RenderConfig()

WORDS_PER_MINUTE = 200


# --- Text Node Formatter ---


def format_text(node: Node | None) -> Piece | None:
    """
    Render a text leaf.

    Returns None for anything that is not a text node. Text with the code
    bit set is wrapped as inline code; other format bits pass through
    without affecting output.
    """
    if not isinstance(node, TextNode):
        return None

    if node.format & FORMAT_CODE:
        return Fragment(kind="inline_code", children=(node.text,))

    return node.text


def _inline(children: Iterable[Node]) -> tuple[Piece, ...]:
    """Format leaf children, dropping non-text ones."""
    pieces = (format_text(child) for child in children)
    return tuple(piece for piece in pieces if piece)


def _blocks(children: Iterable[Node]) -> tuple[Piece, ...]:
    """Render block children, dropping the ones that render to nothing."""
    pieces = (render_node(child) for child in children)
    return tuple(piece for piece in pieces if piece)


# --- Block Node Renderer ---


def _is_empty(node: Node) -> bool:
    """Skip rule: nodes with neither children nor text render to nothing."""
    if isinstance(node, TextNode):
        return not node.text
    if isinstance(node, HorizontalRuleNode):
        return False
    return not node.children


def render_root(node: RootNode) -> Fragment:
    return Fragment(kind="prose", children=_blocks(node.children))


def render_heading(node: HeadingNode) -> Fragment:
    return Fragment(kind="heading", children=_inline(node.children), tag=node.tag)


def render_paragraph(node: ParagraphNode) -> Fragment | None:
    """Render a paragraph, or a code block when flagged as one."""
    if not node.children:
        return None

    # Code blocks are stored as paragraphs carrying the code format flag
    if node.text_format == FORMAT_CODE:
        return Fragment(kind="code_block", children=_inline(node.children))

    return Fragment(kind="paragraph", children=_inline(node.children))


def render_quote(node: QuoteNode) -> Fragment:
    return Fragment(kind="quote", children=_inline(node.children))


def render_horizontal_rule(node: HorizontalRuleNode) -> Fragment:
    return Fragment(kind="divider")


def render_text(node: TextNode) -> Piece | None:
    return format_text(node)


def render_unknown(node: UnknownNode) -> Fragment | None:
    """Unrecognized kinds pass their children through a generic container."""
    if not node.children:
        return None
    return Fragment(kind="container", children=_blocks(node.children))


NODE_RENDERERS: dict[type, Callable[[Any], Piece | None]] = {
    RootNode: render_root,
    HeadingNode: render_heading,
    ParagraphNode: render_paragraph,
    QuoteNode: render_quote,
    HorizontalRuleNode: render_horizontal_rule,
    TextNode: render_text,
    UnknownNode: render_unknown,
}


def render_node(node: Node | None) -> Piece | None:
    """Render a node and its subtree; None means nothing to emit."""
    if node is None or _is_empty(node):
        return None

    renderer = NODE_RENDERERS.get(type(node))
    if renderer is None:
        return None

    return renderer(node)


# --- HTML Serialization ---


def _escape(text: str) -> str:
    """Escape HTML special characters."""
    return html.escape(text)


def _class_attr(css_class: str) -> str:
    return f' class="{_escape(css_class)}"' if css_class else ""


def fragment_text(piece: Piece) -> str:
    """Plain text carried by a fragment tree."""
    if isinstance(piece, str):
        return piece
    return "".join(fragment_text(child) for child in piece.children)


def unique_slug(text: str, used: set[str]) -> str:
    """Slug for an anchor id, suffixed -2, -3, ... when already taken."""
    base = slugify(text)
    if not base:
        return ""
    slug = base
    suffix = 1
    while slug in used:
        suffix += 1
        slug = f"{base}-{suffix}"
    used.add(slug)
    return slug


def render_html(
    piece: Piece | None,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> str:
    """Serialize a fragment tree to HTML. Heading ids are unique per call."""
    return _render_html(piece, config, set())


def _render_html(piece: Piece | None, config: RenderConfig, used_ids: set[str]) -> str:
    if piece is None:
        return ""
    if isinstance(piece, str):
        return _escape(piece)

    inner = "".join(_render_html(child, config, used_ids) for child in piece.children)
    kind = piece.kind

    if kind == "prose":
        return f"<div{_class_attr(config.prose_class)}>{inner}</div>"
    elif kind == "heading":
        tag = piece.tag or "h1"
        if config.add_heading_ids:
            heading_id = unique_slug(fragment_text(piece), used_ids)
            if heading_id:
                return f'<{tag} id="{heading_id}">{inner}</{tag}>'
        return f"<{tag}>{inner}</{tag}>"
    elif kind == "paragraph":
        return f"<p>{inner}</p>"
    elif kind == "code_block":
        return f"<pre{_class_attr(config.code_block_class)}><code>{inner}</code></pre>"
    elif kind == "quote":
        return f"<blockquote{_class_attr(config.quote_class)}>{inner}</blockquote>"
    elif kind == "divider":
        return f"<hr{_class_attr(config.divider_class)} />"
    elif kind == "inline_code":
        return f"<code{_class_attr(config.inline_code_class)}>{inner}</code>"

    # container and anything newer
    return f"<div>{inner}</div>"


# --- Text Extraction ---


def _node_text(node: Node) -> str:
    if isinstance(node, TextNode):
        return node.text
    if isinstance(node, HorizontalRuleNode):
        return ""
    return "".join(_node_text(child) for child in node.children)


def extract_text(root: RootNode) -> str:
    """Extract plain text, one line per top-level block."""
    lines = []
    for child in root.children:
        text = _node_text(child)
        if text:
            lines.append(text)
    return "\n".join(lines)


def estimate_reading_time(root: RootNode, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes (at least 1)."""
    words = len(extract_text(root).split())
    return max(1, math.ceil(words / words_per_minute))


def extract_headings(root: RootNode) -> list[Heading]:
    """Extract headings for table of contents."""
    headings: list[Heading] = []
    used_ids: set[str] = set()

    def collect(node: Node) -> None:
        if isinstance(node, HeadingNode):
            text = _node_text(node)
            heading_id = unique_slug(text, used_ids)
            headings.append(Heading(level=int(node.tag[1]), text=text, id=heading_id))
            return
        if isinstance(node, (TextNode, HorizontalRuleNode)):
            return
        for child in node.children:
            collect(child)

    collect(root)
    return headings


# --- Main Rendering Functions ---


def render_document(
    content: str | bytes | dict[str, Any],
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> RenderPostOutput:
    """
    Parse and render a post content field.

    A malformed document renders nothing: the failure is logged and
    reported in the output instead of being raised.
    """
    try:
        root = parse_document(content)
    except MalformedDocument as e:
        logger.warning("Skipping malformed document: %s", e)
        return RenderPostOutput(
            fragment=None,
            html="",
            errors=[
                RenderPostsValidationError(
                    code="malformed_document",
                    message=e.message,
                    field=e.path,
                )
            ],
            success=False,
        )

    fragment = render_node(root)
    if not isinstance(fragment, Fragment):
        # An empty root renders to nothing
        fragment = None

    return RenderPostOutput(fragment=fragment, html=render_html(fragment, config))


# --- Post Renderer Service ---


class PostRenderer:
    """
    Post renderer service.

    Renders post content from its stored document tree to HTML.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer."""
        self._config = config or DEFAULT_RENDER_CONFIG

    @property
    def config(self) -> RenderConfig:
        return self._config

    def render(self, content: str | bytes | dict[str, Any]) -> RenderPostOutput:
        """Render a content field to fragments and HTML."""
        return render_document(content, self._config)

    def render_html(self, content: str | bytes | dict[str, Any]) -> str:
        """Render a content field straight to HTML."""
        return self.render(content).html

    def extract_text(self, root: RootNode) -> str:
        return extract_text(root)

    def extract_headings(self, root: RootNode) -> list[Heading]:
        return extract_headings(root)


# --- Factory ---


def create_post_renderer(config: RenderConfig | None = None) -> PostRenderer:
    """Create a PostRenderer."""
    return PostRenderer(config=config)
