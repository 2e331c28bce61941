"""
Render posts component - Render post content to fragments and HTML.
"""

from ._impl import (
    DEFAULT_RENDER_CONFIG,
    NODE_RENDERERS,
    PostRenderer,
    RenderConfig,
    create_post_renderer,
    estimate_reading_time,
    extract_headings,
    extract_text,
    format_text,
    fragment_text,
    render_document,
    render_heading,
    render_horizontal_rule,
    render_html,
    render_node,
    render_paragraph,
    render_quote,
    render_root,
    render_unknown,
)
from .component import (
    build_render_config,
    run,
    run_extract_text,
    run_render,
)
from .models import (
    ExtractTextInput,
    Fragment,
    Heading,
    Piece,
    RenderPostInput,
    RenderPostOutput,
    RenderPostsValidationError,
    TextOutput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "build_render_config",
    "run",
    "run_extract_text",
    "run_render",
    # Input models
    "ExtractTextInput",
    "RenderPostInput",
    # Output models
    "Fragment",
    "Heading",
    "Piece",
    "RenderPostOutput",
    "RenderPostsValidationError",
    "TextOutput",
    # Ports
    "RulesPort",
    # Renderer
    "DEFAULT_RENDER_CONFIG",
    "NODE_RENDERERS",
    "PostRenderer",
    "RenderConfig",
    "create_post_renderer",
    "estimate_reading_time",
    "extract_headings",
    "extract_text",
    "format_text",
    "fragment_text",
    "render_document",
    "render_heading",
    "render_horizontal_rule",
    "render_html",
    "render_node",
    "render_paragraph",
    "render_quote",
    "render_root",
    "render_unknown",
]
