"""
Render posts component - Render post content to fragments and HTML.

Handles conversion of the stored document tree to safe, semantic HTML for SSR.

Invariants:
- I1: Rendering is a pure function of the document
- I2: Empty containers never reach the output
- I3: All text is HTML-escaped on output
- I4: Malformed documents render nothing instead of raising
"""

from __future__ import annotations

from techblog.components.document import MalformedDocument, parse_document

from ._impl import (
    PostRenderer,
    RenderConfig,
    estimate_reading_time,
    extract_headings,
    extract_text,
)
from .models import (
    ExtractTextInput,
    RenderPostInput,
    RenderPostOutput,
    RenderPostsValidationError,
    TextOutput,
)
from .ports import RulesPort


def build_render_config(rules: RulesPort | None) -> RenderConfig:
    """Build render config from rules port."""
    if rules is None:
        return RenderConfig()

    return RenderConfig(
        prose_class=rules.get_prose_class(),
        code_block_class=rules.get_code_block_class(),
        inline_code_class=rules.get_inline_code_class(),
        quote_class=rules.get_quote_class(),
        divider_class=rules.get_divider_class(),
    )


# --- Component Entry Points ---


def run_render(
    inp: RenderPostInput,
    *,
    rules: RulesPort | None = None,
) -> RenderPostOutput:
    """
    Render post content to HTML.

    Args:
        inp: Input containing the stored content field.
        rules: Optional rules port for configuration.

    Returns:
        RenderPostOutput with the fragment tree and rendered HTML.
    """
    renderer = PostRenderer(config=build_render_config(rules))
    return renderer.render(inp.content)


def run_extract_text(
    inp: ExtractTextInput,
    *,
    rules: RulesPort | None = None,
) -> TextOutput:
    """
    Extract plain text, reading time and headings from post content.

    Args:
        inp: Input containing the stored content field.
        rules: Optional rules port for configuration.

    Returns:
        TextOutput with extracted plain text.
    """
    try:
        root = parse_document(inp.content)
    except MalformedDocument as e:
        return TextOutput(
            text="",
            errors=[
                RenderPostsValidationError(
                    code="malformed_document",
                    message=e.message,
                    field=e.path,
                )
            ],
            success=False,
        )

    return TextOutput(
        text=extract_text(root),
        reading_time=estimate_reading_time(root),
        headings=tuple(extract_headings(root)),
    )


def run(
    inp: RenderPostInput | ExtractTextInput,
    *,
    rules: RulesPort | None = None,
) -> RenderPostOutput | TextOutput:
    """
    Main entry point for the render posts component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderPostInput):
        return run_render(inp, rules=rules)
    elif isinstance(inp, ExtractTextInput):
        return run_extract_text(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
