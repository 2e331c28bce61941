"""
Document component - Parse stored post content into a document tree.

Invariants:
- I1: Output tree is rooted at exactly one RootNode
- I2: Parse failures never escape as raw decode errors
"""

from __future__ import annotations

import logging

from ._impl import parse_document
from .models import (
    DocumentError,
    MalformedDocument,
    ParseDocumentInput,
    ParseDocumentOutput,
)

logger = logging.getLogger(__name__)


def run_parse(inp: ParseDocumentInput) -> ParseDocumentOutput:
    """
    Parse a content field.

    Args:
        inp: Input containing the serialized or structured content.

    Returns:
        ParseDocumentOutput with the root node, or errors on failure.
    """
    try:
        root = parse_document(inp.content)
    except MalformedDocument as e:
        logger.warning("Malformed document: %s", e)
        return ParseDocumentOutput(
            root=None,
            errors=[
                DocumentError(
                    code="malformed_document",
                    message=e.message,
                    path=e.path,
                )
            ],
            success=False,
        )

    return ParseDocumentOutput(root=root)


def run(inp: ParseDocumentInput) -> ParseDocumentOutput:
    """Main entry point for the document component."""
    if isinstance(inp, ParseDocumentInput):
        return run_parse(inp)
    raise ValueError(f"Unknown input type: {type(inp)}")
