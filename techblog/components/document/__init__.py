"""
Document component - Rich text document tree and parser.
"""

from ._impl import MAX_DEPTH, NODE_PARSERS, parse_document, parse_node
from .component import run, run_parse
from .models import (
    DEFAULT_HEADING_TAG,
    FORMAT_CODE,
    DocumentError,
    HeadingNode,
    HorizontalRuleNode,
    MalformedDocument,
    Node,
    ParagraphNode,
    ParseDocumentInput,
    ParseDocumentOutput,
    QuoteNode,
    RootNode,
    TextNode,
    UnknownNode,
)

__all__ = [
    # Entry points
    "run",
    "run_parse",
    "parse_document",
    "parse_node",
    "NODE_PARSERS",
    "MAX_DEPTH",
    # Models
    "ParseDocumentInput",
    "ParseDocumentOutput",
    "DocumentError",
    "MalformedDocument",
    # Tree
    "DEFAULT_HEADING_TAG",
    "FORMAT_CODE",
    "HeadingNode",
    "HorizontalRuleNode",
    "Node",
    "ParagraphNode",
    "QuoteNode",
    "RootNode",
    "TextNode",
    "UnknownNode",
]
