"""
Document component unit tests.

Tests for normalizing stored content into a document tree.
"""

from __future__ import annotations

import json

import pytest

from techblog.components.document import (
    MAX_DEPTH,
    HeadingNode,
    HorizontalRuleNode,
    MalformedDocument,
    ParagraphNode,
    ParseDocumentInput,
    QuoteNode,
    RootNode,
    TextNode,
    UnknownNode,
    parse_document,
    parse_node,
    run,
    run_parse,
)


def doc(*children: dict) -> dict:
    return {"root": {"type": "root", "children": list(children)}}


def nested(levels: int) -> dict:
    """A chain of callout containers with one text leaf at the bottom."""
    node: dict = {"type": "text", "text": "deep"}
    for _ in range(levels):
        node = {"type": "callout", "children": [node]}
    return doc(node)


# --- Input normalization ---


class TestInputForms:
    """Both serialized and decoded content parse to the same tree."""

    def test_mapping_input(self) -> None:
        root = parse_document(doc({"type": "paragraph", "children": []}))
        assert root == RootNode(children=(ParagraphNode(),))

    def test_string_and_mapping_agree(self) -> None:
        data = doc({"type": "paragraph", "children": [{"type": "text", "text": "hi"}]})
        assert parse_document(json.dumps(data)) == parse_document(data)

    def test_bytes_input(self) -> None:
        data = json.dumps(doc()).encode("utf-8")
        assert parse_document(data) == RootNode()

    def test_parse_is_repeatable(self) -> None:
        data = doc({"type": "heading", "tag": "h2", "children": [{"type": "text", "text": "A"}]})
        assert parse_document(data) == parse_document(data)


# --- Malformed input ---


class TestMalformed:
    """Decode and shape failures surface as MalformedDocument."""

    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedDocument, match="Invalid JSON"):
            parse_document("{not json")

    def test_missing_root(self) -> None:
        with pytest.raises(MalformedDocument) as exc:
            parse_document({"children": []})
        assert exc.value.path == "root"

    def test_top_level_not_object(self) -> None:
        with pytest.raises(MalformedDocument):
            parse_document("[1, 2, 3]")

    def test_root_of_wrong_type(self) -> None:
        with pytest.raises(MalformedDocument) as exc:
            parse_document({"root": {"type": "paragraph", "children": []}})
        assert exc.value.path == "root.type"

    def test_non_object_child_reports_path(self) -> None:
        with pytest.raises(MalformedDocument) as exc:
            parse_document(doc({"type": "paragraph"}, {"type": "quote"}, "oops"))
        assert exc.value.path == "root.children[2]"

    def test_children_not_a_list(self) -> None:
        with pytest.raises(MalformedDocument) as exc:
            parse_document(doc({"type": "quote", "children": "abc"}))
        assert exc.value.path == "root.children[0].children"

    def test_malformed_is_value_error(self) -> None:
        assert issubclass(MalformedDocument, ValueError)

    def test_deep_nesting_rejected(self) -> None:
        with pytest.raises(MalformedDocument, match="nested too deeply"):
            parse_document(nested(400))

    def test_deep_nesting_rejected_from_json(self) -> None:
        with pytest.raises(MalformedDocument, match="nested too deeply"):
            parse_document(json.dumps(nested(400)))

    def test_deeply_nested_json_text(self) -> None:
        with pytest.raises(MalformedDocument):
            parse_document("[" * 100_000 + "]" * 100_000)

    def test_nesting_up_to_limit_parses(self) -> None:
        root = parse_document(nested(MAX_DEPTH - 1))
        node = root.children[0]
        while not isinstance(node, TextNode):
            node = node.children[0]
        assert node.text == "deep"


# --- Node variants ---


class TestNodeVariants:
    """Each serialized kind maps to one node variant."""

    def test_text_defaults(self) -> None:
        node = parse_node({"type": "text"})
        assert node == TextNode(text="", format=0)

    def test_text_format_bits(self) -> None:
        node = parse_node({"type": "text", "text": "x", "format": 17})
        assert isinstance(node, TextNode)
        assert node.is_code

    def test_heading_tag(self) -> None:
        node = parse_node({"type": "heading", "tag": "h3", "children": []})
        assert node == HeadingNode(tag="h3")

    def test_heading_defaults_to_h1(self) -> None:
        assert parse_node({"type": "heading"}) == HeadingNode(tag="h1")

    def test_heading_integer_level(self) -> None:
        assert parse_node({"type": "heading", "level": 4}) == HeadingNode(tag="h4")

    def test_heading_invalid_tag_falls_back(self) -> None:
        assert parse_node({"type": "heading", "tag": "h9"}) == HeadingNode(tag="h1")

    def test_paragraph_text_format(self) -> None:
        node = parse_node({"type": "paragraph", "textFormat": 16, "format": ""})
        assert node == ParagraphNode(text_format=16)

    def test_paragraph_alignment_format_ignored(self) -> None:
        node = parse_node({"type": "paragraph", "format": "center"})
        assert node == ParagraphNode(text_format=0)

    def test_quote(self) -> None:
        node = parse_node({"type": "quote", "children": [{"type": "text", "text": "q"}]})
        assert node == QuoteNode(children=(TextNode(text="q"),))

    @pytest.mark.parametrize("kind", ["horizontalrule", "horizontal-rule"])
    def test_horizontal_rule(self, kind: str) -> None:
        assert parse_node({"type": kind}) == HorizontalRuleNode()

    def test_unknown_kind_keeps_children(self) -> None:
        node = parse_node(
            {"type": "callout", "children": [{"type": "text", "text": "a"}]}
        )
        assert node == UnknownNode(type="callout", children=(TextNode(text="a"),))

    def test_boolean_format_is_not_a_bitmask(self) -> None:
        node = parse_node({"type": "text", "text": "x", "format": True})
        assert node == TextNode(text="x", format=0)


# --- Component entry points ---


class TestRunParse:
    """Entry points report failures instead of raising."""

    def test_success(self) -> None:
        out = run_parse(ParseDocumentInput(content=doc()))
        assert out.success
        assert out.root == RootNode()
        assert out.errors == []

    def test_failure(self) -> None:
        out = run_parse(ParseDocumentInput(content="not json"))
        assert not out.success
        assert out.root is None
        assert out.errors[0].code == "malformed_document"

    def test_dispatcher(self) -> None:
        assert run(ParseDocumentInput(content=doc())).success

    def test_dispatcher_rejects_unknown_input(self) -> None:
        with pytest.raises(ValueError):
            run("not an input")  # type: ignore[arg-type]
