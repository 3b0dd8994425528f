"""Tests for markdown to node flattening."""
from __future__ import annotations

import pytest

from marl.extraction.nodes import Node, NodeKind, ParseError, parse


def _kinds(nodes: list[Node]) -> list[NodeKind]:
    return [n.kind for n in nodes]


def test_image_then_alt_text_child():
    nodes = parse("![Brazil/Brasil](https://flags.example/br.png)")
    assert nodes[0] == Node(NodeKind.IMAGE, "Brazil/Brasil")
    assert nodes[1] == Node(NodeKind.TEXT, "Brazil/Brasil")


def test_image_with_formatted_alt_has_no_plain_alt():
    nodes = parse("![*Brazil*](https://flags.example/br.png)")
    assert nodes[0] == Node(NodeKind.IMAGE, None)


def test_inline_code_literal():
    nodes = parse("token: `abc123`")
    assert Node(NodeKind.CODE, "abc123") in nodes


def test_centered_text_stays_one_node():
    nodes = parse("<- 2025-03-01 ->")
    assert Node(NodeKind.TEXT, "<- 2025-03-01 ->") in nodes


def test_html_img_tag_is_image():
    nodes = parse('<img src="br.png" alt="Brazil/Brasil"> flag')
    assert nodes[0] == Node(NodeKind.IMAGE, "Brazil/Brasil")


def test_table_cells_in_document_order():
    document = (
        "| A | B | C |\n"
        "| --- | --- | --- |\n"
        "| ![Brazil](https://flags.example/br.png) | <- 2025-03-01 -> | `abc` |\n"
    )
    kinds = [k for k in _kinds(parse(document)) if k is not NodeKind.OTHER]
    assert kinds == [
        NodeKind.TEXT,
        NodeKind.TEXT,
        NodeKind.TEXT,
        NodeKind.IMAGE,
        NodeKind.TEXT,
        NodeKind.TEXT,
        NodeKind.CODE,
    ]


def test_empty_document():
    assert parse("") == []


def test_non_text_input_raises_parse_error():
    with pytest.raises(ParseError):
        parse(b"bytes")  # type: ignore[arg-type]
