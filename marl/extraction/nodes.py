"""Markdown document to node sequence.

Wraps markdown-it-py and flattens its token stream into a depth-first,
pre-order list of typed nodes. Only the node kinds the extractor cares
about are distinguished; everything else is reported as OTHER.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from markdown_it import MarkdownIt
from markdown_it.token import Token

_IMG_TAG_RE = re.compile(r"<img\b[^>]*?\balt\s*=\s*([\"'])(.*?)\1", re.IGNORECASE | re.DOTALL)


class ParseError(Exception):
    """The document could not be parsed into nodes at all."""


class NodeKind(str, Enum):
    IMAGE = "image"
    TEXT = "text"
    CODE = "code"
    OTHER = "other"


@dataclass(frozen=True)
class Node:
    """One parsed document node.

    For IMAGE nodes ``literal`` is the plain alt text (None when the alt text
    is missing or is not plain text). For TEXT and CODE nodes it is the
    literal content.
    """

    kind: NodeKind
    literal: str | None = None


def _build_parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable("table")


def _image_alt(token: Token) -> str | None:
    if not token.children:
        return None
    first = token.children[0]
    if first.type != "text":
        return None
    return first.content


def _html_images(html: str) -> Iterator[Node]:
    for match in _IMG_TAG_RE.finditer(html):
        yield Node(NodeKind.IMAGE, match.group(2))


def _walk(tokens: list[Token]) -> Iterator[Node]:
    for token in tokens:
        if token.type == "inline":
            yield from _walk(token.children or [])
        elif token.type == "image":
            yield Node(NodeKind.IMAGE, _image_alt(token))
            yield from _walk(token.children or [])
        elif token.type == "text":
            yield Node(NodeKind.TEXT, token.content)
        elif token.type == "code_inline":
            yield Node(NodeKind.CODE, token.content)
        elif token.type in ("html_inline", "html_block"):
            images = list(_html_images(token.content))
            if images:
                yield from images
            else:
                yield Node(NodeKind.OTHER, token.content)
        elif token.nesting == 0:
            yield Node(NodeKind.OTHER, token.content or None)


def parse(text: str) -> list[Node]:
    """Parse markdown text into a depth-first node sequence.

    Raises:
        ParseError: If the parser rejects the input outright.
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected document text, got {type(text).__name__}")
    try:
        tokens = _build_parser().parse(text)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Could not parse document: {e}") from e
    return list(_walk(tokens))
