"""Node classification for ARL extraction.

Maps one parsed node to the role it plays in a token table row:
a region flag, an expiry date, a table boundary, or the token itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from marl.extraction.nodes import Node, NodeKind
from marl.models import is_token_like

# Braille Pattern Blank; every data table header row in the document starts with it
BOUNDARY_CHAR = "\u2800"

DATE_FORMAT = "%Y-%m-%d"


class NodeRole(Enum):
    REGION = "region"
    DATE = "date"
    BOUNDARY = "boundary"
    TOKEN = "token"
    IRRELEVANT = "irrelevant"


@dataclass(frozen=True)
class ClassifiedNode:
    """Classification result.

    Exactly one of ``region``, ``expiry`` or ``token`` is set for the
    REGION, DATE and TOKEN roles; none for the others.
    """

    role: NodeRole
    region: str | None = None
    expiry: date | None = None
    token: str | None = None


IRRELEVANT = ClassifiedNode(NodeRole.IRRELEVANT)
BOUNDARY = ClassifiedNode(NodeRole.BOUNDARY)


def parse_date(word: str) -> date | None:
    try:
        return datetime.strptime(word, DATE_FORMAT).date()
    except ValueError:
        return None


def first_date(text: str) -> date | None:
    """Return the first whitespace-delimited word in ``text`` that is a YYYY-MM-DD date."""
    for word in text.split():
        parsed = parse_date(word)
        if parsed is not None:
            return parsed
    return None


def region_from_alt(alt: str) -> str:
    # For country names like Brazil/Brasil
    return alt.split("/", 1)[0]


def classify(node: Node) -> ClassifiedNode:
    """Classify a single node. Pure; holds no state."""
    if node.kind is NodeKind.IMAGE:
        if not node.literal:
            return IRRELEVANT
        region = region_from_alt(node.literal).strip()
        if not region:
            return IRRELEVANT
        return ClassifiedNode(NodeRole.REGION, region=region)

    if node.kind is NodeKind.TEXT:
        text = node.literal or ""
        if BOUNDARY_CHAR in text:
            return BOUNDARY
        expiry = first_date(text)
        if expiry is None:
            return IRRELEVANT
        return ClassifiedNode(NodeRole.DATE, expiry=expiry)

    if node.kind is NodeKind.CODE:
        literal = node.literal or ""
        if is_token_like(literal):
            return ClassifiedNode(NodeRole.TOKEN, token=literal)
        return IRRELEVANT

    return IRRELEVANT
