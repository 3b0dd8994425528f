"""Document-to-record extraction."""

from marl.extraction.classifier import ClassifiedNode, NodeRole, classify
from marl.extraction.extractor import BOUNDARY_THRESHOLD, RecordExtractor, RowAccumulator
from marl.extraction.nodes import Node, NodeKind, ParseError, parse

__all__ = [
    "BOUNDARY_THRESHOLD",
    "ClassifiedNode",
    "Node",
    "NodeKind",
    "NodeRole",
    "ParseError",
    "RecordExtractor",
    "RowAccumulator",
    "classify",
    "parse",
]
