"""Record extraction from the parsed ARL document.

The document has no row construct spanning the flag image, the expiry text
and the token code span, so rows are rebuilt with a small accumulator:
a region and an expiry are held pending until a token arrives, at which
point a Record is emitted and the pending slots are cleared.

The document also carries a second, unrelated token table that reuses the
same conventions. Each table header starts with Braille Pattern Blank
characters; once BOUNDARY_THRESHOLD of those header cells have been seen the
extractor stops.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from marl.extraction.classifier import NodeRole, classify
from marl.extraction.nodes import Node
from marl.models import Record

logger = logging.getLogger(__name__)

# Header cells carrying the blank marker before the second table begins
BOUNDARY_THRESHOLD = 4


@dataclass
class RowAccumulator:
    """Pending-state machine for one logical table row.

    Transitions:
        region(name)   -> pending_region = name (last writer wins)
        expiry(d)      -> pending_expiry = d if d >= today, else unchanged
        token(value)   -> emit Record and clear both slots if both are set,
                          otherwise drop the token
    """

    today: date
    pending_region: str | None = None
    pending_expiry: date | None = None

    def offer_region(self, region: str) -> None:
        self.pending_region = region

    def offer_expiry(self, expiry: date) -> bool:
        """Returns True when the date was accepted."""
        if expiry < self.today:
            return False
        self.pending_expiry = expiry
        return True

    def offer_token(self, value: str) -> Record | None:
        if self.pending_region is None or self.pending_expiry is None:
            return None
        record = Record(region=self.pending_region, value=value, expiry=self.pending_expiry)
        self.reset()
        return record

    def reset(self) -> None:
        self.pending_region = None
        self.pending_expiry = None


@dataclass
class ExtractionResult:
    records: list[Record] = field(default_factory=list)
    boundaries_seen: int = 0
    dropped_tokens: int = 0
    halted: bool = False


class RecordExtractor:
    """Walks a node sequence and emits Records in document order."""

    def __init__(self, today: date, boundary_threshold: int = BOUNDARY_THRESHOLD) -> None:
        self.today = today
        self.boundary_threshold = boundary_threshold

    def extract(self, nodes: Iterable[Node]) -> list[Record]:
        return self.run(nodes).records

    def run(self, nodes: Iterable[Node]) -> ExtractionResult:
        result = ExtractionResult()
        row = RowAccumulator(today=self.today)

        for node in nodes:
            if result.boundaries_seen >= self.boundary_threshold:
                result.halted = True
                break

            classified = classify(node)

            if classified.role is NodeRole.BOUNDARY:
                result.boundaries_seen += 1
            elif classified.role is NodeRole.REGION:
                row.offer_region(classified.region)
            elif classified.role is NodeRole.DATE:
                if not row.offer_expiry(classified.expiry):
                    logger.debug(f"Ignoring past expiry {classified.expiry}")
            elif classified.role is NodeRole.TOKEN:
                record = row.offer_token(classified.token)
                if record is None:
                    result.dropped_tokens += 1
                else:
                    result.records.append(record)

        if result.halted:
            logger.debug(f"Stopped at table boundary #{result.boundaries_seen}")
        logger.info(
            f"Extracted {len(result.records)} ARL record(s) "
            f"({result.dropped_tokens} unpaired token(s) dropped)"
        )
        return result
