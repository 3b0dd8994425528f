"""On-disk cache of extracted ARL records.

The cache file holds one Snapshot: the records from the last extraction, an
overall expiry after which the document must be fetched again, and the
SHA-256 of the document the records came from. Refreshing with an unchanged
document skips extraction and only prunes expired records.

Single writer: there is no locking, so two processes sharing a cache path
race and the last one to persist wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from marl.extraction.extractor import RecordExtractor
from marl.extraction.nodes import Node, parse
from marl.models import Snapshot
from marl.pipeline.hashing import sha256_text
from marl.pipeline.io import read_text, write_json

logger = logging.getLogger(__name__)

SNAPSHOT_TTL = timedelta(days=1)


class CacheStore:
    """Loads, refreshes and persists the ARL Snapshot.

    Usage:
        store = CacheStore(cache_path=Path("arls.json"))
        snapshot = store.load()
        if store.needs_refresh(snapshot):
            snapshot = store.refresh(snapshot, client.fetch_document())
        store.persist(snapshot)
    """

    def __init__(
        self,
        cache_path: Path,
        *,
        now: datetime | None = None,
        parse_fn: Callable[[str], list[Node]] = parse,
    ) -> None:
        """
        Args:
            cache_path: Location of the JSON cache file.
            now: Reference time for every expiry check made through this store.
                Defaults to the current UTC time, captured once.
            parse_fn: Markdown parser producing the node sequence.
        """
        self.cache_path = cache_path
        self.now = now or datetime.now(UTC)
        self._parse_fn = parse_fn

    def load(self) -> Snapshot:
        """Read the persisted snapshot, pruned of expired records.

        A missing or unreadable cache file yields an empty snapshot.
        """
        if not self.cache_path.exists():
            logger.debug(f"No cache at {self.cache_path}")
            return Snapshot.empty()

        try:
            snapshot = Snapshot.model_validate_json(read_text(self.cache_path))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable cache {self.cache_path}: {e}")
            return Snapshot.empty()

        removed = snapshot.prune(self.now.date())
        if removed:
            logger.info(f"Pruned {removed} expired record(s) from cache")
        return snapshot

    def needs_refresh(self, snapshot: Snapshot, now: datetime | None = None) -> bool:
        now = now or self.now
        return snapshot.overall_expiry < now

    def refresh(self, snapshot: Snapshot, document_text: str, now: datetime | None = None) -> Snapshot:
        """Bring the snapshot up to date with a freshly fetched document.

        When the document hash matches ``content_hash`` only pruning happens:
        ``overall_expiry`` is not extended, so once it has lapsed every run
        fetches again. The hash saves the parse and extraction, not the fetch.

        Raises:
            ParseError: If the document cannot be parsed at all.
        """
        now = now or self.now
        digest = sha256_text(document_text)

        if digest == snapshot.content_hash:
            logger.info("Remote document unchanged, skipping extraction")
            refreshed = snapshot.model_copy(deep=True)
            refreshed.prune(now.date())
            return refreshed

        nodes = self._parse_fn(document_text)
        records = RecordExtractor(today=now.date()).extract(nodes)

        refreshed = Snapshot(
            overall_expiry=now + SNAPSHOT_TTL,
            content_hash=digest,
            records=records,
        )
        refreshed.prune(now.date())
        return refreshed

    def persist(self, snapshot: Snapshot) -> None:
        write_json(self.cache_path, json.loads(snapshot.model_dump_json()))
        logger.debug(f"Wrote {len(snapshot.records)} record(s) to {self.cache_path}")
