"""Ties the cache, the remote document and the record directory together."""

from __future__ import annotations

import logging
from collections.abc import Callable

from marl.cache import CacheStore
from marl.directory import RecordDirectory
from marl.models import Snapshot

logger = logging.getLogger(__name__)


def load_snapshot(store: CacheStore, fetch_document: Callable[[], str]) -> Snapshot:
    """Return a current snapshot, fetching the document only when the cache is stale.

    Raises:
        FetchError: The cache is stale and the document cannot be fetched.
        ParseError: The fetched document cannot be parsed.
    """
    snapshot = store.load()
    if not store.needs_refresh(snapshot):
        logger.debug(f"Cache fresh until {snapshot.overall_expiry.isoformat()}")
        return snapshot

    logger.info("Cache stale, fetching remote document")
    return store.refresh(snapshot, fetch_document())


def open_directory(store: CacheStore, fetch_document: Callable[[], str]) -> tuple[Snapshot, RecordDirectory]:
    snapshot = load_snapshot(store, fetch_document)
    return snapshot, RecordDirectory(snapshot.records)
