"""Tests for the load/refresh control flow."""
from __future__ import annotations

from pathlib import Path

import pytest

from marl.cache import CacheStore
from marl.pipeline.fetcher import FetchError
from marl.service import load_snapshot, open_directory
from tests.factories import NOW, SAMPLE_DOCUMENT


class FakeSource:
    def __init__(self, document: str = SAMPLE_DOCUMENT, error: Exception | None = None) -> None:
        self.document = document
        self.error = error
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.document


def test_first_run_fetches_and_extracts(cache_path: Path):
    source = FakeSource()
    snapshot = load_snapshot(CacheStore(cache_path, now=NOW), source)

    assert source.calls == 1
    assert [r.region for r in snapshot.records] == ["Brazil", "Germany"]


def test_fresh_cache_skips_fetch(cache_path: Path, fresh_snapshot):
    store = CacheStore(cache_path, now=NOW)
    store.persist(fresh_snapshot)
    source = FakeSource(error=FetchError("offline"))

    snapshot = load_snapshot(store, source)

    assert source.calls == 0
    assert snapshot.records == fresh_snapshot.records


def test_stale_cache_with_fetch_failure_raises(cache_path: Path):
    source = FakeSource(error=FetchError("offline"))
    with pytest.raises(FetchError):
        load_snapshot(CacheStore(cache_path, now=NOW), source)


def test_second_run_uses_persisted_snapshot(cache_path: Path):
    source = FakeSource()
    store = CacheStore(cache_path, now=NOW)
    store.persist(load_snapshot(store, source))

    load_snapshot(CacheStore(cache_path, now=NOW), source)

    assert source.calls == 1


def test_open_directory_shares_snapshot_records(cache_path: Path):
    snapshot, directory = open_directory(CacheStore(cache_path, now=NOW), FakeSource())

    directory.invalidate()

    assert [r.region for r in snapshot.records] == ["Germany"]
