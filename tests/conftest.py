"""
Pytest configuration and shared fixtures.

All tests run against a fixed clock so that expiry comparisons do not drift
with the calendar.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from marl.models import Record, Snapshot
from tests.factories import FUTURE, make_token


# --- Record Fixtures ---
@pytest.fixture
def record_factory() -> Callable[..., Record]:
    """Factory for records with sensible defaults.

    Usage:
        def test_something(record_factory):
            record = record_factory(region="Brazil", expiry=FUTURE)
    """

    def _create(region: str = "Brazil", expiry: date = FUTURE, seed: str | None = None) -> Record:
        return Record(region=region, value=make_token(seed or region), expiry=expiry)

    return _create


@pytest.fixture
def sample_records(record_factory) -> list[Record]:
    return [
        record_factory(region="Brazil", seed="b1"),
        record_factory(region="France", seed="f1"),
        record_factory(region="Brazil", seed="b2"),
    ]


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "arls.json"


@pytest.fixture
def fresh_snapshot(sample_records) -> Snapshot:
    return Snapshot(
        overall_expiry=datetime(2025, 2, 2, 12, 0, tzinfo=UTC),
        content_hash="abc",
        records=sample_records,
    )
