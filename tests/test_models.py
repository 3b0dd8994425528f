"""Tests for Record and Snapshot models."""
from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from marl.models import Record, Snapshot, is_token_like
from tests.factories import FUTURE, PAST, TODAY, make_token


class TestRecord:
    def test_valid_record(self):
        record = Record(region="Brazil", value=make_token("a"), expiry=FUTURE)
        assert record.expiry == FUTURE

    def test_short_value_rejected(self):
        with pytest.raises(ValidationError):
            Record(region="Brazil", value="abc", expiry=FUTURE)

    def test_non_alphanumeric_value_rejected(self):
        with pytest.raises(ValidationError):
            Record(region="Brazil", value=make_token("a")[:-1] + "_", expiry=FUTURE)

    def test_expiry_parsed_from_iso_string(self):
        record = Record.model_validate({"region": "Brazil", "value": make_token("a"), "expiry": "2025-03-01"})
        assert record.expiry == date(2025, 3, 1)

    def test_is_expired(self):
        assert Record(region="X", value=make_token("a"), expiry=PAST).is_expired(TODAY)
        assert not Record(region="X", value=make_token("a"), expiry=TODAY).is_expired(TODAY)

    def test_masked_value_hides_token(self):
        record = Record(region="Brazil", value=make_token("a"), expiry=FUTURE)
        assert record.value not in record.masked_value
        assert len(record.masked_value) < 20


def test_is_token_like():
    assert is_token_like(make_token("a", 128))
    assert not is_token_like(make_token("a", 127))
    assert not is_token_like("a" * 127 + " ")


class TestSnapshot:
    def test_empty_snapshot_is_expired(self):
        snapshot = Snapshot.empty()
        assert snapshot.records == []
        assert snapshot.content_hash == ""
        assert snapshot.overall_expiry < datetime(2000, 1, 1, tzinfo=UTC)

    def test_prune_removes_past_records_only(self, record_factory):
        snapshot = Snapshot(
            records=[
                record_factory(region="A", expiry=PAST),
                record_factory(region="B", expiry=TODAY),
                record_factory(region="C", expiry=FUTURE),
            ]
        )
        assert snapshot.prune(TODAY) == 1
        assert [r.region for r in snapshot.records] == ["B", "C"]
