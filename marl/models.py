"""Record and Snapshot models for the ARL cache.

A Record is one (region, token, expiry) triple extracted from the remote
document. A Snapshot is the persisted cache state: records plus the overall
expiry and the content hash of the last fetched document.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from pydantic import AwareDatetime, BaseModel, Field, field_validator

MIN_TOKEN_LENGTH = 128


def is_token_like(value: str) -> bool:
    """Check the length and charset heuristic used to recognize ARL values."""
    return len(value) >= MIN_TOKEN_LENGTH and value.isalnum()


class Record(BaseModel):
    """One extracted ARL entry.

    Attributes:
        region: English region name (first segment of the flag's alt text).
        value: The ARL token itself.
        expiry: Last calendar day on which the token is usable.
    """

    region: str = Field(..., min_length=1, description="Region name")
    value: str = Field(..., description="ARL token")
    expiry: date = Field(..., description="Expiry date (inclusive)")

    @field_validator("value")
    @classmethod
    def _value_is_token_like(cls, v: str) -> str:
        if not is_token_like(v):
            raise ValueError(
                f"ARL must be alphanumeric and at least {MIN_TOKEN_LENGTH} characters"
            )
        return v

    def is_expired(self, today: date) -> bool:
        return self.expiry < today

    @property
    def masked_value(self) -> str:
        """Shortened token for log output."""
        return f"{self.value[:6]}...{self.value[-4:]}"


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, UTC)


class Snapshot(BaseModel):
    """Persisted cache state.

    ``records`` keeps document encounter order; the first record is the
    default selection.
    """

    overall_expiry: AwareDatetime = Field(default_factory=_epoch)
    content_hash: str = ""
    records: list[Record] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    def prune(self, today: date) -> int:
        """Drop records whose expiry is before ``today``.

        Returns:
            Number of records removed.
        """
        kept = [r for r in self.records if not r.is_expired(today)]
        removed = len(self.records) - len(kept)
        self.records = kept
        return removed
