"""Query layer over the current ARL records."""

from __future__ import annotations

import logging

from marl.models import Record

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """No record exists for the requested region."""

    def __init__(self, region: str, regions: list[str]) -> None:
        self.region = region
        self.regions = regions
        available = ", ".join(regions) if regions else "none"
        super().__init__(f"No ARL for region '{region}' (available: {available})")


class EmptyDirectoryError(LookupError):
    """There are no records at all, so not even a default can be served."""

    def __init__(self) -> None:
        super().__init__("No valid ARLs are available")


class RecordDirectory:
    """Lookup, default selection and invalidation over an ordered record list.

    The list is shared, not copied, so invalidations are visible in the
    snapshot the records came from.
    """

    def __init__(self, records: list[Record]) -> None:
        self._records = records

    def __len__(self) -> int:
        return len(self._records)

    def regions(self) -> list[str]:
        """Distinct region names in first-occurrence order."""
        return list(dict.fromkeys(r.region for r in self._records))

    def _index(self, region: str | None) -> int | None:
        if not self._records:
            return None
        if region is None:
            return 0
        for i, record in enumerate(self._records):
            if record.region == region:
                return i
        return None

    def get(self, region: str | None = None) -> Record:
        """Return the record for ``region``, or the default (first) record.

        Raises:
            EmptyDirectoryError: No region given and there are no records.
            NotFoundError: ``region`` has no record; carries the known regions.
        """
        index = self._index(region)
        if index is None:
            if region is None:
                raise EmptyDirectoryError()
            raise NotFoundError(region, self.regions())
        return self._records[index]

    def invalidate(self, region: str | None = None) -> Record | None:
        """Remove the record for ``region`` (or the default record).

        Invalidating a region that has no record is a no-op.

        Returns:
            The removed record, or None if nothing was removed.
        """
        index = self._index(region)
        if index is None:
            logger.debug(f"Nothing to invalidate for region {region!r}")
            return None
        removed = self._records.pop(index)
        logger.info(f"Invalidated ARL {removed.masked_value} for {removed.region}")
        return removed
