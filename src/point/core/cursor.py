"""Offset cursor resolution."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from point.models.packages import OffsetEntry, OffsetPage
from point.models.release import EPOCH, OffsetRecord, as_utc


def resolve_cursor(cursor: datetime | None) -> datetime:
    """Effective inclusive lower bound for a listing."""
    if cursor is None:
        return EPOCH
    return as_utc(cursor)


def build_offset_page(offsets: Sequence[OffsetRecord], bound: datetime) -> OffsetPage:
    """Page over already ordered and truncated offset rows.

    An empty page hands back ``bound`` so the caller retries with the same cursor.
    The bound is inclusive, so rows dated exactly at the returned cursor come
    back on the next call. A page whose rows all share one timestamp returns
    that same timestamp and never advances; ``limit=1`` always does this, so
    callers should page with a limit larger than the number of rows that can
    share a timestamp.
    """
    if not offsets:
        return OffsetPage(data=[], offset=bound)
    entries = [
        OffsetEntry(cpid=offset.cpid, date=offset.date)
        for offset in sorted(offsets, key=lambda offset: offset.date)
    ]
    return OffsetPage(data=entries, offset=max(entry.date for entry in entries))
