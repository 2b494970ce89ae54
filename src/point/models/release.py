"""Stored release and offset rows."""

from __future__ import annotations

from datetime import MAXYEAR, UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
SNAPSHOT_STAGE = "MS"


class ReleaseStatus(str, Enum):
    """Coarse lifecycle status of a contracting process."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    UNSUCCESSFUL = "unsuccessful"
    COMPLETE = "complete"
    WITHDRAWN = "withdrawn"
    PLANNING = "planning"
    PLANNED = "planned"


class StatusCategory(str, Enum):
    """Status groupings accepted by the offset listing."""

    CN = "cn"
    PLAN = "plan"

    @property
    def statuses(self) -> frozenset[ReleaseStatus]:
        if self is StatusCategory.PLAN:
            return frozenset({ReleaseStatus.PLANNING, ReleaseStatus.PLANNED})
        return frozenset(
            {
                ReleaseStatus.ACTIVE,
                ReleaseStatus.CANCELLED,
                ReleaseStatus.UNSUCCESSFUL,
                ReleaseStatus.COMPLETE,
                ReleaseStatus.WITHDRAWN,
            }
        )


class ReleaseRecord(BaseModel):
    """One published release; ``json_data`` is kept as the stored text."""

    model_config = ConfigDict(frozen=True)

    cpid: str
    ocid: str
    release_date: datetime
    stage: str
    status: str
    json_data: str


class OffsetRecord(BaseModel):
    """Marks that something under ``cpid`` changed at ``date``."""

    model_config = ConfigDict(frozen=True)

    cpid: str
    date: datetime
    status: str


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and normalize aware ones to UTC.

    Aware values whose UTC instant falls outside the datetime range clamp to
    the nearest representable bound.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC)
    except OverflowError:
        bound = datetime.max if value.year == MAXYEAR else datetime.min
        return bound.replace(tzinfo=UTC)
