"""Canonical ordering of release rows."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from point.config import OCDSSettings
from point.models.packages import ActualRelease
from point.models.release import SNAPSHOT_STAGE, ReleaseRecord, ReleaseStatus


def order_releases(releases: Iterable[ReleaseRecord]) -> list[ReleaseRecord]:
    """Oldest first; equal dates keep their storage order."""
    return sorted(releases, key=lambda release: release.release_date)


def published_date(releases: Iterable[ReleaseRecord]) -> datetime:
    """Date the package first became available: the earliest release date."""
    return min(release.release_date for release in releases)


def actual_releases(
    releases: Iterable[ReleaseRecord], settings: OCDSSettings
) -> list[ActualRelease]:
    return [
        ActualRelease(stage=release.stage, uri=settings.tender_uri(release.cpid, release.ocid))
        for release in releases
        if release.status == ReleaseStatus.ACTIVE.value and release.stage != SNAPSHOT_STAGE
    ]
