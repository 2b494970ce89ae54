"""Public tender lookups: packages by key and the offset listing."""

from __future__ import annotations

import logging
from datetime import datetime

from point.config import OCDSSettings
from point.core.assembler import build_record_package, build_release_package
from point.core.cursor import build_offset_page, resolve_cursor
from point.core.limits import resolve_limit
from point.db.store import SQLiteStore
from point.models.packages import (
    EmptySince,
    Found,
    NotFound,
    OffsetPage,
    RecordOutcome,
    ReleaseOutcome,
)
from point.models.release import StatusCategory, as_utc

logger = logging.getLogger(__name__)

NO_RECORDS = "No records found."
NO_RELEASES = "No releases found."


class TenderService:
    """Read-only view over published releases."""

    def __init__(self, store: SQLiteStore, settings: OCDSSettings) -> None:
        self._store = store
        self._settings = settings

    async def get_record_package(self, cpid: str, cursor: datetime | None = None) -> RecordOutcome:
        since = as_utc(cursor) if cursor is not None else None
        releases = await self._store.find_compiled(cpid, since)
        if not releases:
            return self._empty(cpid, since, NO_RECORDS)
        return Found(build_record_package(releases, cpid, self._settings))

    async def get_release_package(
        self, cpid: str, ocid: str, cursor: datetime | None = None
    ) -> ReleaseOutcome:
        """Compiled release ``ocid`` of ``cpid``.

        With a cursor, a release dated at or before the cursor counts as
        already seen and yields ``EmptySince``.
        """
        release = await self._store.find_one(cpid, ocid)
        if release is None:
            logger.info("no compiled release for %s/%s", cpid, ocid)
            return NotFound(NO_RELEASES)
        if cursor is not None:
            since = as_utc(cursor)
            if since >= release.release_date:
                return EmptySince(since)
        return Found(build_release_package([release], cpid, self._settings, ocid=ocid))

    async def get_release_history(
        self,
        cpid: str,
        ocid: str | None = None,
        cursor: datetime | None = None,
    ) -> ReleaseOutcome:
        since = as_utc(cursor) if cursor is not None else None
        releases = await self._store.find_history(cpid, ocid, since)
        if not releases:
            return self._empty(cpid, since, NO_RELEASES)
        return Found(build_release_package(releases, cpid, self._settings, ocid=ocid))

    async def get_cursor_page(
        self,
        cursor: datetime | None = None,
        limit: int | None = None,
        category: StatusCategory | None = None,
    ) -> OffsetPage:
        resolved_limit = resolve_limit(limit, self._settings)
        bound = resolve_cursor(cursor)
        logger.debug("offset listing from %s limit=%d category=%s", bound, resolved_limit, category)
        offsets = await self._store.find_offsets(
            bound,
            resolved_limit,
            statuses=category.statuses if category is not None else None,
        )
        return build_offset_page(offsets, bound)

    @staticmethod
    def _empty(cpid: str, since: datetime | None, message: str) -> NotFound | EmptySince:
        if since is None:
            logger.info("%s cpid=%s", message, cpid)
            return NotFound(message)
        return EmptySince(since)
