"""Public tender feed routes."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from point.api.deps import get_tender_service
from point.api.schemas.packages import (
    OffsetResponse,
    RecordPackageResponse,
    ReleasePackageResponse,
)
from point.core.limits import InvalidParameterError
from point.core.tender_service import TenderService
from point.db.store import StorageUnavailableError
from point.models.packages import EmptySince, NotFound, RecordOutcome, ReleaseOutcome
from point.models.release import StatusCategory

router = APIRouter(prefix="/tenders", tags=["tenders"])
history_router = APIRouter(prefix="/releases", tags=["releases"])


def _storage_unavailable(exc: StorageUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


def _record_response(outcome: RecordOutcome) -> RecordPackageResponse:
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    if isinstance(outcome, EmptySince):
        return RecordPackageResponse()
    return RecordPackageResponse.from_package(outcome.package)


def _release_response(outcome: ReleaseOutcome) -> ReleasePackageResponse:
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    if isinstance(outcome, EmptySince):
        return ReleasePackageResponse()
    return ReleasePackageResponse.from_package(outcome.package)


@router.get("", response_model=OffsetResponse)
async def list_by_offset(
    offset: datetime | None = Query(default=None),
    limit: int | None = Query(default=None),
    status_category: StatusCategory | None = Query(default=None, alias="status"),
    service: TenderService = Depends(get_tender_service),
) -> OffsetResponse:
    try:
        page = await service.get_cursor_page(offset, limit, status_category)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    return OffsetResponse.from_page(page)


@router.get("/{cpid}", response_model=RecordPackageResponse)
async def get_record_package(
    cpid: str,
    offset: datetime | None = Query(default=None),
    service: TenderService = Depends(get_tender_service),
) -> RecordPackageResponse:
    try:
        outcome = await service.get_record_package(cpid, offset)
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    return _record_response(outcome)


@router.get("/{cpid}/{ocid}", response_model=ReleasePackageResponse)
async def get_release_package(
    cpid: str,
    ocid: str,
    offset: datetime | None = Query(default=None),
    service: TenderService = Depends(get_tender_service),
) -> ReleasePackageResponse:
    try:
        outcome = await service.get_release_package(cpid, ocid, offset)
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    return _release_response(outcome)


@history_router.get("/{cpid}", response_model=ReleasePackageResponse)
async def get_process_history(
    cpid: str,
    offset: datetime | None = Query(default=None),
    service: TenderService = Depends(get_tender_service),
) -> ReleasePackageResponse:
    try:
        outcome = await service.get_release_history(cpid, cursor=offset)
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    return _release_response(outcome)


@history_router.get("/{cpid}/{ocid}", response_model=ReleasePackageResponse)
async def get_release_history(
    cpid: str,
    ocid: str,
    offset: datetime | None = Query(default=None),
    service: TenderService = Depends(get_tender_service),
) -> ReleasePackageResponse:
    try:
        outcome = await service.get_release_history(cpid, ocid, offset)
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    return _release_response(outcome)
