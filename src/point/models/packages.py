"""OCDS package shapes and lookup outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from point.config import Publisher


class PackageEnvelope(BaseModel):
    """Metadata common to record and release packages."""

    uri: str
    version: str
    extensions: list[str] = Field(default_factory=list)
    publisher: Publisher
    license: str | None = None
    publication_policy: str | None = None
    published_date: datetime


class RecordEntry(BaseModel):
    cpid: str
    ocid: str
    compiled_release: str


class ActualRelease(BaseModel):
    stage: str
    uri: str


class RecordPackage(BaseModel):
    """Compiled view of a contracting process."""

    envelope: PackageEnvelope
    packages: list[str]
    records: list[RecordEntry]
    actual_releases: list[ActualRelease]


class ReleasePackage(BaseModel):
    """Release documents for a process or a single release, oldest first."""

    envelope: PackageEnvelope
    releases: list[str]


class OffsetEntry(BaseModel):
    cpid: str
    date: datetime


class OffsetPage(BaseModel):
    """One page of the offset listing; ``offset`` is the cursor for the next call."""

    data: list[OffsetEntry]
    offset: datetime


PackageT = TypeVar("PackageT", RecordPackage, ReleasePackage)


@dataclass(frozen=True, slots=True)
class Found(Generic[PackageT]):
    package: PackageT


@dataclass(frozen=True, slots=True)
class NotFound:
    message: str


@dataclass(frozen=True, slots=True)
class EmptySince:
    """Nothing changed after ``cursor``."""

    cursor: datetime


RecordOutcome = Found[RecordPackage] | NotFound | EmptySince
ReleaseOutcome = Found[ReleasePackage] | NotFound | EmptySince
