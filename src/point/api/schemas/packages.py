"""Public OCDS package response schemas."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from point.config import Publisher
from point.models.packages import OffsetPage, PackageEnvelope, RecordPackage, ReleasePackage


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PublisherResponse(_CamelModel):
    name: str | None = None
    scheme: str | None = None
    uid: str | None = None
    uri: str | None = None

    @classmethod
    def from_publisher(cls, publisher: Publisher) -> PublisherResponse:
        return cls(**publisher.model_dump())


class _EnvelopeResponse(_CamelModel):
    """Envelope fields; every field is null when nothing changed since the cursor."""

    uri: str | None = None
    version: str | None = None
    extensions: list[str] | None = None
    publisher: PublisherResponse | None = None
    license: str | None = None
    publication_policy: str | None = None
    published_date: datetime | None = None

    @staticmethod
    def _envelope_fields(envelope: PackageEnvelope) -> dict[str, Any]:
        return {
            "uri": envelope.uri,
            "version": envelope.version,
            "extensions": envelope.extensions,
            "publisher": PublisherResponse.from_publisher(envelope.publisher),
            "license": envelope.license,
            "publication_policy": envelope.publication_policy,
            "published_date": envelope.published_date,
        }


class RecordResponse(_CamelModel):
    cpid: str
    ocid: str
    compiled_release: Any


class ActualReleaseResponse(_CamelModel):
    stage: str
    uri: str


class RecordPackageResponse(_EnvelopeResponse):
    packages: list[str] | None = None
    records: list[RecordResponse] | None = None
    actual_releases: list[ActualReleaseResponse] | None = None

    @classmethod
    def from_package(cls, package: RecordPackage) -> RecordPackageResponse:
        return cls(
            **cls._envelope_fields(package.envelope),
            packages=package.packages,
            records=[
                RecordResponse(
                    cpid=record.cpid,
                    ocid=record.ocid,
                    compiled_release=json.loads(record.compiled_release),
                )
                for record in package.records
            ],
            actual_releases=[
                ActualReleaseResponse(stage=release.stage, uri=release.uri)
                for release in package.actual_releases
            ],
        )


class ReleasePackageResponse(_EnvelopeResponse):
    releases: list[Any] | None = None

    @classmethod
    def from_package(cls, package: ReleasePackage) -> ReleasePackageResponse:
        return cls(
            **cls._envelope_fields(package.envelope),
            releases=[json.loads(release) for release in package.releases],
        )


class OffsetEntryResponse(_CamelModel):
    cpid: str
    date: datetime


class OffsetResponse(_CamelModel):
    data: list[OffsetEntryResponse]
    offset: datetime

    @classmethod
    def from_page(cls, page: OffsetPage) -> OffsetResponse:
        return cls(
            data=[OffsetEntryResponse(cpid=entry.cpid, date=entry.date) for entry in page.data],
            offset=page.offset,
        )
