"""Fold ordered release rows into OCDS record and release packages."""

from __future__ import annotations

from collections.abc import Sequence

from point.config import OCDSSettings
from point.core.ordering import actual_releases, order_releases, published_date
from point.models.packages import PackageEnvelope, RecordEntry, RecordPackage, ReleasePackage
from point.models.release import ReleaseRecord


def build_envelope(
    releases: Sequence[ReleaseRecord], uri: str, settings: OCDSSettings
) -> PackageEnvelope:
    return PackageEnvelope(
        uri=uri,
        version=settings.version,
        extensions=list(settings.extensions),
        publisher=settings.publisher,
        license=settings.license,
        publication_policy=settings.publication_policy,
        published_date=published_date(releases),
    )


def build_record_package(
    releases: Sequence[ReleaseRecord], cpid: str, settings: OCDSSettings
) -> RecordPackage:
    """Record package for ``cpid`` from its compiled releases.

    Raises ``ValueError`` on an empty row set; callers decide between
    not-found and nothing-changed before assembling.
    """
    if not releases:
        msg = f"No compiled releases to package for {cpid}"
        raise ValueError(msg)

    ordered = order_releases(releases)
    records = [
        RecordEntry(cpid=release.cpid, ocid=release.ocid, compiled_release=release.json_data)
        for release in ordered
    ]
    return RecordPackage(
        envelope=build_envelope(ordered, settings.tender_uri(cpid), settings),
        packages=[settings.tender_uri(record.cpid, record.ocid) for record in records],
        records=records,
        actual_releases=actual_releases(ordered, settings),
    )


def build_release_package(
    releases: Sequence[ReleaseRecord],
    cpid: str,
    settings: OCDSSettings,
    ocid: str | None = None,
) -> ReleasePackage:
    if not releases:
        msg = f"No releases to package for {cpid}"
        raise ValueError(msg)

    ordered = order_releases(releases)
    return ReleasePackage(
        envelope=build_envelope(ordered, settings.tender_uri(cpid, ocid), settings),
        releases=[release.json_data for release in ordered],
    )
