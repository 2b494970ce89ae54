"""Process-wide OCDS publication settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Publisher(BaseModel):
    """Publisher block shared by every package envelope."""

    name: str | None = None
    scheme: str | None = None
    uid: str | None = None
    uri: str | None = None


class OCDSSettings(BaseSettings):
    """Static package metadata and paging bounds.

    Built once at startup and never mutated; request handlers receive the
    same instance through ``get_settings``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    path: str = Field(default="http://localhost:8000/", alias="OCDS_PATH")
    version: str = Field(default="1.1", alias="OCDS_VERSION")
    extensions: list[str] = Field(default_factory=list, alias="OCDS_EXTENSIONS")
    license: str | None = Field(default=None, alias="OCDS_LICENSE")
    publication_policy: str | None = Field(default=None, alias="OCDS_PUBLICATION_POLICY")
    publisher_name: str | None = Field(default=None, alias="OCDS_PUBLISHER_NAME")
    publisher_scheme: str | None = Field(default=None, alias="OCDS_PUBLISHER_SCHEME")
    publisher_uid: str | None = Field(default=None, alias="OCDS_PUBLISHER_UID")
    publisher_uri: str | None = Field(default=None, alias="OCDS_PUBLISHER_URI")
    def_limit: int = Field(default=100, alias="OCDS_DEF_LIMIT")
    max_limit: int = Field(default=300, alias="OCDS_MAX_LIMIT")

    db_path: Path = Field(default=Path(".point/point.db"), alias="POINT_DB_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("path")
    @classmethod
    def normalize_path(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    @model_validator(mode="after")
    def check_limits(self) -> OCDSSettings:
        if self.def_limit < 0:
            msg = "def_limit must not be negative"
            raise ValueError(msg)
        if self.max_limit < self.def_limit:
            msg = "max_limit must be greater than or equal to def_limit"
            raise ValueError(msg)
        return self

    @property
    def publisher(self) -> Publisher:
        return Publisher(
            name=self.publisher_name,
            scheme=self.publisher_scheme,
            uid=self.publisher_uid,
            uri=self.publisher_uri,
        )

    def tender_uri(self, cpid: str, ocid: str | None = None) -> str:
        """Public URI of a contracting process, or of one release inside it."""
        uri = f"{self.path}tenders/{cpid}"
        if ocid is not None:
            uri += f"/{ocid}"
        return uri


@lru_cache()
def get_settings() -> OCDSSettings:
    """Get cached settings instance."""
    return OCDSSettings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
