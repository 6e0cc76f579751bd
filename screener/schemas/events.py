from __future__ import annotations

from typing import Any
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field

INSERT_EVENT = "INSERT"


def decode_object_key(raw_key: str) -> str:
    """Undo the percent and '+' encoding S3 applies to object keys in notifications."""
    return unquote_plus(raw_key)


class S3Bucket(BaseModel):
    name: str = Field(min_length=1)


class S3Object(BaseModel):
    key: str = Field(min_length=1)


class S3Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bucket: S3Bucket
    object_: S3Object = Field(alias="object")


class S3EventRecord(BaseModel):
    s3: S3Entity

    @property
    def bucket(self) -> str:
        return self.s3.bucket.name

    @property
    def key(self) -> str:
        return decode_object_key(self.s3.object_.key)

    @property
    def location(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class StreamChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_image: dict[str, Any] | None = Field(default=None, alias="NewImage")


class StreamRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_name: str | None = Field(default=None, alias="eventName")
    dynamodb: StreamChange = Field(default_factory=StreamChange)

    @property
    def is_insert(self) -> bool:
        return self.event_name == INSERT_EVENT


# Batches keep records raw so one malformed entry fails alone.
class UploadEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    records: list[Any] = Field(default_factory=list, alias="Records")


class StreamEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    records: list[Any] = Field(default_factory=list, alias="Records")


class IngestionResult(BaseModel):
    saved: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class RoleMatchResult(BaseModel):
    evaluated: int = 0
    skipped: int = 0
    failed: int = 0
