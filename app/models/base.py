"""
Shared base models for MongoDB documents
"""

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now():
    """Helper function for Pydantic default_factory to get current UTC time"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes coming back from MongoDB as UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase keys on the wire and in MongoDB"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentModel(CamelModel):
    """Base for top-level collection documents"""

    id: Optional[str] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    # Optimistic concurrency revision, incremented on every save
    version: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value):
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def to_document(self) -> dict:
        """Serialise for storage (camelCase keys, without _id)"""
        return self.model_dump(by_alias=True, exclude={"id"})
