"""SQLModel table backing the database key-value store"""

from datetime import datetime, timezone

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredDocument(SQLModel, table=True):
    """A serialized form document saved under a storage key"""

    __tablename__ = "stored_documents"

    key: str = Field(primary_key=True, max_length=255)
    payload: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow)
