"""Pipeboard — Key-Value Record Table."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class KeyValueRecord(SQLModel, table=True):
    """One serialized value per key.

    Each write replaces the whole value for its key; there are no partial
    updates.
    """

    __tablename__ = "kv_records"

    key: str = Field(primary_key=True, description="sales:{id} | targets:{id} | password:{id}")
    value: str = Field(description="Serialized payload (JSON or plain text)")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
