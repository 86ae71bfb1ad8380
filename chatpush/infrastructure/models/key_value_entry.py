"""SQLAlchemy model backing the local key-value store."""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from chatpush.infrastructure.database import Base


class KeyValueEntryModel(Base):
    """One persisted key with its serialized value."""

    __tablename__ = "key_value_entry"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


__all__ = ["KeyValueEntryModel"]
