import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from medialib.core.database.base import Base
from medialib.core.common.enums import EntryType, EntryStatus

ATTACHED_FILE_KEY = "attached_file"
ATTACHMENT_METADATA_KEY = "attachment_metadata"

def utc_now():
    return datetime.now(timezone.utc)

class CatalogEntryModel(Base):
    """
    One row per catalog item. The scanner only creates ATTACHMENT rows.
    """
    __tablename__ = "catalog_entries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entry_type = Column(SQLEnum(EntryType), nullable=False, index=True)
    status = Column(SQLEnum(EntryStatus), nullable=False, default=EntryStatus.INHERIT)
    title = Column(String, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    mime_type = Column(String, nullable=True)
    guid = Column(String, nullable=False)

    # Local (site timezone, naive) and UTC creation dates
    created_at = Column(DateTime, nullable=False)
    created_at_gmt = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    meta = relationship(
        "EntryMetaModel",
        back_populates="entry",
        cascade="all, delete-orphan"
    )

class EntryMetaModel(Base):
    """
    Free-form key/value pairs hanging off an entry.
    The 'attached_file' key is the relative upload path used for existence checks.
    """
    __tablename__ = "catalog_entry_meta"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entry_id = Column(UUID(as_uuid=True), ForeignKey("catalog_entries.id"), nullable=False, index=True)
    meta_key = Column(String, nullable=False)
    meta_value = Column(JSON, nullable=True)
    # Plain-text copy of string values so lookups don't depend on JSON operators
    meta_text = Column(String, nullable=True)

    entry = relationship("CatalogEntryModel", back_populates="meta")

    __table_args__ = (
        Index("ix_catalog_entry_meta_key_text", "meta_key", "meta_text"),
    )
