from sqlalchemy import Column, String, DateTime, JSON
from medialib.core.database.base import Base

class ScanNoticeModel(Base):
    """
    At most one pending notice per actor; a new scan overwrites the old one.
    """
    __tablename__ = "scan_notices"

    actor_id = Column(String, primary_key=True)
    label = Column(String, nullable=False)
    stats = Column(JSON, nullable=False, default=dict)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
