import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from medialib.core.database.connection import SessionLocal
from medialib.features.media_scanner.domain.models import ScanStats
from .sql_models import ScanNoticeModel
from ..domain.interfaces import INoticeStore
from ..domain.models import ScanNotice

logger = logging.getLogger(__name__)

class SqlNoticeStore(INoticeStore):

    def __init__(self,
                 session_factory: sessionmaker = SessionLocal,
                 clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.session_factory = session_factory
        self.clock = clock

    def put(self, actor_id: str, notice: ScanNotice, ttl_seconds: int) -> None:
        with self.session_factory() as db:
            try:
                db.merge(ScanNoticeModel(
                    actor_id=actor_id,
                    label=notice.label,
                    stats=notice.stats.as_dict(),
                    expires_at=self.clock() + timedelta(seconds=ttl_seconds)
                ))
                db.commit()
            except Exception:
                db.rollback()
                raise

    def take_once(self, actor_id: str) -> Optional[ScanNotice]:
        with self.session_factory() as db:
            row = db.get(ScanNoticeModel, actor_id)
            if row is None:
                return None

            expires_at = row.expires_at
            # SQLite hands back naive datetimes
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)

            notice = ScanNotice(label=row.label, stats=ScanStats(**row.stats))

            # Only the caller whose delete removed the row gets the notice
            deleted = (
                db.query(ScanNoticeModel)
                .filter(ScanNoticeModel.actor_id == actor_id)
                .delete(synchronize_session=False)
            )
            db.commit()
            if deleted != 1:
                logger.debug(f"Notice for actor {actor_id} was already taken")
                return None

            if expires_at <= self.clock():
                logger.debug(f"Dropped expired notice for actor {actor_id}")
                return None
            return notice
