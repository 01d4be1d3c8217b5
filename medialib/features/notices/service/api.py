from typing import Optional

from medialib.core.config.settings import settings
from medialib.features.media_scanner.domain.models import ScanStats
from ..data.repository import SqlNoticeStore
from ..domain.interfaces import INoticeStore
from ..domain.models import ScanNotice

class NoticeService:
    """
    Facade for the Notices Feature: remember a scan result, show it once.
    """
    def __init__(self, store: Optional[INoticeStore] = None, ttl_seconds: Optional[int] = None):
        self.store = store or SqlNoticeStore()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.NOTICE_TTL_SECONDS

    def store_notice(self, actor_id: str, label: str, stats: ScanStats) -> None:
        self.store.put(actor_id, ScanNotice(label=label, stats=stats), self.ttl_seconds)

    def pop_message(self, actor_id: str) -> Optional[str]:
        """Returns the rendered one-time message, consuming it."""
        notice = self.store.take_once(actor_id)
        return notice.message() if notice else None

# Singleton Instance for easy import
notices = NoticeService()
