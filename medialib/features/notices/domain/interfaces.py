from abc import ABC, abstractmethod
from typing import Optional

from .models import ScanNotice

class INoticeStore(ABC):
    """
    Contract for a store-then-consume-once notice slot per actor.
    """

    @abstractmethod
    def put(self, actor_id: str, notice: ScanNotice, ttl_seconds: int) -> None:
        """Stores the notice, replacing any pending one for this actor."""
        pass

    @abstractmethod
    def take_once(self, actor_id: str) -> Optional[ScanNotice]:
        """
        Returns the pending notice and removes it.
        Expired or missing notices return None.
        """
        pass
