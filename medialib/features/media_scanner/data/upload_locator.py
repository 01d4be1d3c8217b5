from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from medialib.core.config.settings import settings
from ..domain.exceptions import UploadLocationError
from ..domain.interfaces import IUploadLocator
from ..domain.models import UploadLocation

class SettingsUploadLocator(IUploadLocator):
    """
    Resolves the upload tree from Settings.
    The current bucket is YYYY/MM of "now" (UTC), matching where new uploads land.
    """

    def __init__(self,
                 base_dir: Optional[Path] = None,
                 base_url: Optional[str] = None,
                 use_yearmonth_folders: Optional[bool] = None,
                 site_timezone: Optional[str] = None,
                 clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.base_dir = Path(base_dir) if base_dir is not None else settings.UPLOADS_DIR
        self.base_url = base_url if base_url is not None else settings.UPLOADS_BASE_URL
        self.use_yearmonth_folders = (
            use_yearmonth_folders if use_yearmonth_folders is not None
            else settings.UPLOADS_USE_YEARMONTH_FOLDERS
        )
        self.site_timezone = site_timezone if site_timezone is not None else settings.SITE_TIMEZONE
        self.clock = clock

    def resolve(self) -> UploadLocation:
        if not self.base_dir.is_dir():
            raise UploadLocationError(f"Upload directory not found: {self.base_dir}")
        if not self.base_url:
            raise UploadLocationError("Upload base URL is not configured.")

        try:
            zone = ZoneInfo(self.site_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise UploadLocationError(f"Unknown site timezone: {self.site_timezone!r}") from e

        subdir = self.clock().strftime("%Y/%m") if self.use_yearmonth_folders else ""
        return UploadLocation(base_dir=self.base_dir, base_url=self.base_url, subdir=subdir, site_timezone=zone)
