import logging

from medialib.core.common.enums import ScanMode
from ..domain.exceptions import UploadLocationError
from ..domain.interfaces import IUploadLocator
from ..domain.models import ScanRoot, ScanStats
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """
    Picks the scan root for a mode and hands it to the scanner.
    Holds no state between runs; every call is a fresh scan.
    """

    def __init__(self, locator: IUploadLocator, scanner: DirectoryScanner):
        self.locator = locator
        self.scanner = scanner

    def run_narrow_scan(self) -> ScanStats:
        """Scans the current YYYY/MM upload folder, non-recursively."""
        try:
            location = self.locator.resolve()
        except UploadLocationError as e:
            logger.warning(f"Narrow scan skipped: {e}")
            return ScanStats.empty()

        root = ScanRoot(
            base_dir=location.current_dir,
            base_url=location.base_url,
            relative_prefix=location.subdir,
            site_timezone=location.site_timezone
        )
        return self.scanner.scan_directory(root)

    def run_deep_scan(self) -> ScanStats:
        """Scans the whole upload tree recursively."""
        try:
            location = self.locator.resolve()
        except UploadLocationError as e:
            logger.warning(f"Deep scan skipped: {e}")
            return ScanStats.empty()

        root = ScanRoot(
            base_dir=location.base_dir,
            base_url=location.base_url,
            site_timezone=location.site_timezone
        )
        return self.scanner.scan_tree(root)

    def run(self, mode: ScanMode) -> ScanStats:
        if mode == ScanMode.DEEP:
            return self.run_deep_scan()
        return self.run_narrow_scan()
