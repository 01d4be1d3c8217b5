from typing import Optional

from .models import ScanStats


class MediaScannerError(Exception):
    """Base class for all scanner failures."""


class UploadLocationError(MediaScannerError):
    """The upload tree is misconfigured or unavailable."""


class CatalogUnavailableError(MediaScannerError):
    """
    The catalog could not answer a read.
    Raised instead of returning a false 'not registered'.
    """


class CatalogWriteError(MediaScannerError):
    """The catalog rejected or failed an insert/update."""


class ScanAbortedError(MediaScannerError):
    """
    A walk stopped early because the catalog became unreachable.
    Carries the stats accumulated before the failure.
    """

    def __init__(self, message: str, partial_stats: Optional[ScanStats] = None):
        super().__init__(message)
        self.partial_stats = partial_stats if partial_stats is not None else ScanStats.empty()
