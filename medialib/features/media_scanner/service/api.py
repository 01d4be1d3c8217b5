from typing import Optional

from sqlalchemy.orm import sessionmaker

from medialib.core.common.enums import ScanMode
from medialib.core.database.connection import SessionLocal
from ..data.repository import SqlCatalogRepo
from ..data.upload_locator import SettingsUploadLocator
from ..domain.interfaces import IUploadLocator
from ..domain.models import ScanStats
from .orchestrator import ScanOrchestrator
from .registrar import Registrar
from .scanner import DirectoryScanner

class MediaScannerService:
    """
    Facade for the Media Scanner Feature.
    Wires the SQL catalog, Pillow probes and the settings-driven upload tree together.
    """
    def __init__(self,
                 session_factory: sessionmaker = SessionLocal,
                 locator: Optional[IUploadLocator] = None):
        self.catalog = SqlCatalogRepo(session_factory)
        self.locator = locator or SettingsUploadLocator()
        self.orchestrator = ScanOrchestrator(
            locator=self.locator,
            scanner=DirectoryScanner(self.catalog, registrar=Registrar(self.catalog))
        )

    def run_narrow_scan(self) -> ScanStats:
        return self.orchestrator.run_narrow_scan()

    def run_deep_scan(self) -> ScanStats:
        return self.orchestrator.run_deep_scan()

    def run(self, mode: ScanMode) -> ScanStats:
        return self.orchestrator.run(mode)

# Singleton Instance for easy import
media_scanner = MediaScannerService()
