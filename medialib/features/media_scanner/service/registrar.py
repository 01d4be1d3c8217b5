import logging
import re
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..data.metadata import PillowMetadataGenerator
from ..data.mime_probe import PillowMimeProbe
from ..data.sql_models import ATTACHMENT_METADATA_KEY
from ..domain.exceptions import CatalogWriteError
from ..domain.interfaces import ICatalog, IMetadataGenerator, IMimeProbe
from ..domain.models import (
    CandidateFile, CatalogEntry, NewCatalogEntry, RegistrationOutcome,
    RegistrationResult, ScanRoot
)

logger = logging.getLogger(__name__)

_TAGS = re.compile(r"<[^>]*?>")
_OCTETS = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE = re.compile(r"\s+")


def sanitize_title(raw: str) -> str:
    """
    Strips markup, percent-encoded octets and runs of whitespace from a file name stem.
    """
    text = _TAGS.sub("", raw)
    text = _OCTETS.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


class Registrar:
    """
    Turns an on-disk image into a catalog attachment.
    Callers have already checked the extension and that the path is not registered.
    """

    def __init__(self,
                 catalog: ICatalog,
                 mime_probe: Optional[IMimeProbe] = None,
                 metadata_generator: Optional[IMetadataGenerator] = None,
                 site_timezone: Optional[str] = None,
                 clock: Callable[[], float] = time.time):
        self.catalog = catalog
        self.mime_probe = mime_probe or PillowMimeProbe()
        self.metadata_generator = metadata_generator or PillowMetadataGenerator()
        # An explicit zone overrides the one carried by the scan root
        self.site_timezone = ZoneInfo(site_timezone) if site_timezone else None
        self.clock = clock

    def register(self, candidate: CandidateFile, scan_root: ScanRoot) -> RegistrationResult:
        # 1. Content sniffing guards against a renamed non-image
        mime_type = self.mime_probe.probe(candidate.absolute_path)
        if not mime_type or not mime_type.startswith("image/"):
            logger.warning(f"Skipping {candidate.relative_path}: content is not an image ({mime_type})")
            return RegistrationResult(outcome=RegistrationOutcome.REJECTED)

        # 2. Build the entry
        created_gmt = self._modified_at(candidate)
        new_entry = NewCatalogEntry(
            attached_file=candidate.relative_path,
            mime_type=mime_type,
            title=sanitize_title(candidate.stem),
            guid=scan_root.url_for(candidate.relative_path),
            created_at=created_gmt.astimezone(self.site_timezone or scan_root.site_timezone).replace(tzinfo=None),
            created_at_gmt=created_gmt
        )

        # 3. Persist; a failed insert is tallied by the caller, never raised
        try:
            entry = self.catalog.insert(new_entry)
        except CatalogWriteError as e:
            logger.error(f"Failed to register {candidate.relative_path}: {e}")
            return RegistrationResult(outcome=RegistrationOutcome.FAILED, error=str(e))

        # 4. Derived metadata is best-effort
        entry = self._attach_derived_metadata(entry, candidate)

        logger.info(f"Registered {candidate.relative_path} as {entry.id}")
        return RegistrationResult(outcome=RegistrationOutcome.IMPORTED, entry=entry)

    def _modified_at(self, candidate: CandidateFile) -> datetime:
        try:
            timestamp = candidate.absolute_path.stat().st_mtime
        except OSError:
            timestamp = self.clock()
        return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)

    def _attach_derived_metadata(self, entry: CatalogEntry, candidate: CandidateFile) -> CatalogEntry:
        try:
            meta = self.metadata_generator.generate(candidate.absolute_path)
            if not meta:
                return entry

            meta["file"] = candidate.relative_path
            self.catalog.attach_metadata(entry.id, ATTACHMENT_METADATA_KEY, meta)
        except Exception as e:
            logger.warning(f"Metadata generation failed for {candidate.relative_path}: {e}")
            return entry

        return replace(entry, metadata={**entry.metadata, ATTACHMENT_METADATA_KEY: meta})
