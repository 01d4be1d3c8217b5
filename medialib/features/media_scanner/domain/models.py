from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone, tzinfo
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote
from uuid import UUID


@dataclass(frozen=True)
class UploadLocation:
    """
    Where the hosting environment keeps uploads.
    subdir is the current time bucket (e.g. "2026/10"), or "" when buckets are disabled.
    """
    base_dir: Path
    base_url: str
    subdir: str = ""
    site_timezone: tzinfo = timezone.utc

    @property
    def current_dir(self) -> Path:
        return self.base_dir / self.subdir if self.subdir else self.base_dir


@dataclass(frozen=True)
class ScanRoot:
    """
    A directory subtree plus the public URL prefix its files are served under.
    relative_prefix is prepended to file names to build the catalog key.
    site_timezone is used for the local creation date of registered files.
    """
    base_dir: Path
    base_url: str
    relative_prefix: str = ""
    site_timezone: tzinfo = timezone.utc

    def relative_path_of(self, path: Path) -> str:
        """
        Catalog key for a file under base_dir: POSIX separators, no leading slash.
        e.g. base_dir=/srv/uploads/2026/10, prefix="2026/10", path=.../photo.jpg -> "2026/10/photo.jpg"
        """
        inner = path.relative_to(self.base_dir).as_posix()
        prefix = self.relative_prefix.strip("/")
        return f"{prefix}/{inner}" if prefix else inner

    def url_for(self, relative_path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{quote(relative_path.lstrip('/'))}"


@dataclass(frozen=True)
class CandidateFile:
    absolute_path: Path
    relative_path: str
    extension: str
    filename: str

    @classmethod
    def from_path(cls, absolute_path: Path, relative_path: str) -> "CandidateFile":
        return cls(
            absolute_path=absolute_path,
            relative_path=relative_path,
            extension=absolute_path.suffix.lstrip(".").lower(),
            filename=absolute_path.name,
        )

    @property
    def stem(self) -> str:
        return self.absolute_path.stem


@dataclass(frozen=True)
class NewCatalogEntry:
    """
    Everything the catalog needs to create an attachment row.
    attached_file is stored in the same transaction as the row itself.
    """
    attached_file: str
    mime_type: str
    title: str
    guid: str
    created_at: datetime
    created_at_gmt: datetime
    content: str = ""


@dataclass(frozen=True)
class CatalogEntry:
    id: UUID
    attached_file: str
    mime_type: str
    title: str
    guid: str
    created_at: datetime
    created_at_gmt: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScanStats:
    """
    Immutable summary of one walk.
    """
    scanned: int = 0
    imported: int = 0
    skipped_existing: int = 0
    skipped_intermediate: int = 0
    errors: int = 0

    @classmethod
    def empty(cls) -> "ScanStats":
        return cls()

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class ScanCounter:
    """
    Mutable accumulator owned by a single walk.
    """
    scanned: int = 0
    imported: int = 0
    skipped_existing: int = 0
    skipped_intermediate: int = 0
    errors: int = 0

    def freeze(self) -> ScanStats:
        return ScanStats(
            scanned=self.scanned,
            imported=self.imported,
            skipped_existing=self.skipped_existing,
            skipped_intermediate=self.skipped_intermediate,
            errors=self.errors,
        )


class RegistrationOutcome(str, Enum):
    IMPORTED = "imported"
    REJECTED = "rejected"   # not an image by content; silently dropped
    FAILED = "failed"       # catalog insert failed


@dataclass(frozen=True)
class RegistrationResult:
    outcome: RegistrationOutcome
    entry: Optional[CatalogEntry] = None
    error: Optional[str] = None
