from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional
from uuid import UUID

from .models import CatalogEntry, NewCatalogEntry, UploadLocation

# Returns False for directories the walker must not descend into
DirFilter = Callable[[Path], bool]


class IFileWalker(ABC):
    """
    Contract for traversing a filesystem.
    """
    @abstractmethod
    def walk(self, root: Path, recursive: bool, dir_filter: Optional[DirFilter] = None) -> Iterator[Path]:
        """
        Yields paths of entries found under root, files of a directory
        before the contents of its subdirectories.
        Directories rejected by dir_filter are pruned before descending.
        """
        pass


class IUploadLocator(ABC):
    @abstractmethod
    def resolve(self) -> UploadLocation:
        """
        Returns the upload base dir, its public URL and the current time bucket.
        Raises UploadLocationError when misconfigured.
        """
        pass


class IMimeProbe(ABC):
    @abstractmethod
    def probe(self, path: Path) -> Optional[str]:
        """Returns the MIME type detected from file content, or None."""
        pass


class IMetadataGenerator(ABC):
    @abstractmethod
    def generate(self, path: Path) -> Dict[str, Any]:
        """
        Builds derived metadata (dimensions, known size variants) for an image.
        May raise; callers treat failures as non-fatal.
        """
        pass


class ICatalog(ABC):
    """
    Contract for the media library catalog.
    Entries are only ever created here, never modified or deleted by the scanner.
    """

    @abstractmethod
    def exists(self, relative_path: str) -> bool:
        """
        True if an attachment entry stores this exact relative path.
        Raises CatalogUnavailableError instead of answering False on backend failure.
        """
        pass

    @abstractmethod
    def insert(self, entry: NewCatalogEntry) -> CatalogEntry:
        """
        Creates the attachment entry and its attached-file key in one transaction.
        Raises CatalogWriteError on failure.
        """
        pass

    @abstractmethod
    def attach_metadata(self, entry_id: UUID, key: str, value: Any) -> None:
        """Stores (or replaces) a key/value pair on an entry."""
        pass
