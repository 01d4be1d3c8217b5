# File: tests/conftest.py

import os
from typing import Dict, Optional, Set
from uuid import uuid4

import pytest
from PIL import Image

# 1. Settings are read at import time, so pin them before importing medialib
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SITE_TIMEZONE", "UTC")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from medialib.core.database.base import Base
from medialib.core.database.connection import init_db
from medialib.features.media_scanner.data.repository import SqlCatalogRepo
from medialib.features.media_scanner.domain.exceptions import CatalogUnavailableError, CatalogWriteError
from medialib.features.media_scanner.domain.interfaces import ICatalog
from medialib.features.media_scanner.domain.models import CatalogEntry, NewCatalogEntry


class InMemoryCatalog(ICatalog):
    """
    Test double honouring the ICatalog contract.
    fail_inserts_for: relative paths whose insert raises CatalogWriteError.
    unavailable_after: number of successful lookups before lookups start failing.
    """

    def __init__(self):
        self.entries: Dict[str, CatalogEntry] = {}
        self.fail_inserts_for: Set[str] = set()
        self.unavailable_after: Optional[int] = None
        self.lookups = 0

    def exists(self, relative_path: str) -> bool:
        if self.unavailable_after is not None and self.lookups >= self.unavailable_after:
            raise CatalogUnavailableError("catalog offline")
        self.lookups += 1
        return relative_path in self.entries

    def insert(self, entry: NewCatalogEntry) -> CatalogEntry:
        if entry.attached_file in self.fail_inserts_for:
            raise CatalogWriteError(f"insert rejected for {entry.attached_file}")

        stored = CatalogEntry(
            id=uuid4(),
            attached_file=entry.attached_file,
            mime_type=entry.mime_type,
            title=entry.title,
            guid=entry.guid,
            created_at=entry.created_at,
            created_at_gmt=entry.created_at_gmt
        )
        self.entries[entry.attached_file] = stored
        return stored

    def attach_metadata(self, entry_id, key, value) -> None:
        for path, entry in self.entries.items():
            if entry.id == entry_id:
                entry.metadata[key] = value
                return
        raise CatalogWriteError(f"no entry {entry_id}")


@pytest.fixture
def memory_catalog():
    return InMemoryCatalog()


@pytest.fixture
def db_engine(tmp_path):
    """
    A throwaway SQLite database per test, with all tables created.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def sql_catalog(session_factory):
    return SqlCatalogRepo(session_factory)


@pytest.fixture
def make_image():
    """
    Writes a real image so content sniffing sees a genuine file.
    The format follows the extension, whatever its case.
    """
    formats = {
        "jpg": "JPEG", "jpeg": "JPEG", "png": "PNG", "gif": "GIF",
        "webp": "WEBP", "bmp": "BMP", "tif": "TIFF", "tiff": "TIFF"
    }

    def _make(path, size=(32, 24)):
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = formats[path.suffix.lstrip(".").lower()]
        Image.new("RGB", size, color=(200, 40, 40)).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def uploads_dir(tmp_path):
    root = tmp_path / "uploads"
    root.mkdir()
    return root
