import logging
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from medialib.core.common.enums import EntryType, EntryStatus
from medialib.core.database.connection import SessionLocal
from .sql_models import CatalogEntryModel, EntryMetaModel, ATTACHED_FILE_KEY
from ..domain.exceptions import CatalogUnavailableError, CatalogWriteError
from ..domain.interfaces import ICatalog
from ..domain.models import CatalogEntry, NewCatalogEntry

logger = logging.getLogger(__name__)

class SqlCatalogRepo(ICatalog):
    """
    Catalog backed by the catalog_entries / catalog_entry_meta tables.
    Every call opens its own session; nothing is cached between calls.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def exists(self, relative_path: str) -> bool:
        try:
            with self.session_factory() as db:
                match = (
                    db.query(EntryMetaModel.entry_id)
                    .join(CatalogEntryModel, EntryMetaModel.entry_id == CatalogEntryModel.id)
                    .filter(
                        EntryMetaModel.meta_key == ATTACHED_FILE_KEY,
                        EntryMetaModel.meta_text == relative_path,
                        CatalogEntryModel.entry_type == EntryType.ATTACHMENT
                    )
                    .first()
                )
                return match is not None
        except SQLAlchemyError as e:
            logger.error(f"Catalog lookup failed for '{relative_path}': {e}")
            raise CatalogUnavailableError(f"Catalog lookup failed for '{relative_path}'") from e

    def insert(self, entry: NewCatalogEntry) -> CatalogEntry:
        """
        Transactional logic:
        1. Insert the attachment row.
        2. Insert its attached_file meta row.
        Both land or neither does, so the lookup key is never missing.
        """
        with self.session_factory() as db:
            try:
                row = CatalogEntryModel(
                    entry_type=EntryType.ATTACHMENT,
                    status=EntryStatus.INHERIT,
                    title=entry.title,
                    content=entry.content,
                    mime_type=entry.mime_type,
                    guid=entry.guid,
                    created_at=entry.created_at,
                    created_at_gmt=entry.created_at_gmt
                )
                db.add(row)
                db.flush() # Flush to generate ID

                db.add(self._meta_row(row.id, ATTACHED_FILE_KEY, entry.attached_file))
                db.commit()
                db.refresh(row)

                return self._to_domain(row)
            except SQLAlchemyError as e:
                db.rollback()
                raise CatalogWriteError(f"Could not insert entry for '{entry.attached_file}': {e}") from e

    def attach_metadata(self, entry_id: UUID, key: str, value: Any) -> None:
        with self.session_factory() as db:
            try:
                db.query(EntryMetaModel).filter(
                    EntryMetaModel.entry_id == entry_id,
                    EntryMetaModel.meta_key == key
                ).delete(synchronize_session=False)

                db.add(self._meta_row(entry_id, key, value))
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise CatalogWriteError(f"Could not store '{key}' on entry {entry_id}: {e}") from e

    def get_by_attached_file(self, relative_path: str) -> Optional[CatalogEntry]:
        with self.session_factory() as db:
            row = (
                db.query(CatalogEntryModel)
                .join(EntryMetaModel, EntryMetaModel.entry_id == CatalogEntryModel.id)
                .filter(
                    EntryMetaModel.meta_key == ATTACHED_FILE_KEY,
                    EntryMetaModel.meta_text == relative_path,
                    CatalogEntryModel.entry_type == EntryType.ATTACHMENT
                )
                .first()
            )
            return self._to_domain(row) if row else None

    def list_attachments(self) -> List[CatalogEntry]:
        with self.session_factory() as db:
            rows = (
                db.query(CatalogEntryModel)
                .filter(CatalogEntryModel.entry_type == EntryType.ATTACHMENT)
                .order_by(CatalogEntryModel.created_at_gmt)
                .all()
            )
            return [self._to_domain(row) for row in rows]

    @staticmethod
    def _meta_row(entry_id: UUID, key: str, value: Any) -> EntryMetaModel:
        return EntryMetaModel(
            entry_id=entry_id,
            meta_key=key,
            meta_value=value,
            meta_text=value if isinstance(value, str) else None
        )

    @staticmethod
    def _to_domain(row: CatalogEntryModel) -> CatalogEntry:
        meta = {m.meta_key: m.meta_value for m in row.meta}
        return CatalogEntry(
            id=row.id,
            attached_file=meta.get(ATTACHED_FILE_KEY, ""),
            mime_type=row.mime_type,
            title=row.title,
            guid=row.guid,
            created_at=row.created_at,
            created_at_gmt=row.created_at_gmt,
            metadata={k: v for k, v in meta.items() if k != ATTACHED_FILE_KEY}
        )
