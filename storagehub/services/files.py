# storagehub/services/files.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub.core.errors import MetadataStoreError, NotFoundError, ValidationError
from storagehub.models.file import FileMeta, FileStatus

logger = logging.getLogger(__name__)


class FileMetadataStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_key(self, key: str) -> Optional[FileMeta]:
        try:
            return self.db.query(FileMeta).filter(FileMeta.key == key).first()
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to look up file", details={"reason": str(e)}) from e

    def get(self, file_id: str, owner_id: str) -> FileMeta:
        try:
            file = (
                self.db.query(FileMeta)
                .filter(FileMeta.file_id == file_id, FileMeta.owner_id == owner_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to look up file", details={"reason": str(e)}) from e
        if not file:
            raise NotFoundError("File not found", details={"file_id": file_id})
        return file

    def _commit(self, file: FileMeta, message: str) -> FileMeta:
        try:
            self.db.commit()
            self.db.refresh(file)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise MetadataStoreError(message, details={"reason": str(e)}) from e
        return file

    def _reset_for_upload(self, file: FileMeta, type: str, size: int, folder_id: Optional[str]) -> FileMeta:
        file.type = type
        file.size = size
        file.folder_id = folder_id
        file.status = FileStatus.PENDING.value
        logger.info("Reusing file %s for a new upload to %s", file.file_id, file.key)
        return self._commit(file, "Failed to store file metadata")

    def create(
        self,
        *,
        name: str,
        type: str,
        key: str,
        size: int,
        owner_id: str,
        folder_id: Optional[str] = None,
    ) -> FileMeta:
        """
        Write a ``pending``, private file row for ``key``.

        Keys are owner-prefixed, so an existing row for the key is the
        caller's own (an expired URL, a failed attempt or a replacement):
        it is reset to ``pending`` and reused, keeping one row per key.
        """
        existing = self.find_by_key(key)
        if existing is not None:
            return self._reset_for_upload(existing, type, size, folder_id)

        file = FileMeta(
            name=name,
            type=type,
            key=key,
            size=size,
            owner_id=owner_id,
            folder_id=folder_id,
            access=False,
            status=FileStatus.PENDING.value,
        )
        self.db.add(file)
        try:
            self.db.commit()
            self.db.refresh(file)
        except IntegrityError as e:
            self.db.rollback()
            # a concurrent request inserted the same key first
            existing = self.find_by_key(key)
            if existing is None:
                raise MetadataStoreError(
                    "Failed to store file metadata", details={"reason": str(e)}
                ) from e
            return self._reset_for_upload(existing, type, size, folder_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise MetadataStoreError("Failed to store file metadata", details={"reason": str(e)}) from e
        return file

    def mark_uploaded(self, file_id: str, owner_id: str) -> FileMeta:
        file = self.get(file_id, owner_id)
        if file.status == FileStatus.UPLOAD.value:
            return file
        if file.status != FileStatus.PENDING.value:
            raise ValidationError(
                f"Cannot confirm a file in status '{file.status}'",
                error_code="INVALID_STATUS_TRANSITION",
                details={"file_id": file_id, "status": file.status},
            )

        file.status = FileStatus.UPLOAD.value
        return self._commit(file, "Failed to update file metadata")

    def list(
        self,
        owner_id: str,
        search: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> List[FileMeta]:
        query = self.db.query(FileMeta).filter(FileMeta.owner_id == owner_id)
        if folder_id is not None:
            query = query.filter(FileMeta.folder_id == folder_id)
        if search and search.strip():
            search_term = f"%{search.strip().lower()}%"
            query = query.filter(FileMeta.name.ilike(search_term))
        try:
            return query.order_by(FileMeta.created_at.desc()).all()
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to list files", details={"reason": str(e)}) from e

    def stats(self, owner_id: str) -> dict:
        try:
            total_files, total_storage = (
                self.db.query(func.count(FileMeta.file_id), func.sum(FileMeta.size))
                .filter(FileMeta.owner_id == owner_id)
                .one()
            )
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to compute storage stats", details={"reason": str(e)}) from e
        return {"totalFiles": total_files, "totalStorage": total_storage or 0}
