# storagehub/services/folders.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storagehub.core.errors import ConflictRecoverable, MetadataStoreError
from storagehub.models.folder import Folder
from storagehub.services import keys
from storagehub.services.object_store import ObjectStore

logger = logging.getLogger(__name__)


class FolderDirectory:
    """Finds or creates the single folder row for an (owner, name) pair."""

    def __init__(self, db: Session):
        self.db = db

    def find(self, owner_id: str, folder_name: str) -> Optional[Folder]:
        try:
            return (
                self.db.query(Folder)
                .filter(Folder.owner_id == owner_id, Folder.name == folder_name)
                .first()
            )
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to look up folder", details={"reason": str(e)}) from e

    def list(self, owner_id: str) -> List[Folder]:
        try:
            return self.db.query(Folder).filter(Folder.owner_id == owner_id).order_by(Folder.name).all()
        except SQLAlchemyError as e:
            raise MetadataStoreError("Failed to list folders", details={"reason": str(e)}) from e

    def _insert(self, owner_id: str, folder_name: str) -> Folder:
        folder = Folder(
            name=folder_name,
            owner_id=owner_id,
            path=keys.folder_path(owner_id, folder_name),
        )
        self.db.add(folder)
        try:
            self.db.commit()
            self.db.refresh(folder)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictRecoverable(
                f"Folder '{folder_name}' was created concurrently",
                details={"owner_id": owner_id, "name": folder_name},
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise MetadataStoreError("Failed to create folder", details={"reason": str(e)}) from e
        return folder

    def resolve_or_create(self, owner_id: str, folder_name: str) -> Folder:
        keys.validate_component(folder_name, "folderName")

        folder = self.find(owner_id, folder_name)
        if folder is not None:
            return folder

        try:
            folder = self._insert(owner_id, folder_name)
        except ConflictRecoverable:
            # another request won the insert; its row is the answer
            folder = self.find(owner_id, folder_name)
            if folder is None:
                raise MetadataStoreError(
                    "Folder vanished after a creation conflict",
                    details={"owner_id": owner_id, "name": folder_name},
                )
            logger.info("Folder %s/%s created concurrently, reusing %s", owner_id, folder_name, folder.folder_id)
            return folder

        logger.info("Created folder %s for owner %s", folder.folder_id, owner_id)
        return folder

    def create_explicit(self, owner_id: str, folder_name: str, store: ObjectStore) -> Folder:
        """
        Write the zero-byte marker, then resolve the folder row.

        The marker goes first: if it fails no row is written, and a marker left
        behind by a failed insert is simply reused on retry. Asking for an
        existing folder returns it unchanged.
        """
        keys.validate_component(folder_name, "folderName")
        store.put_marker(keys.build_folder_marker_key(owner_id, folder_name))
        return self.resolve_or_create(owner_id, folder_name)
