# storagehub/services/orchestrator.py
"""
Upload orchestration.

A client asks for an upload, gets a signed PUT URL scoped to one key and
content type, sends the bytes straight to the bucket, then reports back so
the file row moves from ``pending`` to ``upload``. The server never sees the
bytes.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from storagehub.core.config import Settings
from storagehub.core.errors import NotFoundError, ValidationError
from storagehub.models.file import FileMeta
from storagehub.models.folder import Folder
from storagehub.services import keys
from storagehub.services.credentials import CredentialIssuer, SignedURL
from storagehub.services.files import FileMetadataStore
from storagehub.services.folders import FolderDirectory
from storagehub.services.object_store import ObjectStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadTicket:
    credential: SignedURL
    file_id: str
    key: str


def _require(value, field: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required", details={"field": field})
    return value


class UploadOrchestrator:
    def __init__(self, db: Session, store: ObjectStore, settings: Settings):
        self.store = store
        self.settings = settings
        self.folders = FolderDirectory(db)
        self.files = FileMetadataStore(db)
        self.credentials = CredentialIssuer(store)

    def request_upload(
        self,
        owner_id: str,
        file_name: str,
        file_type: str,
        file_size: int,
        folder_name: Optional[str] = None,
    ) -> UploadTicket:
        # everything is checked before the first write
        keys.validate_component(_require(owner_id, "ownerId"), "ownerId")
        keys.validate_component(_require(file_name, "fileName"), "fileName")
        _require(file_type, "fileType")
        _require(file_size, "fileSize")
        if isinstance(file_size, bool) or not isinstance(file_size, int) or file_size <= 0:
            raise ValidationError("fileSize must be a positive integer", details={"field": "fileSize"})
        if folder_name:
            keys.validate_component(folder_name, "folderName")

        folder_id = None
        if folder_name:
            folder = self.folders.resolve_or_create(owner_id, folder_name)
            folder_id = folder.folder_id
            key = keys.build_key(owner_id, folder_name, file_name)
        else:
            key = keys.build_key(owner_id, None, file_name)

        file = self.files.create(
            name=file_name,
            type=file_type,
            key=key,
            size=file_size,
            owner_id=owner_id,
            folder_id=folder_id,
        )

        try:
            credential = self.credentials.issue_write_credential(
                key, file_type, self.settings.upload_url_ttl_seconds
            )
        except Exception:
            # no rollback: the pending row stays until a retry reuses it or a sweep removes it
            logger.warning("Credential issuance failed, file %s left pending at %s", file.file_id, key)
            raise

        logger.info("Upload requested by %s: file %s -> %s", owner_id, file.file_id, key)
        return UploadTicket(credential=credential, file_id=file.file_id, key=key)

    def confirm_upload(self, owner_id: str, file_id: str, reported_status: Any = None) -> FileMeta:
        """
        Mark a file as uploaded.

        ``reported_status`` is accepted for the client's benefit but the
        transition is always to ``upload``. With ``verify_uploads`` on, the
        object must exist in the bucket first.
        """
        _require(file_id, "fileId")
        if self.settings.verify_uploads:
            file = self.files.get(file_id, owner_id)
            if not self.store.object_exists(file.key):
                raise NotFoundError(
                    "Uploaded object not found in storage",
                    error_code="OBJECT_MISSING",
                    details={"file_id": file_id, "key": file.key},
                )

        file = self.files.mark_uploaded(file_id, owner_id)
        logger.info("Upload confirmed for file %s (reported %r)", file_id, reported_status)
        return file

    def create_folder(self, owner_id: str, folder_name: str) -> Folder:
        keys.validate_component(_require(owner_id, "ownerId"), "ownerId")
        _require(folder_name, "folderName")
        folder = self.folders.create_explicit(owner_id, folder_name, self.store)
        logger.info("Folder %s ready for owner %s", folder.path, owner_id)
        return folder

    def list_files(
        self, owner_id: str, search: Optional[str] = None, folder_name: Optional[str] = None
    ) -> List[FileMeta]:
        folder_id = None
        if folder_name:
            folder = self.folders.find(owner_id, folder_name)
            if folder is None:
                raise NotFoundError("Folder not found", details={"folder_name": folder_name})
            folder_id = folder.folder_id
        return self.files.list(owner_id, search=search, folder_id=folder_id)

    def storage_stats(self, owner_id: str) -> dict:
        return self.files.stats(owner_id)

    def list_folders(self, owner_id: str) -> List[Folder]:
        return self.folders.list(owner_id)
