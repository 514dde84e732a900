# storagehub/routers/files.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storagehub.dependencies import get_current_user_id, get_orchestrator
from storagehub.schemas.upload import FileListResponse, FileOut, FolderOut, StorageStats
from storagehub.services.orchestrator import UploadOrchestrator

router = APIRouter()


# --- show user's files ---
@router.get("/files", response_model=FileListResponse)
def list_files(
    search: Optional[str] = None,
    folder_name: Optional[str] = Query(default=None, alias="folderName"),
    user_id: str = Depends(get_current_user_id),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
):
    files = orchestrator.list_files(user_id, search=search, folder_name=folder_name)

    # stats only make sense for the unfiltered view
    stats = None
    if not (search and search.strip()) and not folder_name:
        stats = StorageStats.model_validate(orchestrator.storage_stats(user_id))

    return FileListResponse(files=[FileOut.model_validate(f) for f in files], stats=stats)


@router.get("/folders", response_model=list[FolderOut])
def list_folders(
    user_id: str = Depends(get_current_user_id),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
):
    return [FolderOut.model_validate(f) for f in orchestrator.list_folders(user_id)]
