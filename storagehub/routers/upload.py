# storagehub/routers/upload.py
from fastapi import APIRouter, Depends

from storagehub.dependencies import get_current_user_id, get_orchestrator
from storagehub.schemas.upload import (
    CreateFolderRequest,
    CreateFolderResponse,
    FileUploadedRequest,
    FolderOut,
    MessageResponse,
    UploadRequest,
    UploadResponse,
)
from storagehub.services.orchestrator import UploadOrchestrator

router = APIRouter()


# --- hand out a signed URL for a new file ---
@router.post("/upload", response_model=UploadResponse)
def request_upload(
    payload: UploadRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
):
    ticket = orchestrator.request_upload(
        user_id,
        payload.file_name,
        payload.file_type,
        payload.file_size,
        payload.folder_name,
    )
    return UploadResponse(url=ticket.credential.url, file_id=ticket.file_id, file_path=ticket.key)


# --- client reports the bytes are in the bucket ---
@router.post("/file-uploaded", response_model=MessageResponse)
def file_uploaded(
    payload: FileUploadedRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
):
    orchestrator.confirm_upload(user_id, payload.file_id, payload.status)
    return MessageResponse(message="File metadata updated successfully")


# --- create an empty folder (marker object + row) ---
@router.post("/create-folder", response_model=CreateFolderResponse)
def create_folder(
    payload: CreateFolderRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: UploadOrchestrator = Depends(get_orchestrator),
):
    folder = orchestrator.create_folder(user_id, payload.folder_name)
    return CreateFolderResponse(
        message=f'Folder "{folder.name}" created successfully!',
        folder=FolderOut.model_validate(folder),
    )
