# storagehub/schemas/upload.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UploadRequest(CamelModel):
    file_name: str = Field(min_length=1)
    file_type: str = Field(min_length=1)
    file_size: int = Field(gt=0)
    folder_name: Optional[str] = None


class UploadResponse(CamelModel):
    url: str
    file_id: str
    file_path: str


class FileUploadedRequest(CamelModel):
    file_id: str = Field(min_length=1)
    status: Any = Field(...)  # required, value is not used


class CreateFolderRequest(CamelModel):
    folder_name: str = Field(min_length=1)


class MessageResponse(BaseModel):
    message: str


class FolderOut(CamelModel):
    folder_id: str
    name: str
    owner_id: str
    path: str


class CreateFolderResponse(BaseModel):
    message: str
    folder: FolderOut


class FileOut(CamelModel):
    file_id: str
    name: str
    type: str
    key: str
    size: int
    owner_id: str
    folder_id: Optional[str] = None
    access: bool
    status: str


class StorageStats(CamelModel):
    total_files: int
    total_storage: int


class FileListResponse(BaseModel):
    files: List[FileOut]
    stats: Optional[StorageStats] = None
