# storagehub/models/file.py
import enum
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from storagehub.models.database import Base


class FileStatus(str, enum.Enum):
    PENDING = "pending"   # row written, signed URL handed out
    UPLOAD = "upload"     # client reported the upload finished


class FileMeta(Base):
    __tablename__ = "files"

    file_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)            # Name user uploaded
    type = Column(String, nullable=False)            # Content type the URL is scoped to
    key = Column(String, nullable=False, unique=True)  # Full object key in the bucket
    size = Column(BigInteger, nullable=False)        # Size in bytes, as declared by the client
    access = Column(Boolean, nullable=False, default=False)
    # plain string so new states don't need a migration
    status = Column(String(32), nullable=False, default=FileStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner_id = Column(String, nullable=False, index=True)
    # null means the owner's root; folders with files can't be deleted
    folder_id = Column(String(36), ForeignKey("folders.folder_id", ondelete="RESTRICT"), nullable=True)

    # Many files → one folder
    folder = relationship("Folder", back_populates="files")
