# storagehub/models/folder.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storagehub.models.database import Base


class Folder(Base):
    __tablename__ = "folders"
    # one folder per (owner, name); concurrent creators race on this constraint
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_folders_owner_name"),)

    folder_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    owner_id = Column(String, nullable=False, index=True)
    path = Column(String, nullable=False)            # "<owner_id>/<name>", prefix of every key inside
    created_at = Column(DateTime, default=datetime.utcnow)

    # One folder → many files
    files = relationship("FileMeta", back_populates="folder", passive_deletes="all")
