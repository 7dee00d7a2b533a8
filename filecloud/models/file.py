# filecloud/models/file.py
from sqlalchemy import Column, Integer, String, LargeBinary, DateTime
from datetime import datetime

from filecloud.models.database import Base

class StoredFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    owner = Column(String(255), nullable=False, index=True)      # login of the uploader
    filename = Column(String(255), nullable=False, index=True)   # not unique per owner
    size = Column(Integer, nullable=False)                       # Size in bytes
    hash = Column(String(64), nullable=False)                    # sha256 hex of data
    data = Column(LargeBinary, nullable=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<StoredFile {self.owner}/{self.filename}>"
