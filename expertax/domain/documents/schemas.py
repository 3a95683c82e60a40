"""Document domain schemas"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

DocumentStatus = Literal["uploaded", "processing", "reviewed"]

ALLOWED_MIME_TYPES = {
    "application/pdf": ".pdf",
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/vnd.ms-excel": ".xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
}


class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus


class DocumentResponse(BaseModel):
    id: str
    clientEmail: str
    fileName: str
    fileUrl: str  # download route, never the storage key
    fileSize: int
    documentType: str
    status: str
    uploadedAt: datetime


class DocumentUploaded(BaseModel):
    success: bool = True
    document: DocumentResponse
