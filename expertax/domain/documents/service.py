"""Document service - client uploads, scoped to the caller's e-mail"""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import HTTPException

from ...config import MAX_UPLOAD_BYTES
from ...models import DOCUMENT_TYPES, Document
from ...security_utils import sanitize_filename
from ...storage import Storage
from .file_store import LocalFileStore
from .schemas import ALLOWED_MIME_TYPES

logger = logging.getLogger(__name__)

NOT_FOUND = "Document not found"


class DocumentService:
    def __init__(self, storage: Storage, files: LocalFileStore, max_bytes: int = MAX_UPLOAD_BYTES):
        self.storage = storage
        self.files = files
        self.max_bytes = max_bytes

    def upload(
        self,
        owner_email: str,
        filename: Optional[str],
        content_type: Optional[str],
        contents: bytes,
        document_type: Optional[str],
    ) -> Document:
        """Validate and store one file for the authenticated client"""
        if not document_type or document_type not in DOCUMENT_TYPES:
            raise HTTPException(status_code=400, detail="Invalid or missing document type")

        if content_type not in ALLOWED_MIME_TYPES:
            raise HTTPException(
                status_code=400,
                detail="Invalid file type. Only PDF, images, and Office documents are allowed.",
            )

        if len(contents) > self.max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File size exceeds {self.max_bytes // (1024 * 1024)}MB limit. "
                f"Your file is {len(contents) / (1024 * 1024):.2f}MB.",
            )

        original_name = sanitize_filename(filename or "document")
        extension = os.path.splitext(original_name)[1].lower() or ALLOWED_MIME_TYPES[content_type]
        key = self.files.save(contents, extension)

        document = self.storage.create_document(
            client_email=owner_email,
            file_name=original_name,
            file_url=key,
            file_size=len(contents),
            document_type=document_type,
            status="uploaded",
        )
        logger.info(f"📤 Document {document.id} ({document_type}) uploaded by {owner_email}")
        return document

    def list_for_client(self, owner_email: str) -> list[Document]:
        return self.storage.get_documents_by_client(owner_email)

    def get_owned(self, document_id: str, owner_email: str) -> Document:
        """Fetch a document the caller owns; anything else is indistinguishable from missing"""
        document = self.storage.get_document(document_id)
        if not document or document.client_email != owner_email:
            if document:
                logger.warning(f"🚫 {owner_email} requested document {document_id} they do not own")
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return document

    def file_path(self, document: Document) -> Path:
        path = self.files.path_for(document.file_url)
        if not path:
            logger.error(f"❌ File for document {document.id} is missing from storage")
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return path

    def update_status(self, document_id: str, status: str, owner_email: str) -> Document:
        self.get_owned(document_id, owner_email)
        document = self.storage.update_document_status(document_id, status)
        if not document:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return document
