"""Document router - client portal uploads and proxied downloads"""

import logging
import mimetypes
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from ...auth import Principal, require_principal
from ...models import Document
from ...storage import Storage, get_storage
from .file_store import LocalFileStore, get_file_store
from .schemas import DocumentResponse, DocumentStatusUpdate, DocumentUploaded
from .service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["Documents"])


def get_document_service(
    storage: Storage = Depends(get_storage),
    files: LocalFileStore = Depends(get_file_store),
) -> DocumentService:
    """Dependency injection for DocumentService"""
    return DocumentService(storage, files)


def _to_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        clientEmail=document.client_email,
        fileName=document.file_name,
        fileUrl=f"/api/documents/{document.id}/download",
        fileSize=document.file_size,
        documentType=document.document_type,
        status=document.status,
        uploadedAt=document.uploaded_at,
    )


@router.post("", response_model=DocumentUploaded)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    documentType: Optional[str] = Form(None),
    principal: Principal = Depends(require_principal),
    service: DocumentService = Depends(get_document_service),
):
    """Upload one tax document for the signed-in client"""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    contents = await file.read()
    document = service.upload(
        owner_email=principal.email,
        filename=file.filename,
        content_type=file.content_type,
        contents=contents,
        document_type=documentType,
    )
    return DocumentUploaded(document=_to_response(document))


@router.get("", response_model=list[DocumentResponse])
async def get_documents(
    principal: Principal = Depends(require_principal),
    service: DocumentService = Depends(get_document_service),
):
    """The caller's own documents, newest first"""
    return [_to_response(d) for d in service.list_for_client(principal.email)]


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    principal: Principal = Depends(require_principal),
    service: DocumentService = Depends(get_document_service),
):
    document = service.get_owned(document_id, principal.email)
    path = service.file_path(document)
    media_type = mimetypes.guess_type(document.file_name)[0] or "application/octet-stream"
    return FileResponse(path, filename=document.file_name, media_type=media_type)


@router.patch("/{document_id}/status", response_model=DocumentResponse)
async def update_document_status(
    document_id: str,
    data: DocumentStatusUpdate,
    principal: Principal = Depends(require_principal),
    service: DocumentService = Depends(get_document_service),
):
    document = service.update_status(document_id, data.status, principal.email)
    return _to_response(document)
