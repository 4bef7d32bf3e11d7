"""Document upload and management endpoints"""

import mimetypes
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from fieldbook.api.dependencies import get_media_service
from fieldbook.models.document import DocumentType
from fieldbook.schemas.photo import DocumentResponse, DocumentUpdate
from fieldbook.services.exceptions import NotFoundError
from fieldbook.services.media_service import MediaService

router = APIRouter(prefix="/api", tags=["Documents"])


@router.get(
    "/projects/{project_id}/documents",
    response_model=List[DocumentResponse],
    status_code=status.HTTP_200_OK,
)
def get_project_documents(project_id: str, service: MediaService = Depends(get_media_service)):
    """Get the documents of a project, most recently uploaded first"""
    return service.list_documents(project_id)


@router.post(
    "/projects/{project_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    project_id: str,
    document: UploadFile = File(..., description="Document file"),
    type: Optional[DocumentType] = Form(None, description="Document type; defaults to other"),
    service: MediaService = Depends(get_media_service),
):
    """Upload a document to a project"""
    content = await document.read()
    return await run_in_threadpool(
        service.upload_document,
        project_id=project_id,
        content=content,
        filename=document.filename,
        content_type=document.content_type,
        document_type=type.value if type else None,
    )


@router.get("/documents/{document_id}", response_model=DocumentResponse, status_code=status.HTTP_200_OK)
def get_document(document_id: str, service: MediaService = Depends(get_media_service)):
    """Get document details"""
    return service.get_document(document_id)


@router.get("/documents/{document_id}/file", status_code=status.HTTP_200_OK)
def download_document(document_id: str, service: MediaService = Depends(get_media_service)):
    """Get the stored document bytes under its original name"""
    document, content = service.read_document(document_id)
    media_type = mimetypes.guess_type(document.original_name)[0] or "application/octet-stream"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(document.original_name)}"},
    )


@router.patch("/documents/{document_id}", response_model=DocumentResponse, status_code=status.HTTP_200_OK)
def update_document(
    document_id: str,
    document_update: DocumentUpdate,
    service: MediaService = Depends(get_media_service),
):
    """Rename a document or change its type"""
    return service.update_document(document_id, document_update)


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: str, service: MediaService = Depends(get_media_service)):
    """Delete a document record and its stored file"""
    if not service.delete_document(document_id):
        raise NotFoundError("Document", document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
