"""Photo upload and management endpoints"""

import mimetypes
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from fieldbook.api.dependencies import get_media_service
from fieldbook.schemas.photo import PhotoResponse, PhotoUpdate
from fieldbook.services.exceptions import NotFoundError
from fieldbook.services.media_service import MediaService

router = APIRouter(prefix="/api", tags=["Photos"])


@router.get(
    "/projects/{project_id}/photos",
    response_model=List[PhotoResponse],
    status_code=status.HTTP_200_OK,
)
def get_project_photos(project_id: str, service: MediaService = Depends(get_media_service)):
    """Get the photos of a project, most recently taken first"""
    return service.list_photos(project_id)


@router.post(
    "/projects/{project_id}/photos",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_photo(
    project_id: str,
    photo: UploadFile = File(..., description="Image file"),
    description: Optional[str] = Form(None),
    latitude: Optional[float] = Form(None),
    longitude: Optional[float] = Form(None),
    taken_at: Optional[datetime] = Form(None),
    service: MediaService = Depends(get_media_service),
):
    """
    Upload a photo to a project

    The image is stored before its record is created. Capture time and GPS
    position fall back to the image EXIF when not given.
    """
    content = await photo.read()
    return await run_in_threadpool(
        service.upload_photo,
        project_id=project_id,
        content=content,
        filename=photo.filename,
        content_type=photo.content_type,
        description=description,
        latitude=latitude,
        longitude=longitude,
        taken_at=taken_at,
    )


@router.get("/photos/{photo_id}", response_model=PhotoResponse, status_code=status.HTTP_200_OK)
def get_photo(photo_id: str, service: MediaService = Depends(get_media_service)):
    """Get photo details"""
    return service.get_photo(photo_id)


@router.get("/photos/{photo_id}/file", status_code=status.HTTP_200_OK)
def download_photo(photo_id: str, service: MediaService = Depends(get_media_service)):
    """Get the stored image bytes"""
    photo, content = service.read_photo(photo_id)
    media_type = mimetypes.guess_type(photo.filename)[0] or "application/octet-stream"
    return Response(content=content, media_type=media_type)


@router.patch("/photos/{photo_id}", response_model=PhotoResponse, status_code=status.HTTP_200_OK)
def update_photo(
    photo_id: str,
    photo_update: PhotoUpdate,
    service: MediaService = Depends(get_media_service),
):
    """Update photo description, position or capture time"""
    return service.update_photo(photo_id, photo_update)


@router.delete("/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(photo_id: str, service: MediaService = Depends(get_media_service)):
    """Delete a photo record and its stored image"""
    if not service.delete_photo(photo_id):
        raise NotFoundError("Photo", photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
