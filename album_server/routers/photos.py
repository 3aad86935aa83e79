"""
Photos router: photos scoped to an album.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status

from album_server.dependencies import get_photo_service
from album_server.exceptions import BadRequestError, UploadWriteError
from album_server.schemas.album import ErrorResponse
from album_server.schemas.photo import PhotoResponse
from album_server.services.photo import PhotoService
from album_server.utils.params import parse_id
from album_server.utils.prometheus_metrics import (
    photo_upload_file_size_bytes,
    photo_upload_total,
)

logger = logging.getLogger("album_server.photos")

router = APIRouter(prefix="/albums", tags=["Photos"])


@router.get(
    "/{album_id}/photos",
    response_model=List[PhotoResponse],
    summary="List album photos",
)
async def list_photos(
    album_id: str,
    photo_service: PhotoService = Depends(get_photo_service),
) -> List[PhotoResponse]:
    """
    Get all photos of an album, ordered by id.

    - **album_id**: ID of the album (non-numeric ids match album 0)

    The album is not required to exist; unknown albums return an empty list.
    """
    photos = await photo_service.list_album_photos(parse_id(album_id))
    return [PhotoResponse.model_validate(photo) for photo in photos]


@router.post(
    "/{album_id}/photos",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Upload a photo",
)
async def upload_photo(
    album_id: str,
    photo: Optional[UploadFile] = File(None, description="Photo file to upload"),
    photo_service: PhotoService = Depends(get_photo_service),
) -> PhotoResponse:
    """
    Upload a photo into an album.

    - **album_id**: ID of the album (not checked for existence)
    - **photo**: Multipart file field

    The file is stored as `<album_id>_<filename>` in the upload directory and
    served at `/uploads/<album_id>_<filename>`. Directory components of the
    client filename are dropped. A file with the same name is replaced.
    """
    # photo 필드 누락 또는 빈 파일명이면 400 (레코드 생성 안 함)
    if photo is None or not photo.filename:
        photo_upload_total.labels(result="rejected").inc()
        raise BadRequestError("Photo file is required")

    content = await photo.read()
    # 파일 저장 실패 시 레코드 없이 500 {"error": "Failed to save file"}
    try:
        created = await photo_service.upload_photo(
            album_id=parse_id(album_id),
            filename=photo.filename,
            file_content=content,
        )
    except UploadWriteError:
        photo_upload_total.labels(result="failure").inc()
        raise
    finally:
        await photo.close()

    photo_upload_total.labels(result="success").inc()
    photo_upload_file_size_bytes.observe(len(content))
    return PhotoResponse.model_validate(created)
