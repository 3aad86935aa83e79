"""
Albums router for album management.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, status

from album_server.dependencies import get_album_service
from album_server.exceptions import AlbumNotFoundError
from album_server.schemas.album import (
    AlbumPayload,
    AlbumResponse,
    ErrorResponse,
    MessageResponse,
    parse_album_payload,
)
from album_server.services.album import AlbumService
from album_server.utils.params import parse_id
from album_server.utils.prometheus_metrics import album_operations_total

router = APIRouter(prefix="/albums", tags=["Albums"])

# 요청 본문은 parse_album_payload로 직접 바인딩 (404를 400보다 먼저 판정하기 위함)
# 아래 스키마는 OpenAPI 문서용
_ALBUM_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": AlbumPayload.model_json_schema()}},
    }
}

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=List[AlbumResponse],
    summary="List albums",
)
async def list_albums(
    album_service: AlbumService = Depends(get_album_service),
) -> List[AlbumResponse]:
    """
    Get all albums, ordered by id. An empty store returns an empty list.
    """
    albums = await album_service.list_albums()
    return [AlbumResponse.model_validate(album) for album in albums]


@router.get(
    "/{album_id}",
    response_model=AlbumResponse,
    responses=_NOT_FOUND,
    summary="Get album",
)
async def get_album(
    album_id: str,
    album_service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    """
    Get a specific album.

    - **album_id**: ID of the album; a non-numeric id is reported as not found
    """
    album = await album_service.get_album(parse_id(album_id))
    return AlbumResponse.model_validate(album)


@router.post(
    "",
    response_model=AlbumResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    openapi_extra=_ALBUM_BODY,
    summary="Create a new album",
)
async def create_album(
    request: Request,
    album_service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    """
    Create a new album.

    - **title**: Album title (any string, defaults to empty)

    The id is assigned by the server; an `id` in the body is ignored.
    """
    payload = parse_album_payload(await request.body())
    try:
        album = await album_service.create_album(payload)
    except Exception:
        album_operations_total.labels(operation="create", result="failure").inc()
        raise

    album_operations_total.labels(operation="create", result="success").inc()
    return AlbumResponse.model_validate(album)


@router.put(
    "/{album_id}",
    response_model=AlbumResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    openapi_extra=_ALBUM_BODY,
    summary="Update album",
)
async def update_album(
    album_id: str,
    request: Request,
    album_service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    """
    Replace an album's title.

    - **album_id**: ID of the album to update
    - **title**: New title

    The album is looked up before the body is read: a missing album is a
    404 whatever the body contains.
    """
    try:
        album = await album_service.get_album(parse_id(album_id))
    except AlbumNotFoundError:
        album_operations_total.labels(operation="update", result="not_found").inc()
        raise

    payload = parse_album_payload(await request.body())
    try:
        updated = await album_service.update_album(album, payload)
    except Exception:
        album_operations_total.labels(operation="update", result="failure").inc()
        raise

    album_operations_total.labels(operation="update", result="success").inc()
    return AlbumResponse.model_validate(updated)


@router.delete(
    "/{album_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete album",
)
async def delete_album(
    album_id: str,
    album_service: AlbumService = Depends(get_album_service),
) -> MessageResponse:
    """
    Delete an album together with all of its photo records.

    - **album_id**: ID of the album to delete

    Note: photo records of the id are deleted even when the album does not
    exist. Uploaded files stay in the upload directory.
    """
    try:
        await album_service.delete_album(parse_id(album_id))
    except AlbumNotFoundError:
        album_operations_total.labels(operation="delete", result="not_found").inc()
        raise
    except Exception:
        album_operations_total.labels(operation="delete", result="failure").inc()
        raise

    album_operations_total.labels(operation="delete", result="success").inc()
    return MessageResponse(message="Album deleted")
