"""
Album-related Pydantic schemas for request/response (de)serialization.
"""
from typing import Optional, Union

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from album_server.exceptions import BadRequestError


class AlbumPayload(BaseModel):
    """Request body for album creation and update. Unknown keys are ignored."""

    title: Optional[str] = ""

    @field_validator("title")
    @classmethod
    def null_title_to_empty(cls, v: Optional[str]) -> str:
        # {"title": null}는 title 생략과 동일하게 처리
        return "" if v is None else v


class AlbumResponse(BaseModel):
    """Schema for album response."""

    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain confirmation or not-found message."""

    message: str


class ErrorResponse(BaseModel):
    """Error detail for 400 and 500 responses."""

    error: str = Field(..., description="Human readable error detail")


def format_validation_error(exc: Union[ValidationError, RequestValidationError]) -> str:
    """Flatten pydantic/FastAPI validation errors into ``loc: msg; ...``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def parse_album_payload(raw: Union[bytes, str]) -> AlbumPayload:
    """
    Bind a raw JSON body to ``{title}``.

    A top-level `null` body binds to an empty payload.

    Raises:
        BadRequestError: body is not JSON, not an object, or title is not a string
    """
    if raw.strip() == (b"null" if isinstance(raw, bytes) else "null"):
        return AlbumPayload()
    try:
        return AlbumPayload.model_validate_json(raw)
    except ValidationError as e:
        raise BadRequestError(format_validation_error(e)) from e
