"""
Photo-related Pydantic schemas for response serialization.
"""
from pydantic import BaseModel, ConfigDict, Field


class PhotoResponse(BaseModel):
    """
    Schema for photo response.
    ``album_id`` is serialized as ``albumId``.
    """

    id: int
    album_id: int = Field(..., serialization_alias="albumId")
    title: str
    url: str = Field(..., description="Relative URL under the uploads prefix")

    model_config = ConfigDict(from_attributes=True)
