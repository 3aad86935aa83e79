"""
Photo model for storing uploaded photo metadata.
The image file itself lives in the upload directory.
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from album_server.database import Base


class Photo(Base):
    """
    Photo model.

    ``album_id`` is a plain indexed column: uploads to an unknown album are
    accepted, and photos are removed together with their album by the
    album service rather than by the database.
    """

    __tablename__ = "photos"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    album_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # 클라이언트가 보낸 원본 파일명
    title: Mapped[str] = mapped_column(String, nullable=False, default="")

    # 정적 업로드 경로 기준 상대 URL (예: /uploads/1_beach.jpg)
    url: Mapped[str] = mapped_column(String, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, album_id={self.album_id}, url={self.url})>"
