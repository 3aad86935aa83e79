"""
Album model: a named collection of photos.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from album_server.database import Base


class Album(Base):
    """Album model. Photos reference it by ``album_id`` without a foreign key."""

    __tablename__ = "albums"
    # AUTOINCREMENT: 삭제된 id는 재사용되지 않음
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, title={self.title})>"
