"""
Database configuration and session management.
Uses async SQLAlchemy over aiosqlite for non-blocking database operations.

로깅:
- SQL echo 비활성화 (로그 노이즈 방지)
- 느린 쿼리 (slow_query_threshold 이상) WARNING 로깅
- 세션 에러 로깅 및 db_errors_total 집계
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from album_server.exceptions import AlbumServerError
from album_server.utils.prometheus_metrics import db_errors_total

_logger = logging.getLogger("album_server.db")


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class Database:
    """
    Persistence handle: one async engine plus its session factory.

    Built once by the application factory and shared by every request
    through ``app.state``.
    """

    def __init__(self, database_url: str, slow_query_threshold: float = 1.0):
        self.database_url = database_url
        self.slow_query_threshold = slow_query_threshold
        # SQLite는 연결 풀 없음 (체크아웃마다 파일을 엶)
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=False,
            poolclass=NullPool,
        )
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._register_listeners()

    def _register_listeners(self) -> None:
        threshold = self.slow_query_threshold

        @event.listens_for(self.engine.sync_engine, "before_cursor_execute")
        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            conn.info.setdefault("query_start_time", []).append(time.perf_counter())

        @event.listens_for(self.engine.sync_engine, "after_cursor_execute")
        def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            start_times = conn.info.get("query_start_time")
            if start_times:
                elapsed = time.perf_counter() - start_times.pop()
                if elapsed >= threshold:
                    short_stmt = statement[:100] + "..." if len(statement) > 100 else statement
                    _logger.warning(
                        "Slow query",
                        extra={"event": "db", "ms": round(elapsed * 1000), "query": short_stmt},
                    )

    async def init_db(self) -> None:
        """Create the albums and photos tables if they do not exist."""
        # Base.metadata에 모델 등록
        import album_server.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises when the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close database connections properly."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scope: commit on success, rollback and re-raise on error.

        Usage:
            async with database.session() as session:
                result = await session.execute(query)
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except AlbumServerError:
                # 요청 단위 결과 (핸들러가 404/400/500으로 변환), DB 에러로 집계하지 않음
                await session.rollback()
                raise
            except Exception as e:
                db_errors_total.inc()
                _logger.error(
                    "DB error",
                    extra={
                        "event": "db",
                        "error_type": type(e).__name__,
                        "error": str(e)[:200],
                    },
                )
                await session.rollback()
                raise
