"""
Python 로깅 설정.

원칙:
- INFO: 라이프사이클, 비즈니스 이벤트 (부트스트랩, 앨범 생성, 사진 업로드)
- WARNING: 클라이언트 오류 (4xx), 느린 요청/쿼리
- ERROR: 시스템 오류, 파일 저장 실패

로그 출력:
- stdout: 사람이 읽기 쉬운 텍스트
- stderr: ERROR 이상
- <log_dir>/*.log: NDJSON (log_dir 설정 시에만)

요청 처리 중 남기는 로그에는 Request ID가 포함됨.
"""
import contextvars
import json
import logging
import socket
import sys
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from album_server.config import Settings, get_settings

logger = logging.getLogger("album_server")

# ctx에 절대 포함하지 않는 민감 필드
_SENSITIVE_FIELDS = frozenset({"password", "token", "secret", "authorization"})

request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def _get_instance_ip(configured: Optional[str] = None) -> str:
    """Configured INSTANCE_IP, falling back to the hostname."""
    ip = (configured or "").strip()
    if ip:
        return ip
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def generate_request_id() -> str:
    """New short Request ID."""
    return uuid.uuid4().hex[:12]


def get_request_id() -> Optional[str]:
    """Current Request ID."""
    return request_id_var.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the Request ID, generating one when none is given."""
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


class FlushingRotatingFileHandler(RotatingFileHandler):
    """Flushes after every record so tailing collectors see complete lines."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


# LogRecord 기본 속성 (ctx에 복사하지 않음)
_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "asctime", "taskName",
    }
)


class JsonLinesFormatter(logging.Formatter):
    """
    NDJSON formatter.

    Output fields:
    - ts: UTC timestamp
    - level: log level
    - instance: instance identifier
    - rid: Request ID (when inside a request)
    - event: event type (lifecycle, bootstrap, request, album, photo, db)
    - msg: message
    - ctx: extra context (sensitive keys removed)
    - exc: formatted exception
    """

    def __init__(self, instance: Optional[str] = None):
        super().__init__()
        self.instance = _get_instance_ip(instance)

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        msecs = int(record.msecs) % 1000
        payload = {
            "ts": dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{msecs:03d}Z",
            "level": record.levelname,
            "instance": self.instance,
        }

        rid = get_request_id()
        if rid:
            payload["rid"] = rid

        if getattr(record, "event", None):
            payload["event"] = record.event

        payload["msg"] = record.getMessage()

        skip = _STANDARD_ATTRS | {"event", "instance"}
        extra_ctx = {
            k: v for k, v in record.__dict__.items()
            if k not in skip
            and k.lower() not in _SENSITIVE_FIELDS
            and v is not None
        }
        if extra_ctx:
            payload["ctx"] = extra_ctx

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure the root logger.

    - stdout: text format
    - stderr: ERROR and above
    - <log_dir>/app.log: INFO and above, NDJSON
    - <log_dir>/error.log: ERROR and above, NDJSON
    - third-party loggers (uvicorn, sqlalchemy, asyncio) raised to WARNING
    """
    settings = settings or get_settings()
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    root_logger.handlers.clear()

    text_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.INFO)
    stdout_handler.setFormatter(text_formatter)
    root_logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(text_formatter)
    root_logger.addHandler(stderr_handler)

    if settings.log_dir is not None:
        json_formatter = JsonLinesFormatter(instance=settings.instance_ip)
        try:
            settings.log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = FlushingRotatingFileHandler(
                settings.log_dir / "app.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(json_formatter)
            root_logger.addHandler(file_handler)

            error_handler = FlushingRotatingFileHandler(
                settings.log_dir / "error.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(json_formatter)
            root_logger.addHandler(error_handler)
        except OSError as e:
            root_logger.warning("File logging disabled: %s", e)

    for name in (
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "asyncio",
        "aiosqlite",
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


def _log(level: int, message: str, exc_info: bool = False, **extra: Any) -> None:
    logger.log(level, message, exc_info=exc_info, extra=extra)


def log_info(message: str, **extra: Any) -> None:
    """Log an info message with structured context."""
    _log(logging.INFO, message, **extra)


def log_warning(message: str, **extra: Any) -> None:
    """Log a warning message with structured context."""
    _log(logging.WARNING, message, **extra)


def log_error(message: str, exc_info: bool = False, **extra: Any) -> None:
    """Log an error message with structured context."""
    _log(logging.ERROR, message, exc_info=exc_info, **extra)
