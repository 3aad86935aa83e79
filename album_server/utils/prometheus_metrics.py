"""
Prometheus metrics.

- FastAPI: request count, latency (Instrumentator)
- Identity: app_info
- Stability: exceptions_total, db_errors_total
- HA: ready gauge (1=up, 0=shutting down)
- Business: album operations, photo uploads and upload sizes
"""
import logging
import socket

from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from album_server.config import Settings

logger = logging.getLogger(__name__)

# --- Stability ---
exceptions_total = Counter(
    "album_server_exceptions_total",
    "Total unhandled exceptions",
    registry=REGISTRY,
)
db_errors_total = Counter(
    "album_server_db_errors_total",
    "Total database session/transaction errors",
    registry=REGISTRY,
)

# --- HA (Graceful Shutdown 시 0) ---
ready = Gauge(
    "album_server_ready",
    "Application ready (1=up, 0=shutting down)",
    registry=REGISTRY,
)

# --- Business ---
album_operations_total = Counter(
    "album_server_album_operations_total",
    "Total album operations",
    ["operation", "result"],  # operation: create | update | delete, result: success | not_found | failure
    registry=REGISTRY,
)

photo_upload_total = Counter(
    "album_server_photo_upload_total",
    "Total photo uploads",
    ["result"],  # success | rejected | failure
    registry=REGISTRY,
)

photo_upload_file_size_bytes = Histogram(
    "album_server_photo_upload_file_size_bytes",
    "Size of uploaded photo files in bytes",
    buckets=(
        10 * 1024,
        100 * 1024,
        512 * 1024,
        1024 * 1024,
        5 * 1024 * 1024,
        10 * 1024 * 1024,
        50 * 1024 * 1024,
    ),
    registry=REGISTRY,
)

app_info = Gauge(
    "album_server_app_info",
    "Application and node identity (labels only, value is 1)",
    ["node", "app", "version", "environment"],
    registry=REGISTRY,
)


def _node_identity(settings: Settings) -> str:
    """Node identifier: INSTANCE_IP setting or hostname."""
    if settings.instance_ip:
        return settings.instance_ip
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def setup_prometheus(app, settings: Settings) -> None:
    """
    Register Prometheus instrumentation.

    1. app_info identity labels.
    2. Instrumentator (FastAPI request metrics, exact status codes).
    3. /metrics endpoint for scraping.
    """
    app_info.labels(
        node=_node_identity(settings),
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
    ).set(1)

    Instrumentator(should_group_status_codes=False).instrument(app).expose(
        app, endpoint="/metrics"
    )
