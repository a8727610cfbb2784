from typing import Optional

import socket
import sys

import uvicorn
from fastapi import FastAPI

from ..config import AppSettings
from ..logging import init_logging
from ..services.identity import ServiceInfo
from ..services.metrics import RequestMetrics
from .middleware import RequestIDMiddleware
from .routes import health, home, metrics, version


def create_app(
    settings: Optional[AppSettings] = None,
    request_metrics: Optional[RequestMetrics] = None,
) -> FastAPI:
    settings = settings or AppSettings()
    init_logging(settings.log_level, settings.app_name)

    info = ServiceInfo()
    app = FastAPI(
        title=settings.app_name,
        version=info.version,
        openapi_tags=[
            {"name": "identity", "description": "Instance identity and version"},
            {"name": "health", "description": "Liveness and readiness probes"},
            {"name": "metrics", "description": "Prometheus exposition"},
        ],
    )

    app.include_router(metrics.router, tags=["metrics"])
    app.include_router(home.router, tags=["identity"])
    app.include_router(health.router, tags=["health"])
    app.include_router(version.router, tags=["identity"])
    app.add_middleware(RequestIDMiddleware)

    app.state.settings = settings
    app.state.service_info = info
    app.state.metrics = request_metrics if request_metrics is not None else RequestMetrics()

    return app


def bind_listener(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def _uvicorn_log_level(log_level: str) -> str:
    level = log_level.lower()
    return level if level in uvicorn.config.LOG_LEVELS else "info"


def main() -> None:
    settings = AppSettings()
    log = init_logging(settings.log_level, settings.app_name)

    log.info("starting_server", host=settings.host, port=settings.port)
    try:
        sock = bind_listener(settings.host, settings.port)
    except OSError as e:
        log.error("listener_bind_failed", host=settings.host, port=settings.port, error=str(e))
        sys.exit(1)

    # One registry for the whole process
    request_metrics = RequestMetrics()
    config = uvicorn.Config(
        create_app(settings, request_metrics),
        log_level=_uvicorn_log_level(settings.log_level),
    )
    uvicorn.Server(config).run(sockets=[sock])


if __name__ == "__main__":
    main()
