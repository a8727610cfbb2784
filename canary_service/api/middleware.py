from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from fastapi.routing import APIRoute

log = structlog.get_logger()


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = ""
        for name, value in scope.get("headers", []):
            if name == b"x-request-id":
                request_id = value.decode("latin-1")
                break
        request_id = request_id or uuid.uuid4().hex
        scope.setdefault("state", {})
        scope["state"]["request_id"] = request_id

        start = time.perf_counter()
        status = 500

        async def send_wrapper(message):
            nonlocal status
            if message.get("type") == "http.response.start":
                status = message["status"]
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode("latin-1")))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            log.info(
                "request_completed",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                status=status,
                duration_ms=dur_ms,
                request_id=request_id,
            )


class CountedRoute(APIRoute):
    """Route that bumps the request counter once its handler has finished.

    The status label is always "200", even when the handler fails.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def counted_handler(request: Request) -> Response:
            try:
                return await handler(request)
            finally:
                request.app.state.metrics.observe_request(request.method, request.url.path, "200")

        return counted_handler
