"""ASGI middleware feeding the http namespace views."""

import re
import time

from metricviews.http.views import HTTPViews


# Path segments that identify a resource rather than a route
_ID_SEGMENT = re.compile(
    r"^(?:\d+|[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}|[0-9a-fA-F]{16,})$"
)
MAX_ROUTE_LENGTH = 50


def route_template(path: str) -> str:
    """Turn a request path into a low-cardinality route label.

    ``/orders/1234/items`` becomes ``/orders/:id/items``; anything still
    longer than ``MAX_ROUTE_LENGTH`` is cut and marked with ``...``.
    """
    route = "/".join(":id" if _ID_SEGMENT.match(segment) else segment for segment in path.split("/"))
    if len(route) > MAX_ROUTE_LENGTH:
        return route[:MAX_ROUTE_LENGTH] + "..."
    return route


def _content_length(headers) -> int:
    for name, value in headers:
        if name.lower() == b"content-length":
            try:
                return int(value.decode("ascii").strip())
            except (ValueError, UnicodeDecodeError):
                return 0
    return 0


class HTTPMetricsMiddleware:
    """ASGI middleware recording each HTTP request into an HTTPViews."""

    def __init__(self, app, service_name: str, views: HTTPViews):
        self.app = app
        self.service_name = service_name
        self.views = views

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        in_flight = self.views.in_flight(self.service_name)
        in_flight.inc()
        started = time.perf_counter()
        response = {"status": 500, "bytes": 0}  # 500 unless the app responds

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                response["status"] = message["status"]
            elif message["type"] == "http.response.body":
                response["bytes"] += len(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            self.views.record(
                service=self.service_name,
                method=scope.get("method", "GET"),
                route=route_template(scope.get("path", "/")),
                status=response["status"],
                duration=time.perf_counter() - started,
                request_size=_content_length(scope.get("headers", [])),
                response_size=response["bytes"],
            )
            in_flight.dec()
