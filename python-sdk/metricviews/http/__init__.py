"""HTTP namespace initialization."""

from metricviews.http.middleware import HTTPMetricsMiddleware, route_template
from metricviews.http.views import HTTP_NAMESPACE, HTTPViews, register_http_views

__all__ = ["HTTP_NAMESPACE", "HTTPViews", "HTTPMetricsMiddleware", "register_http_views", "route_template"]
