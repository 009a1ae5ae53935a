from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import re
import time

# Metrics definitions
HTTP_REQUESTS_TOTAL = Counter(
    "shortlinks_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "shortlinks_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

LINK_ID_PATH = re.compile(r"^/api/admin/links/\d+$")
CODE_PATH = re.compile(r"^/\w{4,32}$", re.ASCII)
KNOWN_PATHS = {"/", "/api/health", "/api/create", "/api/admin/links", "/api/admin/metrics"}


def metric_path(path: str) -> str:
    """Collapse ids and short codes so label cardinality stays bounded."""
    if path in KNOWN_PATHS:
        return path
    if LINK_ID_PATH.match(path):
        return "/api/admin/links/{id}"
    if CODE_PATH.match(path):
        return "/{code}"
    return "other"


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        method = request.method
        path = metric_path(request.url.path)

        HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=str(response.status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=path).observe(process_time)

        return response

def metrics_endpoint(request: Request):
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
