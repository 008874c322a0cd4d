"""
Prometheus metrics endpoint and request counter
"""
from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest


router = APIRouter(tags=["metrics"])

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status"],
)


async def count_requests(request: Request, call_next):
    """HTTP middleware: count every finished request by method, path and status"""
    response = await call_next(request)
    HTTP_REQUESTS.labels(
        method=request.method,
        path=request.url.path,
        status=str(response.status_code),
    ).inc()
    return response


@router.get("/api/metrics")
async def metrics():
    """Metrics in the Prometheus text exposition format"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
