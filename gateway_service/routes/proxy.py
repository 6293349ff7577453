"""
Backend proxy routes
Wildcard /api routes forwarded to the backend API
"""

from typing import Tuple
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Request

from gateway_service.models.proxy import BODY_METHODS, ProxyRequest
from gateway_service.routes.dependencies import get_forwarder
from gateway_service.services import RequestForwarder
from gateway_service.utils.responses import render_result

router = APIRouter()

PROXY_PREFIX = "/api"
PROXY_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]


def split_path_segments(request: Request) -> Tuple[str, ...]:
    """
    Path segments below /api, each decoded on its own.

    Segments come from the raw request path so an escaped "/", "?" or "#"
    stays inside its segment instead of changing the URL structure.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        path = request.scope["path"]

    if path.startswith(PROXY_PREFIX):
        path = path[len(PROXY_PREFIX):]
    return tuple(unquote(segment) for segment in path.split("/") if segment)


async def build_proxy_request(request: Request) -> ProxyRequest:
    """Capture the inbound request as a ProxyRequest"""
    # Raw query string, forwarded exactly as received
    query = request.scope.get("query_string", b"").decode("latin-1")
    body = await request.body() if request.method in BODY_METHODS else None
    return ProxyRequest(
        method=request.method,
        path_segments=split_path_segments(request),
        query=f"?{query}" if query else "",
        content_type=request.headers.get("content-type"),
        body=body,
    )


@router.api_route("", methods=PROXY_METHODS, include_in_schema=False)
async def proxy_root(
    request: Request,
    forwarder: RequestForwarder = Depends(get_forwarder),
):
    """Forward a request for the bare /api prefix"""
    result = await forwarder.forward(await build_proxy_request(request))
    return render_result(result)


@router.api_route("/{path:path}", methods=PROXY_METHODS)
async def proxy(
    request: Request,
    forwarder: RequestForwarder = Depends(get_forwarder),
):
    """Forward any /api request to the backend"""
    result = await forwarder.forward(await build_proxy_request(request))
    return render_result(result)
