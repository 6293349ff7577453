"""
External fetch routes
GET-only endpoints relaying third-party resources as text
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from gateway_service.models.proxy import ErrorEnvelope
from gateway_service.routes.dependencies import get_pastebin_fetcher, get_raw_fetcher
from gateway_service.services import PastebinFetcher, RawFetcher
from gateway_service.utils.responses import render_result

router = APIRouter()

# Claimed here so they answer 405 instead of reaching the backend wildcard
REJECTED_METHODS = ["POST", "PUT", "DELETE", "PATCH"]


def method_not_allowed() -> JSONResponse:
    envelope = ErrorEnvelope(message="Method Not Allowed", status=405)
    return JSONResponse(
        content=envelope.to_body(),
        status_code=envelope.status,
        headers={"Allow": "GET"},
    )


@router.get("/fetch-raw")
async def fetch_raw(
    url: Optional[str] = Query(None, description="http/https URL to fetch"),
    fetcher: RawFetcher = Depends(get_raw_fetcher),
):
    """Fetch an arbitrary URL and return its body as plain text"""
    result = await fetcher.fetch(url)
    return render_result(result)


@router.api_route("/fetch-raw", methods=REJECTED_METHODS, include_in_schema=False)
async def fetch_raw_method_not_allowed():
    return method_not_allowed()


@router.get("/pastebin/{paste_id}")
async def fetch_pastebin(
    paste_id: str,
    fetcher: PastebinFetcher = Depends(get_pastebin_fetcher),
):
    """Relay a raw paste as plain text"""
    result = await fetcher.fetch(paste_id)
    return render_result(result)


@router.api_route("/pastebin/{paste_id}", methods=REJECTED_METHODS, include_in_schema=False)
async def fetch_pastebin_method_not_allowed(paste_id: str):
    return method_not_allowed()
