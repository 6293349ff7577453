"""
Raw Fetcher
Fetches an arbitrary http/https URL and returns its body as text
"""

import asyncio
from typing import Optional, Union

import httpx

from gateway_service.models.proxy import (
    TEXT_PLAIN_HEADERS,
    ContentKind,
    GatewayResult,
    Outcome,
    ProxyResponse,
)
from gateway_service.utils.config import GatewayConfig
from gateway_service.utils.logger import EventSink, get_event_sink

ALLOWED_SCHEMES = ("http", "https")
UPSTREAM_PREVIEW_CHARS = 200


def parse_target_url(value: str) -> Optional[httpx.URL]:
    """Parse an absolute URL, or return None when it is not one"""
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None

    if not url.scheme:
        return None
    if url.scheme.lower() in ALLOWED_SCHEMES and not url.host:
        return None
    return url


class RawFetcher:
    """Bounded-deadline fetch of an externally supplied URL"""

    def __init__(
        self,
        config: GatewayConfig,
        client: httpx.AsyncClient,
        events: Optional[EventSink] = None,
    ):
        self.config = config
        self.client = client
        self.events = events or get_event_sink("gateway_service.fetch_raw")

    def validate(self, url_param: Optional[str]) -> Union[GatewayResult, httpx.URL]:
        if not url_param:
            return GatewayResult.failure(Outcome.VALIDATION_ERROR, 400, "Missing url parameter")

        target = parse_target_url(url_param)
        if target is None:
            return GatewayResult.failure(Outcome.VALIDATION_ERROR, 400, "Invalid URL")

        if target.scheme.lower() not in ALLOWED_SCHEMES:
            return GatewayResult.failure(
                Outcome.VALIDATION_ERROR, 400, "Only http/https URLs are allowed"
            )
        return target

    async def fetch(self, url_param: Optional[str]) -> GatewayResult:
        """Validate the ``url`` query parameter and fetch it"""
        target = self.validate(url_param)
        if isinstance(target, GatewayResult):
            return target

        try:
            response = await asyncio.wait_for(
                self.client.get(target, headers={"Accept": "text/plain,*/*;q=0.8"}),
                timeout=self.config.raw_fetch_timeout_seconds,
            )

            if not response.is_success:
                text = response.text
                self.events.error("fetch_raw.upstream_error", url=str(target), status=response.status_code)
                return GatewayResult.failure(
                    Outcome.UPSTREAM_ERROR,
                    502,
                    f"Upstream fetch failed: {response.status_code} {text[:UPSTREAM_PREVIEW_CHARS]}",
                )

            return GatewayResult.success(ProxyResponse(
                status=200,
                kind=ContentKind.TEXT,
                body=response.text,
                headers=dict(TEXT_PLAIN_HEADERS),
            ))

        except (asyncio.TimeoutError, httpx.TimeoutException):
            self.events.error("fetch_raw.timeout", url=str(target))
            return GatewayResult.failure(Outcome.TIMEOUT_ERROR, 500, "Request timed out")
        except Exception as e:
            self.events.error("fetch_raw.exception", url=str(target), error=str(e))
            return GatewayResult.failure(Outcome.INTERNAL_ERROR, 500, str(e) or "Proxy error")
