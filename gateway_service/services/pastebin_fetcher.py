"""
Pastebin Fetcher
Relays a single raw paste as text
"""

import asyncio
import re
from typing import Optional

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

PASTE_ID_PATTERN = re.compile(r"[A-Za-z0-9]+")


def is_valid_paste_id(paste_id: Optional[str]) -> bool:
    return bool(paste_id) and PASTE_ID_PATTERN.fullmatch(paste_id) is not None


class PastebinFetcher:
    """Fetches https://pastebin.com/raw/<id>; the payload is never inspected"""

    def __init__(
        self,
        config: GatewayConfig,
        client: httpx.AsyncClient,
        events: Optional[EventSink] = None,
    ):
        self.config = config
        self.client = client
        self.events = events or get_event_sink("gateway_service.pastebin")

    def build_url(self, paste_id: str) -> str:
        return f"{self.config.pastebin_base_url}/{paste_id}"

    async def fetch(self, paste_id: Optional[str]) -> GatewayResult:
        if not is_valid_paste_id(paste_id):
            return GatewayResult.failure(Outcome.VALIDATION_ERROR, 400, "Invalid Pastebin ID")

        url = self.build_url(paste_id)
        try:
            response = await asyncio.wait_for(
                self.client.get(url, headers={"Accept": "text/plain"}),
                timeout=self.config.upstream_timeout_seconds,
            )

            if not response.is_success:
                self.events.error("pastebin.upstream_error", paste_id=paste_id, status=response.status_code)
                return GatewayResult.failure(
                    Outcome.UPSTREAM_ERROR,
                    502,
                    f"Fetch failed: {response.status_code} {response.text}",
                )

            return GatewayResult.success(ProxyResponse(
                status=200,
                kind=ContentKind.TEXT,
                body=response.text,
                headers=dict(TEXT_PLAIN_HEADERS),
            ))

        except (asyncio.TimeoutError, httpx.TimeoutException):
            self.events.error("pastebin.timeout", paste_id=paste_id)
            return GatewayResult.failure(Outcome.TIMEOUT_ERROR, 500, "Request timed out")
        except Exception as e:
            self.events.error("pastebin.exception", paste_id=paste_id, error=str(e))
            return GatewayResult.failure(Outcome.INTERNAL_ERROR, 500, str(e) or "Proxy error")
