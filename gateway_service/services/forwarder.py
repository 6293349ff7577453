"""
Request Forwarder
Reverse proxy from the dashboard's /api prefix onto the backend API
"""

import asyncio
from typing import Dict, Optional, Union

import httpx

from gateway_service.models.proxy import (
    BODY_METHODS,
    ContentKind,
    GatewayResult,
    Outcome,
    ProxyRequest,
    ProxyResponse,
)
from gateway_service.utils.config import GatewayConfig
from gateway_service.utils.content_types import classify_request_body, classify_response_body
from gateway_service.utils.logger import EventSink, get_event_sink

FORWARD_FAILED_MESSAGE = "Failed to proxy request to backend"
ERROR_PREVIEW_CHARS = 200


def describe_exception(exc: BaseException) -> str:
    """String rendering of an exception for the error envelope details"""
    message = str(exc)
    if isinstance(exc, asyncio.TimeoutError) and not message:
        message = "Request timed out"
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


class RequestForwarder:
    """
    Forwards dashboard API calls to the backend service.

    Every forwarded request carries ``Authorization: Bearer <token>``; the
    inbound content-type drives how the body is read, and the upstream
    status plus content-type drive how the response is relayed.
    """

    def __init__(
        self,
        config: GatewayConfig,
        client: httpx.AsyncClient,
        events: Optional[EventSink] = None,
    ):
        self.config = config
        self.client = client
        self.events = events or get_event_sink()

    def build_url(self, request: ProxyRequest) -> str:
        """Backend URL for a proxied request, query string appended verbatim"""
        return f"{self.config.backend_api_url}/api{request.api_path}{request.query}"

    def build_headers(self, request: ProxyRequest) -> Dict[str, str]:
        # Header values may not end in whitespace; an empty token is sent as "Bearer"
        headers = {"Authorization": f"Bearer {self.config.api_token}".rstrip()}
        if request.content_type:
            headers["Content-Type"] = request.content_type
        return headers

    def build_body(self, request: ProxyRequest) -> Optional[Union[bytes, str]]:
        """Body to forward, or None when the method carries none or it is empty"""
        if request.method not in BODY_METHODS or not request.body:
            return None

        if classify_request_body(request.content_type) == ContentKind.BINARY:
            return request.body

        text = request.body.decode("utf-8", errors="replace")
        return text or None

    async def forward(self, request: ProxyRequest) -> GatewayResult:
        """Forward one request and classify the backend response"""
        url = self.build_url(request)
        self.events.info(
            "proxy.request",
            method=request.method,
            path=list(request.path_segments),
            api_path=request.api_path,
            backend_url=url,
        )

        try:
            response = await asyncio.wait_for(
                self.client.request(
                    request.method,
                    url,
                    headers=self.build_headers(request),
                    content=self.build_body(request),
                ),
                timeout=self.config.upstream_timeout_seconds,
            )

            content_type = response.headers.get("content-type")
            self.events.info(
                "proxy.response",
                method=request.method,
                path=request.api_path,
                status=response.status_code,
                content_type=content_type,
            )
            return self.relay(response, content_type)

        except Exception as e:
            self.events.error("proxy.exception", error=str(e), error_type=type(e).__name__)
            outcome = (
                Outcome.TIMEOUT_ERROR
                if isinstance(e, (asyncio.TimeoutError, httpx.TimeoutException))
                else Outcome.INTERNAL_ERROR
            )
            return GatewayResult.failure(
                outcome,
                status=500,
                message=FORWARD_FAILED_MESSAGE,
                details=describe_exception(e),
            )

    def relay(self, response: httpx.Response, content_type: Optional[str]) -> GatewayResult:
        """Turn the backend response into the response sent to the browser"""
        if not response.is_success:
            text = response.text
            self.events.error("proxy.error_response", body=text[:ERROR_PREVIEW_CHARS])
            return GatewayResult.relayed(ProxyResponse(
                status=response.status_code,
                kind=ContentKind.TEXT,
                body=text,
                headers={"Content-Type": content_type or "text/plain"},
            ))

        kind = classify_response_body(content_type)

        if kind == ContentKind.JSON:
            return GatewayResult.success(ProxyResponse(
                status=response.status_code,
                kind=ContentKind.JSON,
                body=response.json(),
            ))

        if kind == ContentKind.BINARY:
            data = response.content
            self.events.info("proxy.binary_response", size=len(data))
            return GatewayResult.success(ProxyResponse(
                status=response.status_code,
                kind=ContentKind.BINARY,
                body=data,
                headers={
                    "Content-Type": content_type or "application/octet-stream",
                    "Content-Disposition": response.headers.get("content-disposition") or "attachment",
                },
            ))

        text = response.text
        self.events.info("proxy.text_response", length=len(text))
        return GatewayResult.success(ProxyResponse(
            status=response.status_code,
            kind=ContentKind.TEXT,
            body=text,
            headers={"Content-Type": content_type or "text/plain"},
        ))
