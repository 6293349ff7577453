"""
Gateway Service - Main Application
Forwards dashboard requests to the backend API and external resources
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gateway_service import __version__
from gateway_service.models.proxy import ErrorEnvelope
from gateway_service.routes import fetch, health, proxy
from gateway_service.services import PastebinFetcher, RawFetcher, RequestForwarder
from gateway_service.utils.config import GatewayConfig, get_gateway_config
from gateway_service.utils.http_client import build_http_client
from gateway_service.utils.logger import setup_logging

logger = structlog.get_logger(__name__)


def create_app(
    config: Optional[GatewayConfig] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        config: Gateway configuration; read from the environment when omitted
        http_client: Upstream client to use instead of the pooled default.
            An injected client is left open on shutdown.
    """
    config = config or get_gateway_config()
    setup_logging(config.logging_config_path, config.log_level, config.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        logger.info("Starting Gateway Service", backend=config.backend_api_url)
        config.log_config()

        client = http_client or build_http_client(config)
        app.state.config = config
        app.state.forwarder = RequestForwarder(config, client)
        app.state.raw_fetcher = RawFetcher(config, client)
        app.state.pastebin_fetcher = PastebinFetcher(config, client)

        yield

        if http_client is None:
            await client.aclose()
        logger.info("Gateway Service shutdown complete")

    app = FastAPI(
        title="Dashboard Gateway Service",
        description="Forwarding gateway between the dashboard, its backend API and external resources",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    # Available before startup so routes that only read config work without a lifespan
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests"""
        logger.info(
            "Request received",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else "unknown"
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code
        )

        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            url=str(request.url),
            exc_info=True
        )
        envelope = ErrorEnvelope(message="Internal server error", details=str(exc), status=500)
        return JSONResponse(status_code=envelope.status, content=envelope.to_body())

    # Specific /api routes must be registered before the wildcard
    app.include_router(health.router, tags=["Health"])
    app.include_router(fetch.router, prefix="/api", tags=["Fetch"])
    app.include_router(proxy.router, prefix="/api", tags=["Proxy"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": "gateway-service",
            "version": __version__,
            "status": "running",
            "docs": "/docs"
        }

    return app


def run():
    import uvicorn
    uvicorn.run(
        "gateway_service.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_level="info"
    )


if __name__ == "__main__":
    run()
