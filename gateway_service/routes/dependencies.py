"""
Route dependencies
Handlers are built once in the application lifespan and read from app.state
"""

from fastapi import Request

from gateway_service.services import PastebinFetcher, RawFetcher, RequestForwarder


def get_forwarder(request: Request) -> RequestForwarder:
    return request.app.state.forwarder


def get_raw_fetcher(request: Request) -> RawFetcher:
    return request.app.state.raw_fetcher


def get_pastebin_fetcher(request: Request) -> PastebinFetcher:
    return request.app.state.pastebin_fetcher
