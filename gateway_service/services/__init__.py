from .forwarder import RequestForwarder
from .pastebin_fetcher import PastebinFetcher
from .raw_fetcher import RawFetcher

__all__ = [
    "RequestForwarder",
    "PastebinFetcher",
    "RawFetcher",
]
