"""Retrieval primitives: plain HTTP and headless browser."""

from urlfetch.primitives.browser import BrowserSession
from urlfetch.primitives.http_client import HttpClient

__all__ = [
    "BrowserSession",
    "HttpClient",
]
