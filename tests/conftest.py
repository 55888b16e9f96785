"""Shared fixtures: isolated fetcher home and an in-memory retriever."""

import pytest

from urlfetch.config import Settings
from urlfetch.models import RetrievedPayload


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    """Point the fetcher home (logs, config.yaml) at a temporary directory."""
    home = tmp_path / "urlfetch_home"
    monkeypatch.setenv("URLFETCH_HOME", str(home))
    monkeypatch.delenv("URLFETCH_CONFIG", raising=False)
    for name in ("DEBUG", "STRICT_XML", "HISTORY_SIZE", "USER_AGENT", "LOG_RETENTION_DAYS"):
        monkeypatch.delenv(f"URLFETCH_{name}", raising=False)
    return home


class FakeRetriever:
    """Serves canned payloads by URL, or raises a canned error."""

    def __init__(self, payloads=None, error=None, settings=None):
        self.settings = settings or Settings()
        self.payloads = payloads or {}
        self.error = error
        self.calls = []
        self.closed = False

    async def retrieve(self, url, options=None):
        self.calls.append((url, options))
        if self.error is not None:
            raise self.error
        return self.payloads[url]

    async def aclose(self):
        self.closed = True


@pytest.fixture
def make_payload():
    """Build a RetrievedPayload with sensible defaults."""

    def _make(url, text, media_type="", method="http", screenshot=None):
        return RetrievedPayload(
            text=text,
            declared_media_type=media_type,
            url=url,
            screenshot=screenshot,
            method=method,
        )

    return _make


@pytest.fixture
def fake_retriever():
    """Factory for FakeRetriever instances."""
    return FakeRetriever
