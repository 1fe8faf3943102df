import asyncio
import json
from datetime import datetime, timezone

import pytest
from aiohttp import web

from goodnews.config import Settings
from goodnews.core.article import Article


@pytest.fixture
def now():
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_article():
    def _make(**overrides):
        fields = dict(
            title="Title",
            description="Description",
            url="https://example.com/a",
            source="Example",
            published_at="2024-06-15T11:00:00Z",
        )
        fields.update(overrides)
        return Article(**fields)
    return _make


class FakeNewsServer:
    """
    In-process HTTP server that records requests and replies with a
    configurable body and status.
    """
    def __init__(self):
        self.requests = []
        self.body = b'{"status": "ok", "articles": []}'
        self.status = 200
        self.delay = 0.0

    def reply(self, payload=None, status=200, text=None, raw=None):
        if raw is not None:
            self.body = raw
        else:
            self.body = (text if text is not None else json.dumps(payload)).encode("utf-8")
        self.status = status

    async def handle(self, request):
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(
            body=self.body, status=self.status, content_type="application/json", charset="utf-8"
        )


@pytest.fixture
async def news_server(aiohttp_server):
    fake = FakeNewsServer()
    app = web.Application()
    app.router.add_get("/{tail:.*}", fake.handle)
    fake.server = await aiohttp_server(app)
    return fake


@pytest.fixture
def proxy_settings(news_server):
    return Settings(proxy_url=str(news_server.server.make_url("/api/news")))
