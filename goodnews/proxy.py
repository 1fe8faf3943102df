"""
Backend proxy for NewsAPI.

Holds the server-side credential so it never reaches the client, forwards
the query upstream and passes the upstream body and status back verbatim.
"""
import argparse
import logging
import os
import sys
from typing import Optional

import aiohttp
from aiohttp import web

from goodnews.config import get_config

logger = logging.getLogger(__name__)

UPSTREAM_KEY = web.AppKey("upstream_url", str)
API_KEY = web.AppKey("api_key", str)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)
CACHE_CONTROL_KEY = web.AppKey("cache_control", str)

CACHE_CONTROL = "s-maxage=60, stale-while-revalidate=300"


async def handle_news(request: web.Request) -> web.Response:
    """
    GET /api/news?country=&q=&pageSize=&from=&to=

    With ``q`` the upstream search endpoint is used, otherwise top headlines
    for ``country``.
    """
    try:
        api_key = request.app[API_KEY]
        if not api_key:
            return web.json_response({"error": "Server missing NEWSAPI_KEY"}, status=500)

        query = request.query
        q = query.get("q")
        endpoint = "everything" if q else "top-headlines"

        params = {}
        if q:
            params["q"] = q
        else:
            params["country"] = query.get("country") or "us"
        params["pageSize"] = query.get("pageSize") or "100"
        for bound in ("from", "to"):
            if query.get(bound):
                params[bound] = query[bound]
        params["apiKey"] = api_key

        url = f"{request.app[UPSTREAM_KEY]}/{endpoint}"
        logger.info(f"Forwarding news query to {endpoint} ({'q' if q else 'country'})")
        async with request.app[SESSION_KEY].get(url, params=params) as upstream:
            body = await upstream.read()
            status = upstream.status
            charset = upstream.charset or "utf-8"

        return web.Response(
            body=body,
            status=status,
            content_type="application/json",
            charset=charset,
            headers={"Cache-Control": request.app[CACHE_CONTROL_KEY]},
        )
    except Exception as e:
        logger.error(f"api/news error: {e}")
        return web.json_response({"error": str(e) or "unknown error"}, status=500)


async def _session_context(app: web.Application):
    app[SESSION_KEY] = aiohttp.ClientSession()
    yield
    await app[SESSION_KEY].close()


def create_app(
    api_key: Optional[str] = None,
    upstream_url: Optional[str] = None,
    cache_control: Optional[str] = None,
) -> web.Application:
    """
    Build the proxy application.

    Args:
        api_key: Server-held credential (defaults to NEWSAPI_KEY)
        upstream_url: Upstream base URL (defaults to news.upstream_url)
        cache_control: Cache-Control header sent with every response

    Returns:
        The aiohttp application
    """
    app = web.Application()
    app[API_KEY] = api_key if api_key is not None else os.getenv("NEWSAPI_KEY", "")
    app[UPSTREAM_KEY] = (upstream_url or get_config("news.upstream_url")).rstrip("/")
    app[CACHE_CONTROL_KEY] = cache_control or get_config("proxy.cache_control", CACHE_CONTROL)
    app.cleanup_ctx.append(_session_context)
    app.router.add_get("/api/news", handle_news)
    return app


def main():
    """
    Entry point for the goodnews-proxy command.
    """
    parser = argparse.ArgumentParser(description="Good News - NewsAPI proxy")
    parser.add_argument("--host", default=get_config("proxy.host"), help="Interface to bind")
    parser.add_argument("--port", type=int, default=get_config("proxy.port"), help="Port to listen on")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = create_app()
    if not app[API_KEY]:
        logger.warning("NEWSAPI_KEY is not set; every request will fail with HTTP 500")
    web.run_app(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
