"""
NewsAPI transport for Good News.

Issues exactly one GET per request, either straight to the upstream
provider or through the backend proxy.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

import aiohttp
import async_timeout

from goodnews.config import Settings
from goodnews.core.countries import normalize_country, resolve
from goodnews.core.filters import clamp_days, cutoff_for

logger = logging.getLogger(__name__)


class GoodNewsError(Exception):
    """Base error for Good News."""


class TransportError(GoodNewsError):
    """The upstream or proxy call failed, timed out or returned a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class Transport(str, Enum):
    DIRECT = "direct"
    PROXY = "proxy"


@dataclass(frozen=True)
class NewsRequest:
    """
    Effective query parameters after defaulting and clamping.
    """
    country: str
    days: int

    @classmethod
    def build(cls, country: Optional[str], days) -> "NewsRequest":
        return cls(country=normalize_country(country), days=clamp_days(days))

    @property
    def country_name(self) -> str:
        return resolve(self.country)

    @property
    def query(self) -> str:
        return f'"{self.country_name}"'


def select_transport(settings: Settings) -> Transport:
    """
    Pick direct mode only in a trusted context with a client credential
    and no proxy override; otherwise go through the proxy.
    """
    if settings.trusted_context and settings.has_direct_credential and not settings.always_use_proxy:
        return Transport.DIRECT
    return Transport.PROXY


def build_call(
    request: NewsRequest,
    settings: Settings,
    transport: Transport,
    now: Optional[datetime] = None,
) -> Tuple[str, Dict[str, str]]:
    """
    Build the URL and query parameters for one outbound call.

    Returns:
        Tuple of (url, params)
    """
    params = {
        "q": request.query,
        "from": cutoff_for(request.days, now).date().isoformat(),
        "pageSize": str(settings.page_size),
    }
    if transport == Transport.DIRECT:
        params.update({
            "sortBy": "publishedAt",
            "language": "en",
            "apiKey": settings.api_key,
        })
        return f"{settings.upstream_url}/everything", params

    params["country"] = request.country
    return settings.proxy_url, params


class NewsApiFetcher:
    """
    Fetches the raw response body for a NewsRequest.
    """
    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """
        Lazy initialization of aiohttp session.

        Returns:
            aiohttp.ClientSession: The HTTP session
        """
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={'Accept': 'application/json'})
        return self._session

    async def close_session(self):
        """Close the aiohttp session if this fetcher created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def fetch_body(self, request: NewsRequest, now: Optional[datetime] = None) -> bytes:
        """
        Perform the single GET and return the raw response body.

        Args:
            request: Effective request parameters
            now: Reference time for the ``from`` date bound

        Returns:
            The response body

        Raises:
            TransportError: On network failure, deadline expiry or non-2xx status
        """
        transport = select_transport(self.settings)
        url, params = build_call(request, self.settings, transport, now)
        logger.info(f"Fetching news for {request.country} ({request.days}d) via {transport.value}")

        try:
            async with async_timeout.timeout(self.settings.timeout_seconds):
                async with self.session.get(url, params=params) as response:
                    body = await response.read()
                    if response.status >= 300:
                        raise TransportError(
                            f"{transport.value} call returned HTTP {response.status}",
                            status=response.status,
                        )
                    return body
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"{transport.value} call exceeded {self.settings.timeout_seconds}s deadline"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{transport.value} call failed: {e}") from e
