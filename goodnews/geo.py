"""
Best-effort detection of the caller's country from their IP address.
"""
import asyncio
import logging
from typing import Optional

import aiohttp
import async_timeout

from goodnews.config import get_config
from goodnews.core.countries import DEFAULT_COUNTRY

logger = logging.getLogger(__name__)


async def detect_country(
    session: Optional[aiohttp.ClientSession] = None,
    lookup_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Ask an IP geolocation service for the caller's country code.

    Returns:
        Lower-case country code, or "us" if the lookup fails
    """
    lookup_url = lookup_url or get_config("geo.lookup_url")
    timeout = timeout or get_config("geo.timeout_seconds", 5)
    own_session = session is None
    session = session or aiohttp.ClientSession()
    try:
        async with async_timeout.timeout(timeout):
            async with session.get(lookup_url) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        code = data.get("country_code") if isinstance(data, dict) else None
        if isinstance(code, str) and code.strip():
            return code.strip().lower()
        logger.info("Geolocation response had no country code, using default")
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning(f"Country detection failed, using default: {e}")
    finally:
        if own_session:
            await session.close()
    return DEFAULT_COUNTRY
