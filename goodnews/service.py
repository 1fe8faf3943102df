"""
News service: the single entry point behind the UI and the CLI.
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from goodnews.config import Settings, config
from goodnews.core.article import Article
from goodnews.core.fallback import fallback_articles
from goodnews.core.filters import PositivityPolicy, is_recent
from goodnews.core.normalizer import normalize, utc_now
from goodnews.core.sentiment import Scorer, get_scorer
from goodnews.fetchers.newsapi import NewsApiFetcher, NewsRequest, TransportError

logger = logging.getLogger(__name__)


class ResultKind(str, Enum):
    ARTICLES = "articles"  # upstream answered and at least one article qualified
    EMPTY = "empty"  # upstream answered but nothing qualified, or the body was not JSON
    FALLBACK = "fallback"  # upstream unreachable; fallback dataset returned


@dataclass(frozen=True)
class FetchResult:
    kind: ResultKind
    articles: Tuple[Article, ...]
    request: NewsRequest
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.kind == ResultKind.FALLBACK


def extract_articles(body: Union[bytes, str]) -> List[Any]:
    """
    Decode a response body and return its ``articles`` array.

    A body that is not valid UTF-8 JSON, or has no ``articles`` list,
    yields an empty list.
    """
    try:
        if isinstance(body, bytes):
            body = body.decode('utf-8')
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        # UnicodeDecodeError is a ValueError
        logger.warning(f"Could not decode news response as JSON: {e}")
        return []

    if not isinstance(payload, dict):
        logger.warning(f"Unexpected news response of type {type(payload).__name__}")
        return []

    items = payload.get('articles')
    if not isinstance(items, list):
        if payload.get('status') == 'error':
            logger.warning(f"Upstream reported an error: {payload.get('message') or payload.get('code')}")
        return []
    return items


class NewsService:
    """
    Fetches, normalizes, scores and filters news for one country.

    Each call is independent: one outbound request, no retries, no caching.
    """
    def __init__(
        self,
        settings: Settings,
        scorer: Optional[Scorer] = None,
        fetcher: Optional[NewsApiFetcher] = None,
    ):
        self.settings = settings
        self.scorer = scorer or get_scorer(settings.scorer, settings.positive_threshold)
        self.policy = PositivityPolicy(self.scorer)
        self.fetcher = fetcher or NewsApiFetcher(settings)

    def process(self, body: Union[bytes, str], request: NewsRequest, now: Optional[datetime] = None) -> List[Article]:
        """
        Turn a response body into the list of articles to show.

        Upstream order is preserved.
        """
        now = now or utc_now()
        country = request.country_name

        articles = []
        for raw in extract_articles(body):
            article = normalize(raw, self.scorer, country=country, now=now)
            if article is not None:
                articles.append(article)

        recent = [article for article in articles if is_recent(article, request.days, now)]
        positive = self.policy.apply(recent)
        logger.info(
            f"{len(articles)} articles normalized, {len(recent)} recent, {len(positive)} positive"
        )
        return positive

    async def fetch(self, country: Optional[str], days, now: Optional[datetime] = None) -> FetchResult:
        """
        Run the pipeline and report which outcome occurred.

        Args:
            country: Country code, blank defaults to "us"
            days: Lookback window, clamped to at least 1
            now: Reference time (defaults to the current time)

        Returns:
            FetchResult tagged as ARTICLES, EMPTY or FALLBACK
        """
        request = NewsRequest.build(country, days)
        now = now or utc_now()

        try:
            body = await self.fetcher.fetch_body(request, now)
        except TransportError as e:
            logger.error(f"News retrieval failed, serving fallback dataset: {e}")
            return FetchResult(
                kind=ResultKind.FALLBACK,
                articles=tuple(fallback_articles(self.scorer, now)),
                request=request,
                error=str(e),
            )

        articles = self.process(body, request, now)
        kind = ResultKind.ARTICLES if articles else ResultKind.EMPTY
        return FetchResult(kind=kind, articles=tuple(articles), request=request)

    async def close(self):
        await self.fetcher.close_session()


async def fetch_news(
    country: Optional[str],
    days,
    settings: Optional[Settings] = None,
    service: Optional[NewsService] = None,
) -> List[Article]:
    """
    Fetch the positive news for a country over the last ``days`` days.

    Never raises: any failure resolves to the fallback dataset.
    """
    owns_service = service is None
    scorer = None
    try:
        if service is None:
            service = NewsService(settings or Settings.from_config(config))
        scorer = service.scorer
        result = await service.fetch(country, days)
        return list(result.articles)
    except Exception as e:
        logger.exception(f"Unexpected error fetching news, serving fallback dataset: {e}")
        return fallback_articles(scorer or get_scorer())
    finally:
        if owns_service and service is not None:
            try:
                await service.close()
            except Exception as e:
                logger.warning(f"Error closing HTTP session: {e}")
