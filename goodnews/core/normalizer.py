"""
Normalization of upstream article payloads.

The upstream shape is untrusted: every field is checked on its own and a
bad field falls back to a default instead of failing the batch.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from goodnews.core.article import Article
from goodnews.core.sentiment import Scorer

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(moment: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z, the way the upstream writes it."""
    return moment.astimezone(timezone.utc).isoformat(timespec='seconds').replace('+00:00', 'Z')


def _string(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def _source_name(value: Any) -> str:
    if isinstance(value, dict):
        name = value.get('name')
        return name if isinstance(name, str) else ""
    if isinstance(value, str):
        return value
    return ""


def normalize(
    raw: Any,
    scorer: Scorer,
    country: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[Article]:
    """
    Turn one raw upstream item into an Article.

    Args:
        raw: A decoded JSON value from the upstream ``articles`` array
        scorer: Scorer used to fill in the sentiment field
        country: Display name of the requested country
        now: Substitute timestamp when ``publishedAt`` is missing

    Returns:
        The Article, or None when raw is not a JSON object
    """
    if not isinstance(raw, dict):
        logger.debug(f"Dropping non-object article item of type {type(raw).__name__}")
        return None

    title = _string(raw, 'title') or ""
    description = _string(raw, 'description') or ""

    published_at = _string(raw, 'publishedAt')
    if published_at is None:
        published_at = isoformat(now or utc_now())

    return Article(
        title=title,
        description=description,
        url=_string(raw, 'url') or "",
        source=_source_name(raw.get('source')),
        published_at=published_at,
        country=country,
        url_to_image=_string(raw, 'urlToImage'),
        **scorer.annotate(f"{title} {description}"),
    )
