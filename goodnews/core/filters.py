"""
Recency and positivity filters.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from goodnews.core.article import Article
from goodnews.core.sentiment import Scorer, is_overtly_negative

logger = logging.getLogger(__name__)

# A century; keeps the cutoff date well inside datetime's range
MAX_DAYS = 36500

# Time, fraction and offset at the end of an ISO-8601 timestamp
_ISO_TIME = re.compile(
    r'(?P<time>\d{2}:\d{2}(?::\d{2})?)(?:[.,](?P<frac>\d+))?(?P<tz>[+-]\d{2}(?::?\d{2})?)?$'
)


def clamp_days(days) -> int:
    """Lookback window in whole days, between 1 and MAX_DAYS."""
    try:
        return min(MAX_DAYS, max(1, int(days)))
    except (TypeError, ValueError, OverflowError):
        return 1


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken as UTC. Returns None if unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'

    # fromisoformat before 3.11 only takes 3 or 6 fraction digits and +HH:MM offsets
    match = _ISO_TIME.search(text)
    if match:
        tail = match.group('time')
        if match.group('frac'):
            tail += '.' + match.group('frac')[:6].ljust(6, '0')
        tz = match.group('tz')
        if tz:
            digits = tz[1:].replace(':', '')
            tail += f"{tz[0]}{digits[:2]}:{digits[2:] or '00'}"
        text = text[:match.start()] + tail
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def cutoff_for(days, now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now(timezone.utc)) - timedelta(days=clamp_days(days))


def is_recent(article: Article, days, now: Optional[datetime] = None) -> bool:
    """
    Whether the article was published within the last ``days`` days.

    Articles whose timestamp cannot be parsed are excluded.
    """
    published = parse_timestamp(article.published_at)
    if published is None:
        logger.debug(f"Excluding article with unparseable publishedAt {article.published_at!r}: {article.url}")
        return False
    return published >= cutoff_for(days, now)


class PositivityPolicy:
    """
    Decides whether an article is shown.

    The scorer decides whether the stored sentiment is favorable. Scorers
    that declare ``uses_veto`` additionally have any article containing a
    veto term suppressed.
    """
    def __init__(self, scorer: Scorer):
        self.scorer = scorer

    def is_positive(self, article: Article) -> bool:
        if not self.scorer.is_favorable(article):
            return False
        if self.scorer.uses_veto and is_overtly_negative(article.text):
            return False
        return True

    __call__ = is_positive

    def apply(self, articles: Iterable[Article]) -> List[Article]:
        """Keep positive articles, preserving order."""
        return [article for article in articles if self.is_positive(article)]
