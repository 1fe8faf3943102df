"""
Article data model for Good News.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Article:
    """
    A normalized news article.

    Exactly one of sentiment_score / sentiment_label is set, depending on
    which scorer produced the article.
    """
    title: str
    description: str
    url: str
    source: str
    published_at: str
    country: Optional[str] = None
    sentiment_score: Optional[float] = None
    sentiment_label: Optional[Sentiment] = None
    url_to_image: Optional[str] = None

    @property
    def text(self) -> str:
        """Text the scorer and the veto look at."""
        return f"{self.title} {self.description}"

    def to_dict(self) -> Dict:
        """Serialize using the upstream field names."""
        data = {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "publishedAt": self.published_at,
        }
        if self.country is not None:
            data["country"] = self.country
        if self.sentiment_score is not None:
            data["sentimentScore"] = self.sentiment_score
        if self.sentiment_label is not None:
            data["sentiment"] = self.sentiment_label.value
        if self.url_to_image is not None:
            data["urlToImage"] = self.url_to_image
        return data
