"""
Sentiment scoring for Good News.

Two interchangeable scorers are provided. KeywordScorer labels text as
positive, neutral or negative from fixed keyword lists. LexiconScorer
returns a continuous score from TextBlob's pattern lexicon. Only one is
active per service, chosen through the ``sentiment.scorer`` setting.

Keyword matching is plain substring matching on lower-cased text, so
"war" also matches inside "award" or "warm". This is known to produce
false hits and is kept as-is.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from textblob import TextBlob

from goodnews.core.article import Article, Sentiment

logger = logging.getLogger(__name__)

POSITIVE_WORDS = (
    'success', 'achievement', 'breakthrough', 'progress', 'improvement', 'growth',
    'solution', 'innovation', 'recovery', 'hope', 'celebration', 'victory',
    'positive', 'beneficial', 'excellent', 'amazing', 'wonderful', 'great',
    'helping', 'support', 'unity', 'peace', 'cooperation', 'collaboration',
    'milestone', 'advancement', 'discovery', 'cure', 'healing', 'charity',
    'volunteer', 'community', 'environmental', 'sustainability', 'renewable',
)

NEGATIVE_WORDS = (
    'crisis', 'disaster', 'conflict', 'war', 'violence', 'crime',
    'death', 'tragedy', 'failure', 'collapse', 'decline', 'recession',
    'unemployment', 'poverty', 'scandal', 'corruption', 'fraud',
    'terrorist', 'attack', 'threat', 'danger', 'risk', 'problem',
)

# Terms that suppress an article no matter how well it scores numerically
VETO_WORDS = (
    'crisis', 'disaster', 'war', 'death', 'murder', 'suicide',
    'missing', 'feared', 'killed', 'dead', 'shooting', 'attack',
    'terror', 'violence', 'crash', 'tragedy', 'abuse', 'assault',
    'kidnap', 'hostage', 'bomb', 'massacre',
)

# TextBlob polarities are in [-1, 1] per term; AFINN-style weights are in [-5, 5]
AFINN_SCALE = 5


def count_keywords(text: str, keywords) -> int:
    """Number of keywords that occur somewhere in text (case-insensitive)."""
    text_lower = (text or "").lower()
    return sum(1 for word in keywords if word in text_lower)


def is_overtly_negative(text: str) -> bool:
    """True if any veto term appears in the text."""
    return count_keywords(text, VETO_WORDS) > 0


class Scorer(ABC):
    """
    Sentiment scoring capability.

    annotate() returns the Article fields the scorer fills in;
    is_favorable() reads them back.
    """
    name: str = ""
    uses_veto: bool = False

    @abstractmethod
    def annotate(self, text: str) -> Dict[str, Any]:
        """Score text and return the matching Article field values."""

    @abstractmethod
    def is_favorable(self, article: Article) -> bool:
        """Whether the article's stored sentiment counts as positive."""


class KeywordScorer(Scorer):
    """
    Categorical scorer based on positive/negative keyword counts.
    """
    name = "keyword"

    def classify(self, text: str) -> Sentiment:
        """
        Label text by comparing keyword counts.

        Ties, including no keywords at all, are neutral.
        """
        positive_count = count_keywords(text, POSITIVE_WORDS)
        negative_count = count_keywords(text, NEGATIVE_WORDS)

        if positive_count > negative_count and positive_count > 0:
            return Sentiment.POSITIVE
        if negative_count > positive_count:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def annotate(self, text: str) -> Dict[str, Any]:
        return {"sentiment_label": self.classify(text)}

    def is_favorable(self, article: Article) -> bool:
        return article.sentiment_label == Sentiment.POSITIVE


class LexiconScorer(Scorer):
    """
    Numeric scorer backed by TextBlob's pattern lexicon.

    The score is the sum of the polarities of every sentiment-bearing
    term TextBlob finds, scaled to AFINN's -5..5 range, so a single
    mildly favourable word already lands near the default threshold of 1.
    """
    name = "lexicon"
    uses_veto = True

    def __init__(self, threshold: float = 1.0):
        self.threshold = threshold

    def score(self, text: str) -> float:
        if not text or not text.strip():
            return 0.0
        assessments = TextBlob(text).sentiment_assessments.assessments
        return round(sum(polarity for _, polarity, _, _ in assessments) * AFINN_SCALE, 3)

    def annotate(self, text: str) -> Dict[str, Any]:
        return {"sentiment_score": self.score(text)}

    def is_favorable(self, article: Article) -> bool:
        return article.sentiment_score is not None and article.sentiment_score > self.threshold


SCORERS = {
    KeywordScorer.name: KeywordScorer,
    LexiconScorer.name: LexiconScorer,
}


def get_scorer(name: str = "keyword", threshold: float = 1.0) -> Scorer:
    """
    Build the scorer selected by name.

    Args:
        name: 'keyword' or 'lexicon'
        threshold: Positive threshold for the lexicon scorer

    Returns:
        A Scorer instance
    """
    key = (name or "keyword").strip().lower()
    if key not in SCORERS:
        raise ValueError(f"Unknown sentiment scorer: {name!r} (expected one of {sorted(SCORERS)})")
    if key == LexiconScorer.name:
        return LexiconScorer(threshold=threshold)
    return KeywordScorer()
