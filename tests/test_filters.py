from datetime import timedelta

import pytest

from goodnews.core.article import Sentiment
from goodnews.core.filters import (
    MAX_DAYS,
    PositivityPolicy,
    clamp_days,
    cutoff_for,
    is_recent,
    parse_timestamp,
)
from goodnews.core.normalizer import isoformat
from goodnews.core.sentiment import KeywordScorer, LexiconScorer


class TestRecency:
    @pytest.mark.parametrize("days", [2, 7, 30])
    def test_window_boundaries(self, days, now, make_article):
        old = make_article(published_at=isoformat(now - timedelta(days=days + 1)))
        fresh = make_article(published_at=isoformat(now - timedelta(days=days - 1)))
        assert not is_recent(old, days, now)
        assert is_recent(fresh, days, now)

    def test_zero_days_is_clamped_to_one(self, now, make_article):
        article = make_article(published_at=isoformat(now - timedelta(hours=12)))
        assert is_recent(article, 0, now)
        assert not is_recent(make_article(published_at=isoformat(now - timedelta(hours=30))), 0, now)

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-45T00:00:00Z", "not a date"])
    def test_unparseable_timestamps_are_excluded(self, value, now, make_article):
        assert not is_recent(make_article(published_at=value), 7, now)

    def test_naive_timestamp_is_utc(self, now, make_article):
        assert is_recent(make_article(published_at="2024-06-14T12:00:00"), 2, now)

    def test_offset_timestamp(self, now, make_article):
        assert is_recent(make_article(published_at="2024-06-15T14:00:00+02:00"), 1, now)


def test_parse_timestamp_handles_z_suffix(now):
    assert parse_timestamp("2024-06-15T12:00:00Z") == now


@pytest.mark.parametrize("value, microsecond", [
    ("2024-06-15T12:00:00+0000", 0),
    ("2024-06-15T14:00:00+0200", 0),
    ("2024-06-15T12:00:00+00", 0),
    ("2024-06-15T12:00:00.1234567Z", 123456),
    ("2024-06-15T12:00:00.5Z", 500000),
    ("2024-06-15T12:00:00,250+00:00", 250000),
])
def test_parse_timestamp_accepts_iso_variants(value, microsecond, now):
    assert parse_timestamp(value) == now.replace(microsecond=microsecond)


def test_huge_window_cutoff_stays_in_range(now):
    assert cutoff_for(1_000_000, now) == now - timedelta(days=MAX_DAYS)


@pytest.mark.parametrize("raw, expected", [
    (0, 1), (-3, 1), (1, 1), (14, 14), ("7", 7), ("x", 1), (None, 1),
    (1_000_000, MAX_DAYS), (float("inf"), 1),
])
def test_clamp_days(raw, expected):
    assert clamp_days(raw) == expected


class TestKeywordPolicy:
    def setup_method(self):
        self.policy = PositivityPolicy(KeywordScorer())

    def test_positive_label_passes(self, make_article):
        assert self.policy.is_positive(make_article(sentiment_label=Sentiment.POSITIVE))

    @pytest.mark.parametrize("label", [Sentiment.NEUTRAL, Sentiment.NEGATIVE, None])
    def test_other_labels_fail(self, label, make_article):
        assert not self.policy.is_positive(make_article(sentiment_label=label))

    def test_label_alone_decides(self, make_article):
        article = make_article(title="Missing dog found", sentiment_label=Sentiment.POSITIVE)
        assert self.policy.is_positive(article)


class TestLexiconPolicy:
    def setup_method(self):
        self.policy = PositivityPolicy(LexiconScorer(threshold=1))

    def test_score_above_threshold_passes(self, make_article):
        assert self.policy(make_article(title="Community garden opens", sentiment_score=3.0))

    def test_threshold_is_exclusive(self, make_article):
        assert not self.policy(make_article(sentiment_score=1.0))

    def test_missing_score_fails(self, make_article):
        assert not self.policy(make_article(sentiment_score=None))

    def test_veto_overrides_high_score(self, make_article):
        article = make_article(
            title="Town celebrates wonderful festival",
            description="Police investigate murder nearby",
            sentiment_score=12.0,
        )
        assert not self.policy(article)


def test_policy_is_idempotent(make_article):
    policy = PositivityPolicy(KeywordScorer())
    articles = [
        make_article(url="1", sentiment_label=Sentiment.POSITIVE),
        make_article(url="2", sentiment_label=Sentiment.NEGATIVE),
        make_article(url="3", sentiment_label=Sentiment.POSITIVE),
        make_article(url="4", sentiment_label=Sentiment.NEUTRAL),
    ]
    once = policy.apply(articles)
    assert [a.url for a in once] == ["1", "3"]
    assert policy.apply(once) == once
