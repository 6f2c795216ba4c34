"""
Tests for the aggregate sentiment summary and its result cache.

Tests cover:
- The neutral default for sessions without candidate messages
- Ratio-based overall label
- Metric formulas and clamping
- Engagement bonus from response length
- Cache keys, hits and expiry
"""

import pytest

from candidate_signals.interview.analysis import TrajectoryAnalyzer
from candidate_signals.interview.models import AggregateSentiment, Message
from candidate_signals.interview.schemas import Label, Role, SentimentCategory
from candidate_signals.interview.sentiment import (
    InMemorySentimentCache, SentimentCache, SentimentSummarizer, cache_key,
    summarize_sentiment,
)
from candidate_signals.interview.testing import (
    ResultValidator, create_test_conversation_data, make_messages,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class RecordingCache(SentimentCache):
    def __init__(self):
        self.store = {}
        self.gets = 0

    def get(self, key):
        self.gets += 1
        return self.store.get(key)

    def put(self, key, value):
        self.store[key] = value


# =============================================================
# TEST: Neutral default
# =============================================================

class TestEmptySession:
    """Test the single base case."""

    def test_no_messages(self):
        result = summarize_sentiment([])
        assert result == AggregateSentiment()
        assert result.overall == SentimentCategory.NEUTRAL
        assert (result.confidence, result.enthusiasm, result.nervousness, result.engagement) == (50, 50, 50, 50)
        assert result.trajectory == ()

    def test_only_assistant_messages(self):
        messages = [
            Message(id="q1", role=Role.ASSISTANT, text="Tell me about yourself?", timestamp=0),
            Message(id="s1", role=Role.SYSTEM, text="Session started", timestamp=1),
        ]
        assert summarize_sentiment(messages) == AggregateSentiment()


# =============================================================
# TEST: Overall label and metrics
# =============================================================

class TestSummarize:
    """Test pooled scores, overall label and metrics."""

    def test_confident_session_is_positive(self):
        result = summarize_sentiment(make_messages([
            "I know I'm definitely sure. I achieved it. I led the team.",
        ]))
        assert result.overall == SentimentCategory.POSITIVE
        assert result.confidence == 65
        assert result.nervousness < 50

    def test_nervous_session_is_negative(self):
        result = summarize_sentiment(make_messages([
            "Um, sorry, I'm worried. I guess it could be.",
        ]))
        assert result.overall == SentimentCategory.NEGATIVE
        assert result.nervousness > 50
        assert result.confidence < 50

    def test_thoughtful_session_is_neutral(self):
        result = summarize_sentiment(make_messages(["I think however we should consider it."]))
        assert result.overall == SentimentCategory.NEUTRAL

    def test_mixed_session_is_neutral(self):
        result = summarize_sentiment(make_messages(["I'm confident. Um, sorry."]))
        assert result.overall == SentimentCategory.NEUTRAL

    def test_longer_session_does_not_drift_positive(self):
        result = summarize_sentiment(make_messages(["I'm confident. Um, sorry."] * 10))
        assert result.overall == SentimentCategory.NEUTRAL

    def test_long_answers_raise_engagement(self):
        result = summarize_sentiment(make_messages(["word " * 120]))
        # 3 length tiers + 3 word tiers at the engaged weight, doubled in the metric
        assert result.engagement == 66

    def test_half_point_metrics_round_up(self):
        result = summarize_sentiment(make_messages(["Whatever, I will do it."]))
        # 50 - 3 x 0.5
        assert result.engagement == 49
        assert result.enthusiasm == 49

    def test_metrics_are_clamped(self):
        result = summarize_sentiment(make_messages(["sorry " * 50]))
        assert result.nervousness == 100
        assert 0 <= result.confidence <= 100

    def test_enthusiasm(self):
        result = summarize_sentiment(make_messages(["I'm so excited, I love it!"]))
        assert result.enthusiasm > 50
        assert result.overall == SentimentCategory.POSITIVE

    def test_disinterest_lowers_engagement(self):
        result = summarize_sentiment(make_messages(["Whatever. It doesn't matter anyway."]))
        assert result.engagement < 50
        assert result.enthusiasm < 50
        assert result.overall == SentimentCategory.NEGATIVE

    def test_trajectory_is_smoothed_build(self):
        messages = create_test_conversation_data()
        analyzer = TrajectoryAnalyzer()
        expected = analyzer.smooth(analyzer.build_trajectory(messages))

        result = summarize_sentiment(messages)
        assert list(result.trajectory) == expected
        ResultValidator.assert_valid(sentiment=result)

    def test_label_scores_include_bonus(self):
        summarizer = SentimentSummarizer()
        scores = summarizer.label_scores(make_messages(["word " * 120]))
        assert scores[Label.ENGAGED] == pytest.approx(6 * 1.3)


# =============================================================
# TEST: Cache
# =============================================================

class TestCache:
    """Test the injectable result cache."""

    def test_key_is_stable(self):
        assert cache_key(make_messages(["a", "b"])) == cache_key(make_messages(["a", "b"]))

    def test_key_changes_with_content(self):
        assert cache_key(make_messages(["a", "b"])) != cache_key(make_messages(["a", "c"]))

    def test_key_changes_with_id_and_timestamp(self):
        base = make_messages(["a"])
        moved = make_messages(["a"], start_ms=5)
        renamed = [Message(id="other", role=Role.USER, text="a", timestamp=0)]
        assert cache_key(base) != cache_key(moved)
        assert cache_key(base) != cache_key(renamed)

    def test_key_ignores_assistant_messages(self):
        plain = make_messages(["a"], start_ms=10_000)
        with_question = make_messages(["a"], with_questions=True)
        assert cache_key(plain) == cache_key(with_question)
        assert cache_key(plain).startswith("sentiment_")

    def test_hit_returns_stored_result(self):
        cache = InMemorySentimentCache()
        summarizer = SentimentSummarizer(cache=cache)
        messages = create_test_conversation_data()

        first = summarizer.summarize(messages)
        second = summarizer.summarize(messages)
        assert second is first
        assert len(cache) == 1

    def test_cached_and_uncached_results_match(self):
        messages = create_test_conversation_data()
        cached = SentimentSummarizer(cache=InMemorySentimentCache()).summarize(messages)
        assert cached == SentimentSummarizer().summarize(messages)

    def test_entries_expire(self):
        clock = FakeClock()
        cache = InMemorySentimentCache(ttl_seconds=60, clock=clock)
        cache.put("k", AggregateSentiment())

        clock.now += 59
        assert cache.get("k") == AggregateSentiment()
        clock.now += 1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_put_drops_expired_entries(self):
        clock = FakeClock()
        cache = InMemorySentimentCache(ttl_seconds=60, clock=clock)
        cache.put("old", AggregateSentiment())
        clock.now += 30
        cache.put("recent", AggregateSentiment())

        clock.now += 31
        cache.put("new", AggregateSentiment())
        assert len(cache) == 2
        assert cache.get("old") is None
        assert cache.get("recent") == AggregateSentiment()

    def test_missing_key(self):
        assert InMemorySentimentCache().get("nope") is None

    def test_custom_cache_collaborator(self):
        cache = RecordingCache()
        summarizer = SentimentSummarizer(cache=cache)
        messages = make_messages(["I'm confident."])

        summarizer.summarize(messages)
        summarizer.summarize(messages)
        assert cache.gets == 2
        assert list(cache.store) == [cache_key(messages)]

    def test_empty_session_skips_cache(self):
        cache = RecordingCache()
        SentimentSummarizer(cache=cache).summarize([])
        assert cache.gets == 0
