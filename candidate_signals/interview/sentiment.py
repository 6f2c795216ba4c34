"""
Aggregate sentiment metrics for a whole interview session.
"""
import hashlib
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from .. import config
from .analysis import TrajectoryAnalyzer
from .lexicon import SENTIMENT_LEXICON
from .models import AggregateSentiment, Message
from .schemas import Label, SentimentCategory
from .scoring import LexicalSignalScorer, round_half_up

logger = logging.getLogger("sentiment_summary")


class SentimentCache(ABC):
    """Storage for summarizer results, keyed by message content."""

    @abstractmethod
    def get(self, key: str) -> Optional[AggregateSentiment]:
        pass

    @abstractmethod
    def put(self, key: str, value: AggregateSentiment) -> None:
        pass


class InMemorySentimentCache(SentimentCache):
    """Dictionary-backed cache with a time-to-live per entry."""

    def __init__(self,
                 ttl_seconds: float = config.CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[float, AggregateSentiment]] = {}

    def get(self, key: str) -> Optional[AggregateSentiment]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self.clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: AggregateSentiment) -> None:
        now = self.clock()
        self._purge(now)
        self._entries[key] = (now, value)

    def _purge(self, now: float) -> None:
        """Drop every expired entry, including keys that are never read again."""
        expired = [k for k, (stored_at, _) in self._entries.items()
                   if now - stored_at >= self.ttl_seconds]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug(f"Purged {len(expired)} expired sentiment cache entries")

    def __len__(self) -> int:
        return len(self._entries)


def cache_key(messages: Sequence[Message]) -> str:
    """Stable key over the id, text and timestamp of every user message."""
    digest = hashlib.sha256()
    for message in messages:
        if message.is_user:
            digest.update(f"{message.id}:{message.timestamp}:{message.text}\x1e".encode("utf-8"))
    return "sentiment_" + digest.hexdigest()


def _clamp_metric(value: float) -> int:
    return int(np.clip(round_half_up(value), 0, 100))


class SentimentSummarizer:
    """
    Reduces a session to overall polarity plus four 0-100 metrics.

    The overall label is decided on bucket ratios rather than raw sums, so a
    longer interview does not drift towards "positive" just by producing
    more signal.
    """

    POSITIVE_LABELS = (Label.ENTHUSIASTIC, Label.CONFIDENT, Label.ENGAGED)
    NEGATIVE_LABELS = (Label.UNCERTAIN, Label.NERVOUS, Label.DISINTERESTED)
    NEUTRAL_LABELS = (Label.THOUGHTFUL,)

    def __init__(self,
                 scorer: Optional[LexicalSignalScorer] = None,
                 trajectory_analyzer: Optional[TrajectoryAnalyzer] = None,
                 cache: Optional[SentimentCache] = None,
                 ratio_threshold: float = config.OVERALL_RATIO_THRESHOLD):
        self.scorer = scorer or LexicalSignalScorer(SENTIMENT_LEXICON)
        self.trajectory_analyzer = trajectory_analyzer or TrajectoryAnalyzer()
        self.cache = cache
        self.ratio_threshold = ratio_threshold

    def summarize(self, messages: Sequence[Message]) -> AggregateSentiment:
        """
        Summarize candidate sentiment for a session.

        Args:
            messages: Full session; only user messages are scored

        Returns:
            AggregateSentiment; the neutral default when there are no user messages
        """
        user_messages = [m for m in messages if m.is_user]
        if not user_messages:
            logger.info("No candidate messages, returning neutral sentiment")
            return AggregateSentiment()

        key = None
        if self.cache is not None:
            key = cache_key(user_messages)
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Sentiment cache hit for {key[:24]}")
                return cached

        result = self._summarize(user_messages)

        if self.cache is not None:
            self.cache.put(key, result)
        return result

    def label_scores(self, user_messages: Sequence[Message]) -> Dict[Label, float]:
        """Pooled label scores across messages, including the engagement bonus."""
        totals: Dict[Label, float] = {label: 0.0 for label in self.scorer.labels}
        for message in user_messages:
            for label, score in self.scorer.score(message.text).items():
                totals[label] += score

        count = len(user_messages)
        avg_length = sum(len(m.text) for m in user_messages) / count
        avg_words = sum(len(m.text.split()) for m in user_messages) / count

        engaged_weight = self.scorer.weight_of(Label.ENGAGED)
        bonus = (self._tier_bonus(avg_length, config.LENGTH_BONUS_TIERS)
                 + self._tier_bonus(avg_words, config.WORD_BONUS_TIERS))
        totals[Label.ENGAGED] = totals.get(Label.ENGAGED, 0.0) + bonus * engaged_weight

        logger.debug(f"Average length {avg_length:.0f} chars / {avg_words:.0f} words, "
                     f"engagement bonus {bonus}")
        return totals

    @staticmethod
    def _tier_bonus(value: float, tiers) -> int:
        for limit, bonus in tiers:
            if value > limit:
                return bonus
        return 0

    def _summarize(self, user_messages: Sequence[Message]) -> AggregateSentiment:
        scores = self.label_scores(user_messages)

        def get(label: Label) -> float:
            return scores.get(label, 0.0)

        positive = sum(get(label) for label in self.POSITIVE_LABELS)
        negative = sum(get(label) for label in self.NEGATIVE_LABELS)
        neutral = sum(get(label) for label in self.NEUTRAL_LABELS)
        overall = self._overall(positive, negative, neutral)

        confidence = 50 + get(Label.CONFIDENT) * 2 - get(Label.UNCERTAIN) * 2 - get(Label.NERVOUS)
        enthusiasm = 50 + get(Label.ENTHUSIASTIC) * 3 - get(Label.DISINTERESTED) * 2
        nervousness = 50 + get(Label.NERVOUS) * 3 - get(Label.CONFIDENT)
        engagement = (50 + get(Label.ENGAGED) * 2 + get(Label.ENTHUSIASTIC)
                      - get(Label.DISINTERESTED) * 3)

        analyzer = self.trajectory_analyzer
        trajectory = analyzer.smooth(analyzer.build_trajectory(user_messages))

        result = AggregateSentiment(
            overall=overall,
            confidence=_clamp_metric(confidence),
            enthusiasm=_clamp_metric(enthusiasm),
            nervousness=_clamp_metric(nervousness),
            engagement=_clamp_metric(engagement),
            trajectory=tuple(trajectory),
        )
        logger.info(f"Sentiment: {overall.value} (confidence={result.confidence}, "
                    f"enthusiasm={result.enthusiasm}, nervousness={result.nervousness}, "
                    f"engagement={result.engagement})")
        return result

    def _overall(self, positive: float, negative: float, neutral: float) -> SentimentCategory:
        total = positive + negative + neutral
        if total <= 0:
            return SentimentCategory.NEUTRAL
        if positive / total > self.ratio_threshold:
            return SentimentCategory.POSITIVE
        if negative / total > self.ratio_threshold:
            return SentimentCategory.NEGATIVE
        return SentimentCategory.NEUTRAL


def summarize_sentiment(messages: Sequence[Message],
                        cache: Optional[SentimentCache] = None) -> AggregateSentiment:
    return SentimentSummarizer(cache=cache).summarize(messages)
