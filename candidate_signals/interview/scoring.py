"""
Lexical signal scoring for single text messages.
"""
import logging
import math
import re
from typing import Dict, Mapping, Optional, Pattern

from .lexicon import LexiconEntry, TRAJECTORY_LEXICON
from .schemas import Label

logger = logging.getLogger("signal_scoring")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up."""
    return int(math.floor(value + 0.5))


class LexicalSignalScorer:
    """
    Scores a text against a weighted lexicon.

    Every phrase and pattern occurrence adds the label's weight to that
    label's score. Scoring is total: text without matches scores 0.0 for
    every label.
    """

    def __init__(self, lexicon: Optional[Mapping[Label, LexiconEntry]] = None):
        self.lexicon = dict(lexicon if lexicon is not None else TRAJECTORY_LEXICON)
        # Scores are always reported in canonical label order
        self._labels = [label for label in Label if label in self.lexicon]
        self._phrase_patterns: Dict[Label, Dict[str, Pattern]] = {
            label: {
                phrase: re.compile(r"\b" + re.escape(phrase) + r"\b")
                for phrase in self.lexicon[label].phrases
            }
            for label in self._labels
        }

    @property
    def labels(self):
        return list(self._labels)

    def weight_of(self, label: Label) -> float:
        entry = self.lexicon.get(label)
        return entry.weight if entry else 0.0

    def score(self, text: str) -> Dict[Label, float]:
        """
        Score one message.

        Args:
            text: Message text, any casing

        Returns:
            Raw weighted score for every label in the lexicon
        """
        lowered = (text or "").lower()
        scores: Dict[Label, float] = {}

        for label in self._labels:
            entry = self.lexicon[label]
            hits = 0
            for pattern in self._phrase_patterns[label].values():
                hits += len(pattern.findall(lowered))
            for pattern in entry.patterns:
                hits += len(pattern.findall(lowered))
            scores[label] = hits * entry.weight

        return scores

    @staticmethod
    def dominant(scores: Mapping[Label, float]) -> Optional[Label]:
        """
        Get the highest scoring label.

        Ties go to the label declared first in Label; returns None when no
        label scored above zero.
        """
        best: Optional[Label] = None
        best_score = 0.0
        for label in Label:
            score = scores.get(label, 0.0)
            if score > best_score:
                best = label
                best_score = score
        return best
