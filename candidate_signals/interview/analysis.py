"""
Emotional trajectory analysis for interview subjects.
Builds per-message emotion samples, smooths outliers and detects emotional shifts.
"""
import logging
import math
import re
from dataclasses import replace
from typing import List, Mapping, Optional, Sequence

import numpy as np

from .. import config
from .lexicon import TRAJECTORY_LEXICON
from .models import EmotionSample, Message, Shift, ShiftAnalysis
from .schemas import Label, LABEL_CATEGORIES, SentimentCategory, ShiftType
from .scoring import LexicalSignalScorer, round_half_up

logger = logging.getLogger("trajectory_analysis")

_SENTENCE_END = re.compile(r"[.!?]+")


def _neighbour_mean(a: float, b: float) -> int:
    return round_half_up(float(np.mean([a, b])))


class TrajectoryAnalyzer:
    """Turns a message sequence into an emotional trajectory and its shifts."""

    def __init__(self,
                 scorer: Optional[LexicalSignalScorer] = None,
                 min_signal: float = config.MIN_SIGNAL_SCORE,
                 outlier_delta: float = config.OUTLIER_INTENSITY_DELTA,
                 shift_delta: float = config.SHIFT_INTENSITY_DELTA,
                 max_gap_seconds: float = config.SHIFT_MAX_GAP_SECONDS,
                 categories: Optional[Mapping[Label, SentimentCategory]] = None):
        self.scorer = scorer or LexicalSignalScorer(TRAJECTORY_LEXICON)
        self.min_signal = min_signal
        self.outlier_delta = outlier_delta
        self.shift_delta = shift_delta
        self.max_gap_seconds = max_gap_seconds
        self.categories = dict(categories or LABEL_CATEGORIES)
        self.position_bands = [(bound, Label(name)) for bound, name in config.POSITION_BANDS]

    # ------------------------------------------------------------------
    # Trajectory building
    # ------------------------------------------------------------------

    def build_trajectory(self, messages: Sequence[Message]) -> List[EmotionSample]:
        """
        Label every user message with a dominant emotion and an intensity.

        Args:
            messages: Session messages in timestamp order; non-user messages are ignored

        Returns:
            One EmotionSample per user message
        """
        user_messages = [m for m in messages if m.is_user]
        total = len(user_messages)
        samples: List[EmotionSample] = []

        for index, message in enumerate(user_messages):
            progress = index / max(1, total - 1)
            scores = self.scorer.score(message.text)
            label = self.scorer.dominant(scores)
            signal = scores[label] if label is not None else 0.0

            if label is None or signal < self.min_signal:
                label = self._position_label(progress)
                signal = 0.0
                logger.debug(f"Message {index}: no strong signal, using position default {label.value}")

            intensity = self._intensity(message.text, signal, progress)
            samples.append(EmotionSample(
                message_index=index,
                timestamp=message.timestamp,
                label=label,
                intensity=intensity,
            ))

        logger.info(f"Built trajectory with {len(samples)} samples")
        return samples

    def _position_label(self, progress: float) -> Label:
        for bound, label in self.position_bands:
            if progress < bound:
                return label
        return self.position_bands[-1][1]

    def _intensity(self, text: str, signal: float, progress: float) -> int:
        """Combine length, word count, sentences, signal strength and position."""
        text = (text or "").lower()
        words = len(text.split())
        sentences = len(_SENTENCE_END.findall(text))

        length_factor = min(config.LENGTH_FACTOR_CAP, len(text) // config.LENGTH_FACTOR_CHARS)
        word_factor = min(config.WORD_FACTOR_CAP, words // config.WORD_FACTOR_WORDS)
        sentence_factor = min(config.SENTENCE_FACTOR_CAP, sentences)
        signal_factor = min(config.SIGNAL_FACTOR_CAP, math.floor(signal * config.SIGNAL_FACTOR_SCALE))

        # Ramps up through the first half, tapers through the second
        tent = progress * 2 if progress < 0.5 else 2 - progress * 2
        position_factor = math.floor(config.POSITION_FACTOR_PEAK * tent)

        intensity = (config.BASE_INTENSITY + length_factor + word_factor
                     + sentence_factor + signal_factor + position_factor)
        return int(np.clip(intensity, 0, 100))

    # ------------------------------------------------------------------
    # Smoothing
    # ------------------------------------------------------------------

    def smooth(self, samples: Sequence[EmotionSample]) -> List[EmotionSample]:
        """
        Remove single-point label and intensity outliers.

        Unlike a one-pass-per-call smoother, this repeats the forward outlier
        pass until it leaves the sequence unchanged (at most 2n+2 passes).
        One pass alone is not idempotent: intensities [0, 100, 100, 0] with a
        label outlier in third place settle to [0, 25, 50, 0] only on the
        second pass. Repeating makes smoothing an already smoothed trajectory
        a no-op. Each label
        rewrite removes two neighbour disagreements and each intensity rewrite
        shrinks the squared neighbour differences, so the loop terminates.

        Args:
            samples: Trajectory in order; not modified

        Returns:
            New list of samples
        """
        smoothed = [replace(sample) for sample in samples]
        if len(smoothed) < 3:
            return smoothed

        passes = 0
        max_passes = 2 * len(smoothed) + 2
        while self._smooth_pass(smoothed):
            passes += 1
            if passes >= max_passes:
                logger.warning(f"Smoothing did not settle after {passes} passes")
                break

        logger.debug(f"Smoothing settled after {passes} changing pass(es)")
        return smoothed

    def _smooth_pass(self, samples: List[EmotionSample]) -> bool:
        """Single forward pass over interior samples. Returns True if anything changed."""
        changed = False
        for i in range(1, len(samples) - 1):
            prev, current, nxt = samples[i - 1], samples[i], samples[i + 1]

            if prev.label == nxt.label and current.label != prev.label:
                logger.debug(f"Sample {i}: label outlier {current.label.value} -> {prev.label.value}")
                current.label = prev.label
                current.intensity = _neighbour_mean(prev.intensity, nxt.intensity)
                changed = True

            if (abs(current.intensity - prev.intensity) > self.outlier_delta
                    and abs(current.intensity - nxt.intensity) > self.outlier_delta):
                mean = _neighbour_mean(prev.intensity, nxt.intensity)
                if mean != current.intensity:
                    logger.debug(f"Sample {i}: intensity outlier {current.intensity} -> {mean}")
                    current.intensity = mean
                    changed = True
        return changed

    # ------------------------------------------------------------------
    # Shift detection
    # ------------------------------------------------------------------

    def detect_shifts(self, samples: Sequence[EmotionSample]) -> ShiftAnalysis:
        """
        Find emotional shifts between adjacent samples.

        Pairs more than max_gap_seconds apart are treated as unrelated.

        Returns:
            ShiftAnalysis with the shifts and whether the pattern is significant
        """
        if len(samples) < 2:
            return ShiftAnalysis()

        shifts: List[Shift] = []
        for previous, current in zip(samples, samples[1:]):
            gap_seconds = (current.timestamp - previous.timestamp) / 1000
            if gap_seconds >= self.max_gap_seconds:
                logger.debug(f"Skipping pair at {current.timestamp}: {gap_seconds:.0f}s gap")
                continue

            delta = current.intensity - previous.intensity
            if current.label == previous.label and abs(delta) < self.shift_delta:
                continue

            shifts.append(Shift(
                from_sample=previous,
                to_sample=current,
                type=self._shift_type(previous, current),
                timestamp=current.timestamp,
            ))

        significant = self._is_significant(shifts)
        logger.info(f"Detected {len(shifts)} shifts (significant={significant})")
        return ShiftAnalysis(shifts=tuple(shifts), significant=significant)

    def _category(self, label: Label) -> SentimentCategory:
        return self.categories.get(label, SentimentCategory.NEUTRAL)

    def _shift_type(self, previous: EmotionSample, current: EmotionSample) -> ShiftType:
        prev_category = self._category(previous.label)
        curr_category = self._category(current.label)

        if prev_category != curr_category:
            return ShiftType(curr_category.value)

        delta = current.intensity - previous.intensity
        if abs(delta) < self.shift_delta or curr_category == SentimentCategory.NEUTRAL:
            return ShiftType.NEUTRAL

        rising = delta > 0
        if curr_category == SentimentCategory.POSITIVE:
            return ShiftType.POSITIVE if rising else ShiftType.NEGATIVE
        # Rising intensity of a negative emotion is a negative shift
        return ShiftType.NEGATIVE if rising else ShiftType.POSITIVE

    @staticmethod
    def _is_significant(shifts: Sequence[Shift]) -> bool:
        negatives = [s for s in shifts if s.type == ShiftType.NEGATIVE]
        if len(negatives) > 1:
            return True
        if any(abs(s.intensity_delta) > config.SIGNIFICANT_NEGATIVE_DELTA for s in negatives):
            return True
        return len(shifts) > config.SIGNIFICANT_SHIFT_COUNT

    def analyze_messages(self, messages: Sequence[Message]) -> ShiftAnalysis:
        """Build, smooth and scan the trajectory of a message sequence."""
        return self.detect_shifts(self.smooth(self.build_trajectory(messages)))


_default_analyzer = TrajectoryAnalyzer()


def build_trajectory(messages: Sequence[Message]) -> List[EmotionSample]:
    return _default_analyzer.build_trajectory(messages)


def smooth(samples: Sequence[EmotionSample]) -> List[EmotionSample]:
    return _default_analyzer.smooth(samples)


def detect_shifts(samples: Sequence[EmotionSample]) -> ShiftAnalysis:
    return _default_analyzer.detect_shifts(samples)
