"""
Score calibration and qualification decision logic.
"""
import logging
import math
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from .. import config
from .models import CalibratedAssessment, CalibratedScore, CategoryScore
from .schemas import Category

logger = logging.getLogger("decision_engine")

RawScores = Union[Mapping[Any, Any], Iterable[CategoryScore]]


def compress(score: float) -> float:
    """
    Three-tier compression of the upper score range.

    Monotone non-decreasing; scores at or below 65 are left alone.
    """
    for lower, factor, offset in config.CALIBRATION_TIERS:
        if score > lower:
            return score - (score - lower) * factor - offset
    return score


def calibrate_score(score: float) -> float:
    """Calibrate one category score into [30, 95], rounded to one decimal."""
    calibrated = float(np.clip(compress(score), config.CALIBRATED_FLOOR, config.CALIBRATED_CEILING))
    return round(calibrated, 1)


def _category_name(category: Category) -> str:
    return category.value.replace("_", " ")


class QualificationDecisionEngine:
    """Applies fixed thresholds to calibrated scores."""

    def __init__(self,
                 primary_threshold: float = config.PRIMARY_THRESHOLD,
                 minimum_threshold: float = config.MINIMUM_THRESHOLD,
                 overall_threshold: float = config.OVERALL_THRESHOLD,
                 primary_categories: Iterable[Any] = config.PRIMARY_CATEGORIES):
        self.primary_threshold = primary_threshold
        self.minimum_threshold = minimum_threshold
        self.overall_threshold = overall_threshold
        self.primary_categories: Tuple[Category, ...] = tuple(
            Category.parse(c) for c in primary_categories
        )

    def decide(self, scores: Mapping[Category, float], overall: float) -> Tuple[bool, str]:
        """
        Decide qualification.

        Args:
            scores: Calibrated score per present category
            overall: Calibrated overall score

        Returns:
            (is_qualified, reasoning)
        """
        primary_failures: List[str] = []
        for category in self.primary_categories:
            score = scores.get(category)
            if score is None:
                primary_failures.append(f"{_category_name(category)} missing")
            elif score < self.primary_threshold:
                primary_failures.append(f"{_category_name(category)} {score:.1f}")

        minimum_failures = [
            f"{_category_name(category)} {score:.1f}"
            for category, score in scores.items()
            if score < self.minimum_threshold
        ]

        overall_failed = overall < self.overall_threshold

        reasons: List[str] = []
        if primary_failures:
            reasons.append(
                f"primary requirements not met ({', '.join(primary_failures)}; "
                f"required {self.primary_threshold:g})"
            )
        if minimum_failures:
            reasons.append(
                f"minimum threshold not met ({', '.join(minimum_failures)}; "
                f"required {self.minimum_threshold:g})"
            )
        if overall_failed:
            reasons.append(
                f"overall score {overall:.1f} is below {self.overall_threshold:g}"
            )

        if reasons:
            return False, "Not qualified: " + " and ".join(reasons) + "."

        primary_names = ", ".join(_category_name(c) for c in self.primary_categories)
        return True, (
            f"Qualified: {primary_names} meet the primary threshold of "
            f"{self.primary_threshold:g}, every category is at least "
            f"{self.minimum_threshold:g}, and the overall score {overall:.1f} "
            f"meets {self.overall_threshold:g}."
        )


class ScoreCalibrator:
    """
    Calibrates raw category scores against upstream score inflation.

    Raw scores are compressed in their upper range, clamped to [30, 95] and
    recombined into a weighted overall score, which is compressed with the
    same tiers. The qualification decision is embedded in the result.
    """

    def __init__(self,
                 weights: Optional[Mapping[Any, float]] = None,
                 decision_engine: Optional[QualificationDecisionEngine] = None):
        self.weights = self._merge_weights(weights)
        self.decision_engine = decision_engine or QualificationDecisionEngine()

    @staticmethod
    def _merge_weights(weights: Optional[Mapping[Any, float]]) -> Dict[Category, float]:
        merged = {Category.parse(k): float(v) for k, v in config.CATEGORY_WEIGHTS.items()}
        for key, value in (weights or {}).items():
            try:
                category = Category.parse(key)
            except ValueError:
                logger.warning(f"Ignoring weight for unknown category {key!r}")
                continue
            if value is None or not isinstance(value, Real) or not math.isfinite(value):
                raise ValueError(f"Weight for {key} must be a finite number, got {value!r}")
            if value < 0:
                raise ValueError(f"Weight for {key} must not be negative, got {value}")
            merged[category] = float(value)
        return merged

    def calibrate(self, raw_scores: RawScores,
                  weights: Optional[Mapping[Any, float]] = None) -> CalibratedAssessment:
        """
        Calibrate raw scores and decide qualification.

        Args:
            raw_scores: Category -> number, CategoryScore or {"score", "explanation"} dict,
                or an iterable of CategoryScore
            weights: Per-call weight overrides

        Returns:
            CalibratedAssessment
        """
        active_weights = self._merge_weights(weights) if weights is not None else self.weights
        parsed, skipped = self._parse(raw_scores)

        calibrated: Dict[Category, CalibratedScore] = {}
        for category in Category:
            if category not in parsed:
                continue
            raw, explanation = parsed[category]
            calibrated[category] = CalibratedScore(
                category=category,
                raw_score=raw,
                score=calibrate_score(raw),
                explanation=explanation,
            )
            logger.debug(f"{category.value}: {raw:.1f} -> {calibrated[category].score:.1f}")

        overall = self._overall(calibrated, active_weights)
        scores = {category: item.score for category, item in calibrated.items()}
        is_qualified, reasoning = self.decision_engine.decide(scores, overall)

        logger.info(f"Calibrated {len(calibrated)} categories, overall {overall:.1f}, "
                    f"qualified={is_qualified}")
        return CalibratedAssessment(
            scores=calibrated,
            overall_score=overall,
            is_qualified=is_qualified,
            reasoning=reasoning,
            skipped=tuple(skipped),
        )

    def _overall(self, calibrated: Mapping[Category, CalibratedScore],
                 weights: Mapping[Category, float]) -> float:
        if not calibrated:
            return config.CALIBRATED_FLOOR

        values = np.array([item.score for item in calibrated.values()], dtype=float)
        w = np.array([weights.get(category, 0.0) for category in calibrated], dtype=float)
        with np.errstate(over="ignore"):
            total = w.sum()
        if not np.isfinite(total):
            raise ValueError("Category weights are too large to combine")
        if total <= 0:
            logger.warning("Weights of present categories sum to zero, using equal weights")
            w = np.ones_like(values)

        with np.errstate(over="ignore", invalid="ignore"):
            weighted = float(np.average(values, weights=w))
        if not math.isfinite(weighted):
            raise ValueError(f"Weighted overall score is not finite: {weighted}")
        return round(float(np.clip(compress(weighted), 0.0, 100.0)), 1)

    @staticmethod
    def _parse(raw_scores: RawScores) -> Tuple[Dict[Category, Tuple[float, str]], List[Category]]:
        """Normalize input, clamping out-of-range scores and skipping unusable ones."""
        if isinstance(raw_scores, Mapping):
            items = list(raw_scores.items())
        else:
            items = [(item.category, item) for item in raw_scores]

        parsed: Dict[Category, Tuple[float, str]] = {}
        skipped: List[Category] = []
        for key, value in items:
            try:
                category = Category.parse(key)
            except ValueError:
                logger.warning(f"Skipping unknown category {key!r}")
                continue

            explanation = ""
            if isinstance(value, CategoryScore):
                value, explanation = value.raw_score, value.explanation
            elif isinstance(value, Mapping):
                value, explanation = value.get("score"), str(value.get("explanation", ""))

            if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
                logger.warning(f"Skipping malformed score for {category.value}: {value!r}")
                skipped.append(category)
                continue

            score = float(np.clip(float(value), 0.0, 100.0))
            if score != value:
                logger.warning(f"Clamped {category.value} score {value} to {score}")
            parsed[category] = (score, explanation)

        return parsed, skipped


def calibrate(raw_scores: RawScores,
              weights: Optional[Mapping[Any, float]] = None) -> CalibratedAssessment:
    return ScoreCalibrator().calibrate(raw_scores, weights)
