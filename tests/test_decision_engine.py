"""
Tests for score calibration and the qualification decision.

Tests cover:
- The three-tier compression and the [30, 95] clamp
- Weighted overall score and weight handling
- Malformed score handling
- Qualification rules and reasoning order
"""

import math

import pytest

from candidate_signals.interview.decision_engine import (
    QualificationDecisionEngine, ScoreCalibrator, calibrate, calibrate_score, compress,
)
from candidate_signals.interview.models import CategoryScore
from candidate_signals.interview.schemas import Category
from candidate_signals.interview.testing import ResultValidator, create_test_scores

FIVE_CATEGORIES = ("domain_knowledge", "experience_relevance", "communication",
                   "response_quality", "cultural_fit")


def five_scores(value, **overrides):
    scores = {name: value for name in FIVE_CATEGORIES}
    scores.update(overrides)
    return scores


# =============================================================
# TEST: Compression
# =============================================================

class TestCompress:
    """Test the calibration transform."""

    @pytest.mark.parametrize("raw, expected", [
        (100, 87.5),
        (90, 84.5),
        (80, 78.5),
        (70, 69.25),
        (65, 65),
        (60, 60),
    ])
    def test_tiers(self, raw, expected):
        assert compress(raw) == pytest.approx(expected)

    def test_low_scores_are_raised_to_floor(self):
        assert calibrate_score(10) == 30.0
        assert calibrate_score(0) == 30.0

    def test_monotone_and_bounded(self):
        previous = -math.inf
        for step in range(0, 201):
            value = calibrate_score(step / 2)
            assert 30.0 <= value <= 95.0
            assert value >= previous
            previous = value

    def test_no_randomness(self):
        assert [calibrate_score(88) for _ in range(20)] == [calibrate_score(88)] * 20


# =============================================================
# TEST: Calibrator
# =============================================================

class TestScoreCalibrator:
    """Test calibrated assessments."""

    def test_inflated_scores_are_compressed_but_qualify(self):
        weights = {name: 1.0 for name in FIVE_CATEGORIES}
        result = calibrate(five_scores(90), weights)

        assert result.overall_score < 90
        assert result.overall_score == pytest.approx(81.7, abs=0.1)
        assert result.is_qualified is True
        assert result.reasoning.startswith("Qualified")
        ResultValidator.assert_valid(assessment=result)

    def test_primary_failure_is_cited_first(self):
        result = calibrate(five_scores(90, domain_knowledge=40))

        assert result.is_qualified is False
        assert result.score_of(Category.DOMAIN_KNOWLEDGE) == 40.0
        assert "primary" in result.reasoning
        assert result.reasoning.index("primary") < result.reasoning.index("minimum")
        assert "domain knowledge" in result.reasoning

    def test_overall_only_failure(self):
        scores = create_test_scores(55.0, domain_knowledge=70, experience_relevance=70)
        result = calibrate(scores)

        assert result.overall_score == pytest.approx(60.7, abs=0.1)
        assert result.is_qualified is False
        assert "primary" not in result.reasoning
        assert "minimum" not in result.reasoning
        assert "overall score" in result.reasoning

    def test_minimum_only_failure(self):
        result = calibrate(create_test_scores(80.0, cultural_fit=45))

        assert result.overall_score == pytest.approx(72.2, abs=0.1)
        assert result.is_qualified is False
        assert "minimum threshold" in result.reasoning
        assert "cultural fit" in result.reasoning
        assert "primary" not in result.reasoning
        assert "overall" not in result.reasoning

    def test_reasoning_format(self):
        result = calibrate(create_test_scores(40.0))
        assert result.reasoning.startswith("Not qualified: ")
        assert result.reasoning.endswith(".")
        assert result.reasoning.count(" and ") >= 2

    def test_missing_primary_category_fails(self):
        scores = create_test_scores(90.0)
        del scores["experience_relevance"]
        result = calibrate(scores)

        assert result.is_qualified is False
        assert "experience relevance missing" in result.reasoning

    def test_empty_scores(self):
        result = calibrate({})
        assert result.scores == {}
        assert result.overall_score == 30.0
        assert result.is_qualified is False

    def test_camel_case_keys(self):
        result = calibrate({"domainKnowledge": 80, "experienceRelevance": 80})
        assert set(result.scores) == {Category.DOMAIN_KNOWLEDGE, Category.EXPERIENCE_RELEVANCE}

    def test_category_score_inputs_keep_explanations(self):
        result = calibrate([
            CategoryScore(Category.DOMAIN_KNOWLEDGE, 90, "Solid fundamentals"),
            CategoryScore(Category.EXPERIENCE_RELEVANCE, 70),
        ])
        item = result.scores[Category.DOMAIN_KNOWLEDGE]
        assert item.raw_score == 90
        assert item.score == 84.5
        assert item.explanation == "Solid fundamentals"

    def test_dict_inputs_keep_explanations(self):
        result = calibrate({"communication": {"score": 80, "explanation": "Clear"}})
        assert result.scores[Category.COMMUNICATION].explanation == "Clear"
        assert result.scores[Category.COMMUNICATION].score == 78.5

    def test_malformed_scores_are_skipped(self):
        result = calibrate({
            "domain_knowledge": None,
            "communication": float("nan"),
            "response_quality": "high",
            "cultural_fit": True,
            "experience_relevance": 80,
        })
        assert result.skipped == (
            Category.DOMAIN_KNOWLEDGE, Category.COMMUNICATION,
            Category.RESPONSE_QUALITY, Category.CULTURAL_FIT,
        )
        assert list(result.scores) == [Category.EXPERIENCE_RELEVANCE]
        assert not math.isnan(result.overall_score)

    def test_out_of_range_scores_are_clamped(self):
        result = calibrate({"experience_relevance": 150, "emotional_intelligence": -5})
        assert result.scores[Category.EXPERIENCE_RELEVANCE].raw_score == 100.0
        assert result.scores[Category.EXPERIENCE_RELEVANCE].score == 87.5
        assert result.scores[Category.EMOTIONAL_INTELLIGENCE].score == 30.0

    def test_unknown_categories_are_ignored(self):
        result = calibrate({"charisma": 99, "communication": 60})
        assert list(result.scores) == [Category.COMMUNICATION]
        assert result.skipped == ()

    def test_weights_shift_overall(self):
        scores = five_scores(60, domain_knowledge=90)
        light = calibrate(scores, {"domain_knowledge": 0.1})
        heavy = calibrate(scores, {"domain_knowledge": 5.0})
        assert heavy.overall_score > light.overall_score

    def test_zero_weights_fall_back_to_equal(self):
        weights = {name: 0 for name in FIVE_CATEGORIES}
        zero = calibrate(five_scores(90), weights)
        assert zero.overall_score == pytest.approx(81.7, abs=0.1)

    @pytest.mark.parametrize("weights", [
        {"communication": -0.1},
        {"communication": "heavy"},
        {"communication": None},
        {"communication": float("inf")},
        {"communication": float("-inf")},
        {"communication": float("nan")},
    ])
    def test_invalid_weights_raise(self, weights):
        with pytest.raises(ValueError):
            calibrate(five_scores(80), weights)

    @pytest.mark.parametrize("weight", [1e308, 1e307])
    def test_oversized_weights_raise_instead_of_nan(self, weight):
        weights = {name: weight for name in FIVE_CATEGORIES}
        with pytest.raises(ValueError):
            calibrate(five_scores(80), weights)

    def test_constructor_weights(self):
        calibrator = ScoreCalibrator(weights={"cultural_fit": 0})
        assert calibrator.weights[Category.CULTURAL_FIT] == 0.0
        assert calibrator.weights[Category.DOMAIN_KNOWLEDGE] == 0.2

    def test_calibration_is_repeatable(self):
        scores = create_test_scores(83.0, cultural_fit=61)
        assert calibrate(scores) == calibrate(scores)


# =============================================================
# TEST: Decision engine
# =============================================================

class TestQualificationDecisionEngine:
    """Test threshold rules on already calibrated scores."""

    def test_exact_thresholds_pass(self):
        engine = QualificationDecisionEngine()
        scores = {
            Category.DOMAIN_KNOWLEDGE: 65.0,
            Category.EXPERIENCE_RELEVANCE: 65.0,
            Category.COMMUNICATION: 50.0,
        }
        qualified, reasoning = engine.decide(scores, 65.0)
        assert qualified is True
        assert reasoning.startswith("Qualified")

    def test_all_failures_in_order(self):
        engine = QualificationDecisionEngine()
        scores = {
            Category.DOMAIN_KNOWLEDGE: 40.0,
            Category.EXPERIENCE_RELEVANCE: 70.0,
        }
        qualified, reasoning = engine.decide(scores, 50.0)
        assert qualified is False
        primary = reasoning.index("primary requirements")
        minimum = reasoning.index("minimum threshold")
        overall = reasoning.index("overall score")
        assert primary < minimum < overall

    def test_custom_primary_categories(self):
        engine = QualificationDecisionEngine(primary_categories=["communication"])
        qualified, _ = engine.decide({Category.COMMUNICATION: 70.0}, 70.0)
        assert qualified is True
