"""
Testing helpers: message builders and result validators for the analysis core.
"""
from typing import Dict, List, Optional, Sequence

from .models import (
    AggregateSentiment, BiasReport, CalibratedAssessment, EmotionSample, Message
)
from .schemas import Label, Role


def make_messages(texts: Sequence[str],
                  start_ms: int = 0,
                  step_ms: int = 10_000,
                  with_questions: bool = False) -> List[Message]:
    """
    Build a session of user messages spaced step_ms apart.

    Args:
        texts: Candidate responses in order
        start_ms: Timestamp of the first message
        step_ms: Gap between consecutive messages
        with_questions: Interleave an assistant question before each response

    Returns:
        Messages ordered by timestamp
    """
    messages: List[Message] = []
    timestamp = start_ms
    for idx, text in enumerate(texts):
        if with_questions:
            messages.append(Message(
                id=f"q{idx}", role=Role.ASSISTANT,
                text=f"Question {idx + 1}?", timestamp=timestamp,
            ))
            timestamp += step_ms
        messages.append(Message(id=f"a{idx}", role=Role.USER, text=text, timestamp=timestamp))
        timestamp += step_ms
    return messages


def make_samples(points: Sequence[tuple], step_ms: int = 10_000) -> List[EmotionSample]:
    """Build samples from (label, intensity) pairs spaced step_ms apart."""
    return [
        EmotionSample(message_index=i, timestamp=i * step_ms, label=Label(label), intensity=intensity)
        for i, (label, intensity) in enumerate(points)
    ]


def create_test_conversation_data() -> List[Message]:
    """A short interview with a confident opening and a nervous middle."""
    return make_messages([
        "Hi, I'm excited to be here! I love this kind of work.",
        "Um, sorry, I'm a bit nervous. I'm not sure I understood the question.",
        "I know this area well. I've done this for years and I'm confident in my approach.",
        "For example, I led a migration specifically to reduce latency. What does your team use?",
    ], with_questions=True)


def create_test_scores(value: float = 80.0, **overrides: float) -> Dict[str, float]:
    """Raw scores for all six categories, optionally overriding some."""
    scores = {
        "domain_knowledge": value,
        "communication": value,
        "response_quality": value,
        "experience_relevance": value,
        "cultural_fit": value,
        "emotional_intelligence": value,
    }
    scores.update(overrides)
    return scores


class ResultValidator:
    """Helper for validating analysis results."""

    @staticmethod
    def validate_sentiment(result: AggregateSentiment) -> List[str]:
        """Return a list of problems found (empty if valid)."""
        issues = []
        for name in ("confidence", "enthusiasm", "nervousness", "engagement"):
            value = getattr(result, name)
            if not 0 <= value <= 100:
                issues.append(f"{name} out of range: {value}")
        for sample in result.trajectory:
            if not 0 <= sample.intensity <= 100:
                issues.append(f"Sample {sample.message_index} intensity out of range: {sample.intensity}")
        timestamps = [s.timestamp for s in result.trajectory]
        if timestamps != sorted(timestamps):
            issues.append("Trajectory is not ordered by timestamp")
        return issues

    @staticmethod
    def validate_assessment(result: CalibratedAssessment) -> List[str]:
        issues = []
        for category, item in result.scores.items():
            if not 30.0 <= item.score <= 95.0:
                issues.append(f"{category.value} calibrated score out of range: {item.score}")
        if not 0.0 <= result.overall_score <= 100.0:
            issues.append(f"Overall score out of range: {result.overall_score}")
        if not result.reasoning:
            issues.append("Missing reasoning")
        return issues

    @staticmethod
    def validate_bias(result: BiasReport) -> List[str]:
        issues = []
        if result.fairness_score != 100 - result.bias_score:
            issues.append("Fairness score is not the complement of the bias score")
        if not 0 <= result.bias_score <= 100:
            issues.append(f"Bias score out of range: {result.bias_score}")
        for finding in result.findings:
            if not finding.suggestions:
                issues.append(f"Finding {finding.matched_text!r} has no suggestions")
        return issues

    @classmethod
    def assert_valid(cls, sentiment: Optional[AggregateSentiment] = None,
                     assessment: Optional[CalibratedAssessment] = None,
                     bias: Optional[BiasReport] = None) -> None:
        """Assert results are valid, raising AssertionError if not."""
        issues: List[str] = []
        if sentiment is not None:
            issues += cls.validate_sentiment(sentiment)
        if assessment is not None:
            issues += cls.validate_assessment(assessment)
        if bias is not None:
            issues += cls.validate_bias(bias)
        if issues:
            raise AssertionError(f"Invalid analysis result: {'; '.join(issues)}")
