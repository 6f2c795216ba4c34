"""
Data models for the signal analysis core.
"""
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, List, Tuple, Any

from .schemas import (
    Role, Label, ShiftType, SentimentCategory, Category,
    BiasType, Severity,
)


@dataclass(frozen=True)
class Message:
    """A single chat message from an interview session."""
    id: str
    role: Role
    text: str
    timestamp: int  # milliseconds, monotonic within a session

    @property
    def is_user(self) -> bool:
        return self.role == Role.USER

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "Message":
        """
        Build a message from a JSON-style dictionary.

        Args:
            data: Dictionary with role, text (or content) and timestamp
            index: Position in the session, used when no id is given

        Returns:
            Message instance

        Raises:
            ValueError: If the role is unknown or the timestamp is missing
        """
        try:
            role = Role(str(data.get("role", "")).lower())
        except ValueError:
            raise ValueError(f"Unknown message role: {data.get('role')!r}")

        timestamp = data.get("timestamp")
        if timestamp is None:
            raise ValueError(f"Message {index} has no timestamp")

        text = data.get("text")
        if text is None:
            text = data.get("content", "")

        return cls(
            id=str(data.get("id") or f"msg-{index}"),
            role=role,
            text=str(text),
            timestamp=int(timestamp),
        )


@dataclass
class EmotionSample:
    """Emotion label and intensity for one user message."""
    message_index: int
    timestamp: int
    label: Label
    intensity: float


@dataclass(frozen=True)
class Shift:
    """A significant transition between two adjacent samples."""
    from_sample: EmotionSample
    to_sample: EmotionSample
    type: ShiftType
    timestamp: int

    @property
    def intensity_delta(self) -> float:
        return self.to_sample.intensity - self.from_sample.intensity


@dataclass(frozen=True)
class ShiftAnalysis:
    shifts: Tuple[Shift, ...] = ()
    significant: bool = False


@dataclass(frozen=True)
class AggregateSentiment:
    """Session-level sentiment metrics."""
    overall: SentimentCategory = SentimentCategory.NEUTRAL
    confidence: int = 50
    enthusiasm: int = 50
    nervousness: int = 50
    engagement: int = 50
    trajectory: Tuple[EmotionSample, ...] = ()


@dataclass(frozen=True)
class CategoryScore:
    """Raw score produced by an upstream scorer for one category."""
    category: Category
    raw_score: Optional[float]
    explanation: str = ""


@dataclass(frozen=True)
class CalibratedScore:
    category: Category
    raw_score: float
    score: float
    explanation: str = ""


@dataclass(frozen=True)
class CalibratedAssessment:
    """Calibrated scores and the qualification decision derived from them."""
    scores: Dict[Category, CalibratedScore]
    overall_score: float
    is_qualified: bool
    reasoning: str
    skipped: Tuple[Category, ...] = ()

    def score_of(self, category: Category) -> Optional[float]:
        """Get the calibrated score for a category, if present."""
        item = self.scores.get(category)
        return item.score if item else None


@dataclass(frozen=True)
class BiasFinding:
    """One detected instance of potentially non-inclusive language."""
    matched_text: str
    type: BiasType
    severity: Severity
    suggestions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BiasReport:
    bias_score: int = 0  # 0-100, lower is better
    fairness_score: int = 100
    findings: Tuple[BiasFinding, ...] = ()
    summary: str = ""

    def suggestions(self) -> List[str]:
        """All suggestions across findings, de-duplicated, in order."""
        merged: List[str] = []
        for finding in self.findings:
            for suggestion in finding.suggestions:
                if suggestion not in merged:
                    merged.append(suggestion)
        return merged


@dataclass(frozen=True)
class SessionReport:
    """Composed output of every analysis branch for one session."""
    sentiment: AggregateSentiment
    shifts: ShiftAnalysis
    assessment: Optional[CalibratedAssessment] = None
    bias: Optional[BiasReport] = None
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary form, ready for json.dumps."""
        data = asdict(self)
        if self.assessment is not None:
            # asdict keeps enum keys; JSON needs strings
            data["assessment"]["scores"] = {
                category.value: asdict(item)
                for category, item in self.assessment.scores.items()
            }
        return data
