"""
Composes the independent analysis branches into one session report.
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .analysis import TrajectoryAnalyzer
from .bias import BiasScanner
from .decision_engine import RawScores, ScoreCalibrator
from .models import Message, SessionReport
from .schemas import BiasContext
from .sentiment import SentimentCache, SentimentSummarizer

logger = logging.getLogger("signal_orchestrator")


class SignalAnalysisOrchestrator:
    """Runs the trajectory, sentiment, scoring and fairness branches for a session."""

    def __init__(self,
                 trajectory_analyzer: Optional[TrajectoryAnalyzer] = None,
                 calibrator: Optional[ScoreCalibrator] = None,
                 bias_scanner: Optional[BiasScanner] = None,
                 cache: Optional[SentimentCache] = None):
        self.trajectory_analyzer = trajectory_analyzer or TrajectoryAnalyzer()
        self.summarizer = SentimentSummarizer(
            trajectory_analyzer=self.trajectory_analyzer, cache=cache
        )
        self.calibrator = calibrator or ScoreCalibrator()
        self.bias_scanner = bias_scanner or BiasScanner()

    def run(self,
            messages: Sequence[Message],
            raw_scores: Optional[RawScores] = None,
            weights: Optional[Mapping[Any, float]] = None,
            text: Optional[str] = None,
            context: Optional[Union[BiasContext, str]] = None) -> SessionReport:
        """
        Analyze one session.

        Args:
            messages: Session messages in timestamp order
            raw_scores: Upstream category scores; scoring branch is skipped when None
            weights: Category weight overrides
            text: Text to scan for bias; fairness branch is skipped when None
            context: Where the scanned text is used

        Returns:
            SessionReport
        """
        notes = []
        sentiment = self.summarizer.summarize(messages)
        shifts = self.trajectory_analyzer.detect_shifts(list(sentiment.trajectory))
        if shifts.significant:
            notes.append("Significant emotional shifts detected during the interview.")

        assessment = None
        if raw_scores is not None:
            assessment = self.calibrator.calibrate(raw_scores, weights)
            if assessment.skipped:
                skipped = ", ".join(c.value for c in assessment.skipped)
                notes.append(f"Malformed scores skipped: {skipped}.")

        bias = None
        if text is not None:
            bias = self.bias_scanner.scan(text, context)

        logger.info(f"Session analyzed: {len(sentiment.trajectory)} samples, "
                    f"{len(shifts.shifts)} shifts")
        return SessionReport(
            sentiment=sentiment,
            shifts=shifts,
            assessment=assessment,
            bias=bias,
            notes=notes,
        )


def analyze_session(messages: Sequence[Message],
                    raw_scores: Optional[RawScores] = None,
                    weights: Optional[Mapping[Any, float]] = None,
                    text: Optional[str] = None,
                    context: Optional[Union[BiasContext, str]] = None,
                    cache: Optional[SentimentCache] = None) -> SessionReport:
    return SignalAnalysisOrchestrator(cache=cache).run(
        messages, raw_scores=raw_scores, weights=weights, text=text, context=context
    )
