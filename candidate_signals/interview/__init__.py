"""Candidate signal analysis components.

This module contains the deterministic analysis core: lexical emotion scoring,
trajectory smoothing and shift detection, session sentiment, score calibration
with the qualification decision, and bias scanning.
"""

# Closed vocabularies
from .schemas import (
    Role, Label, SentimentCategory, ShiftType, Category,
    BiasType, Severity, BiasContext, LABEL_CATEGORIES, category_of
)

# Data models
from .models import (
    Message, EmotionSample, Shift, ShiftAnalysis, AggregateSentiment,
    CategoryScore, CalibratedScore, CalibratedAssessment,
    BiasFinding, BiasReport, SessionReport
)

# Scoring and trajectory analysis
from .scoring import LexicalSignalScorer
from .analysis import TrajectoryAnalyzer, build_trajectory, smooth, detect_shifts

# Session sentiment
from .sentiment import (
    SentimentSummarizer, SentimentCache, InMemorySentimentCache,
    summarize_sentiment, cache_key
)

# Calibration and qualification
from .decision_engine import (
    ScoreCalibrator, QualificationDecisionEngine, calibrate, calibrate_score, compress
)

# Fairness
from .bias import BiasScanner, scan_bias

# Orchestration
from .orchestrator import SignalAnalysisOrchestrator, analyze_session

__all__ = [
    # Vocabularies
    "Role", "Label", "SentimentCategory", "ShiftType", "Category",
    "BiasType", "Severity", "BiasContext", "LABEL_CATEGORIES", "category_of",

    # Data models
    "Message", "EmotionSample", "Shift", "ShiftAnalysis", "AggregateSentiment",
    "CategoryScore", "CalibratedScore", "CalibratedAssessment",
    "BiasFinding", "BiasReport", "SessionReport",

    # Trajectory
    "LexicalSignalScorer", "TrajectoryAnalyzer",
    "build_trajectory", "smooth", "detect_shifts",

    # Sentiment
    "SentimentSummarizer", "SentimentCache", "InMemorySentimentCache",
    "summarize_sentiment", "cache_key",

    # Calibration
    "ScoreCalibrator", "QualificationDecisionEngine",
    "calibrate", "calibrate_score", "compress",

    # Fairness
    "BiasScanner", "scan_bias",

    # Orchestration
    "SignalAnalysisOrchestrator", "analyze_session",
]
