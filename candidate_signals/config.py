"""
Candidate Signals Configuration System
======================================

This file contains ALL configuration for the candidate signal analysis core.
- User settings at the top (things users might want to change)
- Internal constants at the bottom (algorithm tuning defaults)
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Tuple


# =============================================================================
# USER SETTINGS - Edit these to customize the analysis
# =============================================================================

# Qualification thresholds (calibrated 0-100 scale)
PRIMARY_THRESHOLD = 65.0
MINIMUM_THRESHOLD = 50.0
OVERALL_THRESHOLD = 65.0

# Categories that must clear PRIMARY_THRESHOLD
PRIMARY_CATEGORIES: Tuple[str, ...] = ("domain_knowledge", "experience_relevance")

# Relative category weights for the overall score
CATEGORY_WEIGHTS: Dict[str, float] = {
    "domain_knowledge": 0.20,
    "communication": 0.20,
    "response_quality": 0.15,
    "experience_relevance": 0.20,
    "cultural_fit": 0.15,
    "emotional_intelligence": 0.10,
}

# Sentiment result cache (only used when a cache is passed in)
CACHE_TTL_SECONDS = 60 * 60

# Logging
LOG_FILE = "./_signals/analysis.log"
LOG_LEVEL = "INFO"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

# Trajectory building
MIN_SIGNAL_SCORE = 0.5
BASE_INTENSITY = 40
LENGTH_FACTOR_CAP = 20
LENGTH_FACTOR_CHARS = 150
WORD_FACTOR_CAP = 15
WORD_FACTOR_WORDS = 20
SENTENCE_FACTOR_CAP = 10
SIGNAL_FACTOR_CAP = 25
SIGNAL_FACTOR_SCALE = 15
POSITION_FACTOR_PEAK = 20

# Position bands used when no lexical signal is strong enough
# (upper bound of progress, default label)
POSITION_BANDS: Tuple[Tuple[float, str], ...] = (
    (0.25, "neutral"),    # interview start is often neutral
    (0.50, "engaged"),    # getting into the interview
    (0.75, "confident"),  # deeper into questions
    (1.01, "thoughtful"),  # wrapping up
)

# Smoothing
OUTLIER_INTENSITY_DELTA = 30

# Shift detection
SHIFT_INTENSITY_DELTA = 20
SHIFT_MAX_GAP_SECONDS = 600
SIGNIFICANT_NEGATIVE_DELTA = 30
SIGNIFICANT_SHIFT_COUNT = 2

# Aggregate sentiment
OVERALL_RATIO_THRESHOLD = 0.6
# (average characters per response, bonus multiplier of the engaged weight)
LENGTH_BONUS_TIERS: Tuple[Tuple[int, int], ...] = ((500, 3), (300, 2), (100, 1))
# (average words per response, bonus multiplier of the engaged weight)
WORD_BONUS_TIERS: Tuple[Tuple[int, int], ...] = ((100, 3), (50, 2), (25, 1))

# Calibration tiers: (lower bound, compression factor, extra offset)
CALIBRATION_TIERS: Tuple[Tuple[float, float, float], ...] = (
    (85.0, 0.70, 2.0),
    (75.0, 0.30, 0.0),
    (65.0, 0.15, 0.0),
)
CALIBRATED_FLOOR = 30.0
CALIBRATED_CEILING = 95.0

# Bias scanning
BIAS_MIN_TEXT_LENGTH = 10
BIAS_POINTS = {"low": 25, "medium": 25, "high": 30}
BIAS_SCORE_CAP = 80
BIAS_SCORE_CAP_HIGH = 90


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class AnalysisConfig:
    """Main configuration object."""
    primary_threshold: float = PRIMARY_THRESHOLD
    minimum_threshold: float = MINIMUM_THRESHOLD
    overall_threshold: float = OVERALL_THRESHOLD
    primary_categories: Tuple[str, ...] = PRIMARY_CATEGORIES
    category_weights: Dict[str, float] = field(default_factory=lambda: dict(CATEGORY_WEIGHTS))
    min_signal_score: float = MIN_SIGNAL_SCORE
    shift_intensity_delta: float = SHIFT_INTENSITY_DELTA
    shift_max_gap_seconds: float = SHIFT_MAX_GAP_SECONDS
    cache_ttl_seconds: float = CACHE_TTL_SECONDS
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ValueError: If a threshold or weight is out of range
        """
        for name in ("primary_threshold", "minimum_threshold", "overall_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"{name} must be within 0-100, got {value}")
        for category, weight in self.category_weights.items():
            if weight < 0:
                raise ValueError(f"Weight for {category} must not be negative, got {weight}")
        if self.cache_ttl_seconds < 0:
            raise ValueError(f"Cache TTL must not be negative, got {self.cache_ttl_seconds}")


def get_config() -> AnalysisConfig:
    """Load configuration, applying environment overrides."""
    log_file = os.getenv("CANDIDATE_SIGNALS_LOG_FILE") or LOG_FILE
    log_level = (os.getenv("CANDIDATE_SIGNALS_LOG_LEVEL") or LOG_LEVEL).upper()
    ttl_raw = os.getenv("CANDIDATE_SIGNALS_CACHE_TTL")

    try:
        cache_ttl = float(ttl_raw) if ttl_raw else CACHE_TTL_SECONDS
    except ValueError:
        raise ValueError(f"CANDIDATE_SIGNALS_CACHE_TTL must be a number, got {ttl_raw!r}")

    config = AnalysisConfig(
        cache_ttl_seconds=cache_ttl,
        log_file=log_file,
        log_level=log_level,
    )
    config.validate()
    return config
