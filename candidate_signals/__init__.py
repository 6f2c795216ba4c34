"""
Candidate Signals: deterministic analysis core for interview transcripts.

Derives emotional signals and trajectories from candidate responses, calibrates
category scores into a qualification decision, and scans text for biased language.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.orchestrator import SignalAnalysisOrchestrator, analyze_session
from .interview.models import Message, SessionReport

__all__ = ["SignalAnalysisOrchestrator", "analyze_session", "Message", "SessionReport"]
