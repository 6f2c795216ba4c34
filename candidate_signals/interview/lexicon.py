"""
Weighted lexical tables for emotion scoring.

Each entry maps a label to the literal phrases and regular expressions that
signal it, plus the weight every match contributes. Phrases are matched
case-insensitively on word boundaries; patterns are used as written.
"""
import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple

from .schemas import Label


@dataclass(frozen=True)
class LexiconEntry:
    phrases: Tuple[str, ...]
    patterns: Tuple[Pattern, ...]
    weight: float


def _entry(phrases, patterns, weight: float) -> LexiconEntry:
    compiled = tuple(re.compile(p, re.IGNORECASE | re.MULTILINE) for p in patterns)
    return LexiconEntry(tuple(p.lower() for p in phrases), compiled, weight)


# Per-message signals used for the emotional trajectory
TRAJECTORY_LEXICON: Dict[Label, LexiconEntry] = {
    Label.ENTHUSIASTIC: _entry(
        ["excited", "passionate", "love", "thrilled", "great", "amazing", "excellent"],
        [r"!+", r"\blove (this|that|the)\b"],
        1.2,
    ),
    Label.CONFIDENT: _entry(
        ["certain", "sure", "confident", "definitely", "absolutely",
         "without doubt", "clearly"],
        [r"\bI know\b", r"\bI'm sure\b", r"\bI've done this\b"],
        1.4,
    ),
    Label.ENGAGED: _entry(
        ["interesting", "curious", "fascinating", "tell me more", "intriguing",
         "compelling"],
        [r"\?$", r"\bfor example\b", r"\bspecifically\b", r"\bin my experience\b"],
        1.1,
    ),
    Label.THOUGHTFUL: _entry(
        ["think", "consider", "reflect", "analyze", "evaluate", "assess", "ponder"],
        [r"\bon one hand\b", r"\bon the other hand\b", r"\bhowever\b", r"\btherefore\b"],
        1.0,
    ),
    Label.NEUTRAL: _entry(
        ["okay", "fine", "alright", "understand", "see", "good"],
        [r"\bok\b", r"^(yes|no)$", r"\bmakes sense\b"],
        0.9,
    ),
    Label.UNCERTAIN: _entry(
        ["not sure", "possibly", "perhaps", "might", "maybe", "could be", "I guess"],
        [r"\bif I'm not mistaken\b", r"\bkind of\b", r"\bsort of\b"],
        0.8,
    ),
    Label.NERVOUS: _entry(
        ["sorry", "apologize", "nervous", "worried", "anxiety", "concerned", "stress"],
        [r"\bum+\b", r"\buh+\b", r"\bI'm sorry\b", r"\bI apologize\b"],
        0.7,
    ),
    Label.DEFENSIVE: _entry(
        ["actually", "to be fair", "to be honest", "in fact", "contrary to", "defend"],
        [r"\bI didn't\b", r"\bthat's not\b", r"\bI disagree\b", r"\bI meant\b"],
        0.6,
    ),
    Label.EVASIVE: _entry(
        ["generally", "typically", "usually", "often", "sometimes", "occasionally"],
        [r"\bI'd rather not\b", r"\bcan we move on\b", r"\blet's talk about\b"],
        0.5,
    ),
}


# Session-level signals used for the aggregate sentiment metrics
SENTIMENT_LEXICON: Dict[Label, LexiconEntry] = {
    Label.ENTHUSIASTIC: _entry(
        ["excited", "passionate", "love", "thrilled", "can't wait",
         "looking forward", "eager"],
        [r"!+", r"\bgreat\b", r"\bexcellent\b", r"\bamazing\b"],
        1.2,
    ),
    Label.CONFIDENT: _entry(
        ["certain", "sure", "confident", "definitely", "absolutely", "I know",
         "I've accomplished", "I led", "I achieved"],
        [r"\bI [a-z]+ [a-z]+ experience\b", r"\bmy strength\b", r"\bI succeeded\b"],
        1.5,
    ),
    Label.ENGAGED: _entry(
        ["interesting", "curious", "tell me more", "question", "wonder",
         "understand", "learn about", "research", "explored"],
        [r"\?", r"\bfor example\b", r"\bspecifically\b", r"\bin particular\b"],
        1.3,
    ),
    Label.THOUGHTFUL: _entry(
        ["think", "consider", "perhaps", "maybe", "might", "reflect", "analyze",
         "evaluate"],
        [r"\bon one hand\b", r"\bon the other hand\b", r"\bhowever\b", r"\btherefore\b"],
        1.0,
    ),
    Label.UNCERTAIN: _entry(
        ["not sure", "possibly", "I guess", "kind of", "sort of", "somewhat",
         "I think", "typically"],
        [r"\bmaybe\b", r"\bperhaps\b", r"\bI'm not certain\b", r"\bcould be\b"],
        0.8,  # some uncertainty is normal in interviews
    ),
    Label.NERVOUS: _entry(
        ["sorry", "apologize", "nervous", "worried", "concern", "stress",
         "anxiety", "mistake"],
        [r"\bum+\b", r"\buh+\b", r"\ber+\b", r"\bI apologize\b", r"\bsorry about\b"],
        0.7,
    ),
    Label.DISINTERESTED: _entry(
        ["whatever", "doesn't matter", "I don't know", "not sure why",
         "not interested"],
        [r"\bbasically\b", r"\banyway\b", r"\bnot really\b"],
        0.5,  # prone to false positives
    ),
}
