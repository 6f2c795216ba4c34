"""
Closed vocabularies shared by every analysis component.

Every scorer, the trajectory analyzer and the shift detector read labels and
their sentiment categories from here so the vocabularies cannot drift apart.
"""
from enum import Enum
from typing import Dict


class Role(str, Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Label(str, Enum):
    """Emotion labels, declared in canonical order.

    The declaration order is the tie-break order: when two labels score the
    same for a message, the one declared first wins.
    """
    ENTHUSIASTIC = "enthusiastic"
    CONFIDENT = "confident"
    ENGAGED = "engaged"
    THOUGHTFUL = "thoughtful"
    NEUTRAL = "neutral"
    UNCERTAIN = "uncertain"
    NERVOUS = "nervous"
    DISINTERESTED = "disinterested"
    DEFENSIVE = "defensive"
    EVASIVE = "evasive"


class SentimentCategory(str, Enum):
    """Polarity bucket a label belongs to."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ShiftType(str, Enum):
    """Direction of an emotional shift between two samples."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


LABEL_CATEGORIES: Dict[Label, SentimentCategory] = {
    Label.ENTHUSIASTIC: SentimentCategory.POSITIVE,
    Label.CONFIDENT: SentimentCategory.POSITIVE,
    Label.ENGAGED: SentimentCategory.POSITIVE,
    Label.THOUGHTFUL: SentimentCategory.NEUTRAL,
    Label.NEUTRAL: SentimentCategory.NEUTRAL,
    Label.UNCERTAIN: SentimentCategory.NEGATIVE,
    Label.NERVOUS: SentimentCategory.NEGATIVE,
    Label.DISINTERESTED: SentimentCategory.NEGATIVE,
    Label.DEFENSIVE: SentimentCategory.NEGATIVE,
    Label.EVASIVE: SentimentCategory.NEGATIVE,
}


def category_of(label: Label) -> SentimentCategory:
    """Get the sentiment category for a label."""
    return LABEL_CATEGORIES[label]


class Category(str, Enum):
    """Assessment categories an upstream scorer rates from 0 to 100."""
    DOMAIN_KNOWLEDGE = "domain_knowledge"
    COMMUNICATION = "communication"
    RESPONSE_QUALITY = "response_quality"
    EXPERIENCE_RELEVANCE = "experience_relevance"
    CULTURAL_FIT = "cultural_fit"
    EMOTIONAL_INTELLIGENCE = "emotional_intelligence"

    @classmethod
    def parse(cls, name) -> "Category":
        """
        Resolve a category from a member, its value, or a camelCase alias.

        Raises:
            ValueError: If the name matches no category
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        if key in _CATEGORY_ALIASES:
            return _CATEGORY_ALIASES[key]
        return cls(key.lower())


_CATEGORY_ALIASES: Dict[str, Category] = {
    "domainKnowledge": Category.DOMAIN_KNOWLEDGE,
    "communication": Category.COMMUNICATION,
    "responseQuality": Category.RESPONSE_QUALITY,
    "experienceRelevance": Category.EXPERIENCE_RELEVANCE,
    "culturalFit": Category.CULTURAL_FIT,
    "emotionalIntelligence": Category.EMOTIONAL_INTELLIGENCE,
}


class BiasType(str, Enum):
    """Kinds of potentially non-inclusive language."""
    GENDER = "gender"
    AGE = "age"
    CULTURAL = "cultural"
    RACIAL = "racial"
    OTHER = "other"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BiasContext(str, Enum):
    """Where the scanned text is used. Only affects summary wording."""
    JOB_DESCRIPTION = "job_description"
    INTERVIEW_QUESTION = "interview_question"
    CANDIDATE_EVALUATION = "candidate_evaluation"

    @classmethod
    def parse(cls, name) -> "BiasContext":
        """
        Resolve a context from a member, its value, or a camelCase alias.

        Raises:
            ValueError: If the name matches no context
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        if key in _BIAS_CONTEXT_ALIASES:
            return _BIAS_CONTEXT_ALIASES[key]
        return cls(key.lower())


_BIAS_CONTEXT_ALIASES: Dict[str, BiasContext] = {
    "jobDescription": BiasContext.JOB_DESCRIPTION,
    "questions": BiasContext.INTERVIEW_QUESTION,
    "interviewQuestion": BiasContext.INTERVIEW_QUESTION,
    "analysis": BiasContext.CANDIDATE_EVALUATION,
    "candidateEvaluation": BiasContext.CANDIDATE_EVALUATION,
}
