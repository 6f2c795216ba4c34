"""
Lexical scanning for potentially non-inclusive language.

Each bias type has an ordered term table. Within a table the first term
present in the text is reported, so a scan produces at most one finding per
bias type. Terms match on word boundaries, which keeps short terms such as
"he" or "his" from firing inside "the" or "this".
"""
import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple, Union

from .. import config
from .models import BiasFinding, BiasReport
from .schemas import BiasContext, BiasType, Severity

logger = logging.getLogger("bias_scanner")


# Scanned in this order; order within a table decides which term is reported
BIAS_TERMS: Dict[BiasType, Tuple[str, ...]] = {
    BiasType.GENDER: (
        "he", "him", "his", "she", "her", "hers", "himself", "herself",
        "manpower", "mankind", "businessman", "businesswoman", "chairman",
        "manmade", "salesman", "saleswoman", "strong man", "guys",
    ),
    BiasType.AGE: (
        "young", "fresh", "energetic", "digital native", "recent graduate",
        "junior", "senior", "experienced", "over 5 years", "over 10 years",
    ),
    BiasType.CULTURAL: (
        "culture fit", "cultural fit", "team player", "work hard play hard",
        "fast-paced environment",
    ),
    BiasType.RACIAL: (
        "native english speaker", "native speaker", "no accent", "exotic",
    ),
    # Coded jargon that tends to discourage applicants outside one demographic
    BiasType.OTHER: (
        "rockstar", "ninja", "guru", "superstar", "wizard",
    ),
}

BIAS_SEVERITY: Dict[BiasType, Severity] = {
    BiasType.GENDER: Severity.MEDIUM,
    BiasType.AGE: Severity.MEDIUM,
    BiasType.CULTURAL: Severity.LOW,
    BiasType.RACIAL: Severity.HIGH,
    BiasType.OTHER: Severity.LOW,
}

SUGGESTIONS: Dict[str, Tuple[str, ...]] = {
    # gender
    "he": ("they", "the person", "the individual", "the candidate"),
    "him": ("them", "the person", "the individual", "the candidate"),
    "his": ("their", "the person's", "the individual's", "the candidate's"),
    "she": ("they", "the person", "the individual", "the candidate"),
    "her": ("them", "their", "the person", "the individual", "the candidate"),
    "hers": ("theirs", "the person's", "the individual's", "the candidate's"),
    "himself": ("themselves",),
    "herself": ("themselves",),
    "manpower": ("workforce", "staff", "personnel", "team members"),
    "mankind": ("humanity", "humankind", "people", "human beings"),
    "businessman": ("businessperson", "professional", "executive"),
    "businesswoman": ("businessperson", "professional", "executive"),
    "chairman": ("chairperson", "chair", "leader", "head"),
    "manmade": ("artificial", "synthetic", "manufactured", "constructed"),
    "salesman": ("salesperson", "sales representative", "sales associate"),
    "saleswoman": ("salesperson", "sales representative", "sales associate"),
    "strong man": ("strong person", "physically strong individual", "person with physical strength"),
    "guys": ("everyone", "team", "folks"),
    # age
    "young": ("motivated", "adaptable", "dynamic"),
    "fresh": ("new", "innovative", "creative"),
    "energetic": ("motivated", "dynamic", "enthusiastic"),
    "digital native": ("proficient with digital technology", "experienced with digital tools"),
    "recent graduate": ("early-career professional", "entry-level candidate"),
    "junior": ("early-career", "entry-level", "developing professional"),
    "senior": ("experienced", "advanced", "seasoned professional"),
    "experienced": ("skilled", "knowledgeable", "proficient"),
    "over 5 years": ("significant experience", "established expertise"),
    "over 10 years": ("extensive experience", "comprehensive expertise"),
    # cultural
    "culture fit": ("alignment with company values",),
    "cultural fit": ("alignment with company values",),
    "team player": ("collaborative",),
    "work hard play hard": ("dedicated and social team",),
    "fast-paced environment": ("dynamic environment",),
    # racial
    "native english speaker": ("fluent in English", "professional proficiency in English"),
    "native speaker": ("fluent speaker", "professional proficiency"),
    "no accent": ("clear communicator",),
    # other
    "rockstar": ("top performer", "high achiever", "outstanding contributor"),
    "ninja": ("expert", "specialist", "professional"),
    "guru": ("expert", "specialist", "authority", "leader"),
    "superstar": ("top performer", "high achiever"),
    "wizard": ("expert", "specialist"),
}

FALLBACK_SUGGESTIONS: Dict[BiasType, str] = {
    BiasType.GENDER: "Use gender-neutral language",
    BiasType.AGE: "Use age-neutral language",
    BiasType.CULTURAL: "Describe the specific values or behaviours instead",
    BiasType.RACIAL: "Describe the job-relevant skill instead",
    BiasType.OTHER: "Use a neutral, job-relevant description",
}

CONTEXT_PHRASES: Dict[BiasContext, str] = {
    BiasContext.JOB_DESCRIPTION: "job description",
    BiasContext.INTERVIEW_QUESTION: "interview questions",
    BiasContext.CANDIDATE_EVALUATION: "candidate evaluation",
}

CONTEXT_ADVICE: Dict[BiasContext, str] = {
    BiasContext.JOB_DESCRIPTION: "It could discourage qualified applicants from applying.",
    BiasContext.INTERVIEW_QUESTION: "It could disadvantage some candidates during the interview.",
    BiasContext.CANDIDATE_EVALUATION: "It could reflect criteria unrelated to job performance.",
}


class BiasScanner:
    """Weighted keyword scanner producing a bias and fairness score pair."""

    def __init__(self,
                 terms: Optional[Dict[BiasType, Tuple[str, ...]]] = None,
                 min_text_length: int = config.BIAS_MIN_TEXT_LENGTH):
        self.terms = dict(terms or BIAS_TERMS)
        self.min_text_length = min_text_length
        self._patterns: Dict[BiasType, List[Tuple[str, Pattern]]] = {
            bias_type: [
                (term, re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE))
                for term in table
            ]
            for bias_type, table in self.terms.items()
        }

    def scan(self, text: str,
             context: Optional[Union[BiasContext, str]] = None) -> BiasReport:
        """
        Scan text for potentially biased language.

        Args:
            text: Text to analyze
            context: Where the text is used; changes summary wording only

        Returns:
            BiasReport with at most one finding per bias type
        """
        context = BiasContext.parse(context) if context is not None else BiasContext.JOB_DESCRIPTION
        if not text or len(text.strip()) < self.min_text_length:
            return BiasReport(summary="No text provided for bias detection.")

        findings: List[BiasFinding] = []
        for bias_type in BiasType:
            for term, pattern in self._patterns.get(bias_type, []):
                if pattern.search(text):
                    findings.append(BiasFinding(
                        matched_text=term,
                        type=bias_type,
                        severity=BIAS_SEVERITY.get(bias_type, Severity.LOW),
                        suggestions=self.suggestions_for(term, bias_type),
                    ))
                    logger.debug(f"Found {bias_type.value} term {term!r}")
                    break

        bias_score = self.bias_score(findings)
        report = BiasReport(
            bias_score=bias_score,
            fairness_score=100 - bias_score,
            findings=tuple(findings),
            summary=self._summary(findings, context),
        )
        logger.info(f"Bias scan ({context.value}): {len(findings)} findings, score {bias_score}")
        return report

    @staticmethod
    def suggestions_for(term: str, bias_type: BiasType) -> Tuple[str, ...]:
        curated = SUGGESTIONS.get(term)
        if curated:
            return curated
        return (FALLBACK_SUGGESTIONS.get(bias_type, "Use more inclusive language"),)

    @staticmethod
    def bias_score(findings: List[BiasFinding]) -> int:
        """Points per finding by severity, capped higher when a high-severity finding exists."""
        points = sum(config.BIAS_POINTS[f.severity.value] for f in findings)
        has_high = any(f.severity == Severity.HIGH for f in findings)
        cap = config.BIAS_SCORE_CAP_HIGH if has_high else config.BIAS_SCORE_CAP
        return min(points, cap)

    @staticmethod
    def _summary(findings: List[BiasFinding], context: BiasContext) -> str:
        where = CONTEXT_PHRASES[context]
        if not findings:
            return f"No significant bias detected in the {where}."
        types = " and ".join(dict.fromkeys(f.type.value for f in findings))
        if len(findings) == 1:
            lead = f"The {where} contains some potentially biased language related to {types}."
        else:
            lead = f"The {where} contains several instances of potentially biased language related to {types}."
        return f"{lead} {CONTEXT_ADVICE[context]} Consider more inclusive alternatives."


def scan_bias(text: str, context: Optional[Union[BiasContext, str]] = None) -> BiasReport:
    return BiasScanner().scan(text, context)
