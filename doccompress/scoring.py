"""
Section scoring policies.

Weights and keyword lists live in a ScoringPolicy so that other locales or
domains only need a new policy, not new code.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence

HEADING_PATTERN = re.compile(r"^#{1,3}\s")
BULLET_PATTERN = re.compile(r"^\s*[-*]\s", re.MULTILINE)
DIGITS_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ScoringPolicy:
    """Weights and keyword lists for section and sentence scoring."""

    name: str = "fr"

    # Section rules
    base: float = 1.0
    heading_bonus: float = 3.0
    priority_keyword_bonus: float = 5.0
    table_bonus: float = 2.0
    table_min_fields: int = 3
    list_bonus: float = 1.0
    numeric_bonus: float = 2.0
    numeric_min_count: int = 2
    keyword_bonus: float = 2.0
    keywords: tuple[str, ...] = (
        "conclusion",
        "résumé",
        "important",
        "critique",
        "essentiel",
        "recommandation",
        "résultat",
        "analyse",
        "synthèse",
        "objectif",
        "problème",
        "solution",
        "décision",
        "action",
        "priorité",
    )
    short_length: int = 100
    short_penalty: float = 0.5

    # Sentence rules (used by the summarizer)
    sentence_keywords: tuple[str, ...] = (
        "doit",
        "devrait",
        "important",
        "nécessaire",
        "résultat",
        "conclusion",
    )
    sentence_min_chars: int = 20
    sentence_max_chars: int = 500
    sentence_ideal_min: int = 50
    sentence_ideal_max: int = 200


FRENCH_POLICY = ScoringPolicy()

ENGLISH_POLICY = replace(
    FRENCH_POLICY,
    name="en",
    keywords=(
        "conclusion",
        "summary",
        "important",
        "critical",
        "essential",
        "recommendation",
        "result",
        "analysis",
        "synthesis",
        "objective",
        "problem",
        "solution",
        "decision",
        "action",
        "priority",
    ),
    sentence_keywords=(
        "must",
        "should",
        "important",
        "necessary",
        "result",
        "conclusion",
    ),
)

POLICIES = {
    FRENCH_POLICY.name: FRENCH_POLICY,
    ENGLISH_POLICY.name: ENGLISH_POLICY,
}


def get_policy(name: str) -> ScoringPolicy:
    """Look up a registered scoring policy by locale name."""
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown scoring policy: {name!r} (known: {', '.join(sorted(POLICIES))})"
        ) from None


class SectionScorer:
    """Scores sections with structural and lexical heuristics."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        """Initialize scorer with a policy (default: French)."""
        self.policy = policy or FRENCH_POLICY

    def score(
        self, section: str, priority_keywords: Optional[Sequence[str]] = None
    ) -> float:
        """
        Compute the importance of a section.

        Rules are additive from the policy base, then sections shorter than
        short_length are multiplied by short_penalty.

        Args:
            section: Section text
            priority_keywords: Caller terms that boost matching sections

        Returns:
            Score >= 0
        """
        policy = self.policy
        lowered = section.lower()
        score = policy.base

        if HEADING_PATTERN.match(section):
            score += policy.heading_bonus

        if priority_keywords:
            for keyword in priority_keywords:
                keyword = keyword.strip().lower()
                if keyword and keyword in lowered:
                    score += policy.priority_keyword_bonus

        if "|" in section and len(section.split("|")) > policy.table_min_fields:
            score += policy.table_bonus

        if BULLET_PATTERN.search(section):
            score += policy.list_bonus

        if len(DIGITS_PATTERN.findall(section)) > policy.numeric_min_count:
            score += policy.numeric_bonus

        for keyword in policy.keywords:
            if keyword in lowered:
                score += policy.keyword_bonus

        if len(section) < policy.short_length:
            score *= policy.short_penalty

        return max(0.0, score)

    def score_sentence(self, sentence: str) -> float:
        """Compute the importance of a single sentence."""
        policy = self.policy
        lowered = sentence.lower()
        score = policy.base

        if DIGITS_PATTERN.search(sentence):
            score += 1
        if policy.sentence_ideal_min < len(sentence) < policy.sentence_ideal_max:
            score += 1
        for keyword in policy.sentence_keywords:
            if keyword in lowered:
                score += 1

        return score


def score_section(section: str, priority_keywords: Optional[Sequence[str]] = None) -> float:
    """Score a section with the default French policy."""
    return SectionScorer(FRENCH_POLICY).score(section, priority_keywords)
