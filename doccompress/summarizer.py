"""
Extractive summarization of overflow sections.
"""

import re
from typing import Any, Optional

from .estimators import CharRatioEstimator
from .scoring import FRENCH_POLICY, ScoringPolicy, SectionScorer

UPPERCASE = "A-ZÀ-ÖØ-ÞŒŸ"
SENTENCE_BOUNDARY = re.compile(rf"(?<=[.!?])\s+(?=[{UPPERCASE}])")
TERMINAL_PUNCTUATION = (".", "!", "?")


def split_sentences(text: str) -> list[str]:
    """Split text into candidate sentences, normalizing line endings first."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


class SentenceSummarizer:
    """Keeps the most important sentences of a section within a token budget.

    Sentences come back ordered by importance, not by their position in the
    section.
    """

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        estimator: Optional[Any] = None,
    ):
        """
        Initialize summarizer.

        Args:
            policy: Scoring policy providing sentence rules (default: French)
            estimator: Token estimator (default: CharRatioEstimator)
        """
        self.policy = policy or FRENCH_POLICY
        self.scorer = SectionScorer(self.policy)
        self.estimator = estimator or CharRatioEstimator()

    def candidate_sentences(self, content: str) -> list[str]:
        """Sentences that are long enough, short enough and properly ended."""
        policy = self.policy
        return [
            sentence
            for sentence in split_sentences(content)
            if policy.sentence_min_chars < len(sentence) < policy.sentence_max_chars
            and sentence.endswith(TERMINAL_PUNCTUATION)
        ]

    def summarize(self, content: str, max_tokens: int) -> str:
        """
        Reduce content to its most important sentences.

        Args:
            content: Section text
            max_tokens: Token budget for the summary

        Returns:
            Summary text, or "" if no sentence survives filtering
        """
        if max_tokens <= 0:
            return ""

        sentences = self.candidate_sentences(content)
        if not sentences:
            return ""

        # sorted() is stable, equal scores keep their original order
        ranked = sorted(sentences, key=self.scorer.score_sentence, reverse=True)

        max_chars = max_tokens * 4
        summary = ""
        for sentence in ranked:
            candidate = f"{summary} {sentence}" if summary else sentence
            if (
                self.estimator.estimate_tokens(candidate) <= max_tokens
                and len(candidate) <= max_chars
            ):
                summary = candidate

        if summary and not summary.endswith(TERMINAL_PUNCTUATION):
            summary += "."
        return summary
