"""Character-ratio token estimator (4 characters ~ 1 token)."""

import math
from typing import Sequence

from ..types import RawDocument

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Estimate tokens as ceil(len(text) / 4)."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class CharRatioEstimator:
    """Token estimator that counts characters instead of tokenizing.

    All budget constants are derived from the 4 characters per token ratio,
    so changing ``chars_per_token`` means re-deriving them too.
    """

    def __init__(self, chars_per_token: int = CHARS_PER_TOKEN):
        """Initialize with the characters-per-token ratio."""
        if chars_per_token < 1:
            raise ValueError("chars_per_token must be >= 1")
        self.chars_per_token = chars_per_token

    def estimate_tokens(self, text: str) -> int:
        """Estimate token count for text."""
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)

    def estimate_documents_tokens(self, documents: Sequence[RawDocument]) -> int:
        """Estimate token count for a sequence of documents."""
        return sum(self.estimate_tokens(doc.content) for doc in documents)
