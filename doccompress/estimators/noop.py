"""No-operation token estimator for testing."""

from typing import Sequence

from ..types import RawDocument


class NoOpEstimator:
    """Token estimator that returns fixed values for testing."""

    def __init__(self, default_tokens: int = 1000):
        """Initialize with default token count."""
        self.default_tokens = default_tokens

    def estimate_tokens(self, text: str) -> int:
        """Always return default tokens."""
        return self.default_tokens

    def estimate_documents_tokens(self, documents: Sequence[RawDocument]) -> int:
        """Return default tokens per document."""
        return len(documents) * self.default_tokens
