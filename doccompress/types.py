"""
Core type definitions for the document compression pipeline.
"""

from dataclasses import dataclass, field
from typing import Literal, Sequence

from .scoring import get_policy


@dataclass
class RawDocument:
    """An extracted document handed over by the upstream extraction step."""

    name: str
    content: str


@dataclass
class CompressedDocument:
    """A document after it has been fitted into its token allocation."""

    name: str
    content: str
    compressed: bool = False
    original_tokens: int = 0
    compressed_tokens: int = 0

    @property
    def reduction_pct(self) -> float:
        """Percentage of tokens removed by compression."""
        if self.original_tokens <= 0:
            return 0.0
        return (self.original_tokens - self.compressed_tokens) / self.original_tokens * 100


@dataclass
class Section:
    """A scored slice of a document, only alive during one compression."""

    content: str
    score: float
    tokens: int
    index: int = 0


@dataclass
class BudgetConfig:
    """Token budget of a single LLM call."""

    max_tokens: int = 128000
    max_system_tokens: int = 2000
    max_history_tokens: int = 3000
    max_response_tokens: int = 4000
    min_tokens_per_doc: int = 5000
    summary_threshold: float = 0.8
    max_section_tokens: int = 2000
    fallback_window_chars: int = 8000

    @property
    def available_tokens(self) -> int:
        """Tokens left for documents once every reservation is taken."""
        return (
            self.max_tokens
            - self.max_system_tokens
            - self.max_history_tokens
            - self.max_response_tokens
        )

    def validate(self) -> None:
        """Validate budget constraints."""
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be > 0")
        for name in ("max_system_tokens", "max_history_tokens", "max_response_tokens"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.available_tokens <= 0:
            raise ValueError(
                "max_tokens must be larger than system + history + response reservations"
            )
        if self.min_tokens_per_doc < 1:
            raise ValueError("min_tokens_per_doc must be >= 1")
        if not (0.0 < self.summary_threshold <= 1.0):
            raise ValueError("summary_threshold must be in range (0.0, 1.0]")
        if self.max_section_tokens < 1:
            raise ValueError("max_section_tokens must be >= 1")
        if self.fallback_window_chars < 1:
            raise ValueError("fallback_window_chars must be >= 1")


@dataclass
class CompressConfig:
    """Complete configuration for the document compressor."""

    budget: BudgetConfig = field(default_factory=BudgetConfig)
    estimator: Literal["chars", "tiktoken"] = "chars"
    model: str = "gpt-4"
    locale: str = "fr"
    use_query_keywords: bool = False
    telemetry_enabled: bool = True

    def validate(self) -> None:
        """Validate configuration."""
        if self.estimator not in ("chars", "tiktoken"):
            raise ValueError("estimator must be 'chars' or 'tiktoken'")
        if not self.model:
            raise ValueError("model must not be empty")
        get_policy(self.locale)
        self.budget.validate()


@dataclass
class CompressionReport:
    """Result of compressing a batch of documents."""

    documents: Sequence[CompressedDocument]
    available_tokens: int = 0
    allocated_tokens_per_doc: int = 0
    total_original_tokens: int = 0
    total_compressed_tokens: int = 0
    over_allocated: bool = False

    @property
    def compressed_count(self) -> int:
        """Number of documents that actually went through compression."""
        return sum(1 for doc in self.documents if doc.compressed)


class CompressError(Exception):
    """Base exception for document compression errors."""

    pass


class ContextTooLargeError(CompressError):
    """Raised when the assembled document context exceeds the budget."""

    def __init__(self, message: str, total_tokens: int = 0, available_tokens: int = 0):
        super().__init__(message)
        self.total_tokens = total_tokens
        self.available_tokens = available_tokens
