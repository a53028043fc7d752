"""
Service Provider Interface (SPI) protocols for pluggable components.
"""

from typing import Any, Optional, Protocol, Sequence

from .types import RawDocument


class TokenEstimator(Protocol):
    """Protocol for token estimation implementations."""

    def estimate_tokens(self, text: str) -> int:
        """Estimate token count for text."""
        ...

    def estimate_documents_tokens(self, documents: Sequence[RawDocument]) -> int:
        """Estimate token count for a sequence of documents."""
        ...


class Scorer(Protocol):
    """Protocol for section scoring strategies."""

    def score(
        self, section: str, priority_keywords: Optional[Sequence[str]] = None
    ) -> float:
        """Return an importance score >= 0 for a section."""
        ...


class Summarizer(Protocol):
    """Protocol for overflow summarization strategies."""

    def summarize(self, content: str, max_tokens: int) -> str:
        """Reduce content to at most max_tokens."""
        ...


class Exporter(Protocol):
    """Protocol for telemetry exporters."""

    def emit_event(
        self,
        event_type: str,
        properties: dict[str, Any],
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Emit a structured event."""
        ...

    def flush(self) -> None:
        """Flush any pending events."""
        ...
