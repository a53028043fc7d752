"""
Token budget allocation across documents.
"""

from .types import BudgetConfig


class BudgetAllocator:
    """Splits the document budget of an LLM call between documents."""

    def __init__(self, budget: BudgetConfig):
        """Initialize allocator with budget configuration."""
        self.budget = budget

    def available_tokens(self) -> int:
        """Tokens left for documents after system, history and response."""
        return self.budget.available_tokens

    def allocate(self, total_docs: int) -> int:
        """
        Compute the per-document token allocation.

        Never below min_tokens_per_doc, even when the sum of allocations
        then exceeds the available budget.
        """
        total_docs = max(1, total_docs)
        tokens_per_doc = self.available_tokens() // total_docs
        return max(self.budget.min_tokens_per_doc, tokens_per_doc)

    def is_over_allocated(self, total_docs: int) -> bool:
        """True when the per-document floor pushes the total past the budget."""
        total_docs = max(1, total_docs)
        return self.allocate(total_docs) * total_docs > self.available_tokens()

    def needs_compression(self, tokens: int, allocated: int) -> bool:
        """Check whether a document exceeds its allocation."""
        return tokens > allocated

    def summary_threshold(self, target_tokens: int) -> float:
        """Share of the target reserved for whole sections."""
        return target_tokens * self.budget.summary_threshold
